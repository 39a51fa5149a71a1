"""PDF generator: content intake, rendering, and multi-page composition."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Self, Sequence

from pdfgenerator import merger
from pdfgenerator.config import settings
from pdfgenerator.errors import PdfGeneratorError
from pdfgenerator.models import Document, PageSpec, RenderOptions
from pdfgenerator.renderer import PlaywrightRenderer, Renderer, RenderError
from pdfgenerator.stream import PdfStream, remove_quietly, temp_file_name

logger = logging.getLogger(__name__)


class FileReadError(PdfGeneratorError):
    """Error raised when an HTML file cannot be read."""

    def __init__(self, path: Path | str, message: str):
        super().__init__(message)
        self.path = Path(path)


class MultiPageRenderError(PdfGeneratorError):
    """Error raised when any step of a multi-page render fails."""

    def __init__(self, message: str, cause: Exception, page_number: int | None = None):
        super().__init__(message)
        self.cause = cause
        self.page_number = page_number  # None when composing the pages failed


def default_params() -> dict[str, Any]:
    return {"pageNumber": 1}


async def _render(
    document: Document,
    params: Any,
    renderer: Renderer | None,
    path: Path | None = None,
) -> bytes:
    renderer = renderer or PlaywrightRenderer()
    if params is None:
        params = default_params()

    try:
        async with renderer.session() as session:
            await session.inject(params)
            await session.load(document.content)
            pdf = await session.pdf(document.render_options, path=path)
    except Exception as e:
        logger.error("PDF rendering failed: %s", e)
        raise RenderError(f"Generate PDF error: {e}") from e

    logger.info("Rendered PDF (%d bytes)", len(pdf))
    return pdf


async def render_pdf(
    document: Document,
    params: Any = None,
    *,
    renderer: Renderer | None = None,
) -> bytes:
    """
    Render a document snapshot to PDF bytes.

    Args:
        document: Content and render options to print.
        params: Exposed to page scripts as window.PDFGeneratorData before
            the content loads. Defaults to {"pageNumber": 1}.
        renderer: Rendering engine; a fresh PlaywrightRenderer if omitted.

    Returns:
        The PDF document.

    Raises:
        RenderError: If any rendering stage fails.
    """
    return await _render(document, params, renderer)


async def render_pdf_to_file(
    document: Document,
    path: Path | str,
    params: Any = None,
    *,
    renderer: Renderer | None = None,
) -> Path:
    """
    Render a document snapshot straight into a PDF file.

    Raises:
        RenderError: If any rendering stage fails.
    """
    path = Path(path)
    await _render(document, params, renderer, path=path)
    return path


class PdfGenerator:
    """
    Builds PDFs from HTML content or files.

    Holds the content and render options for the next render. Nothing
    serializes calls on one instance: use one generator per request, or
    await each call before starting the next.

    Usage:
        generator = PdfGenerator()
        pdf = await generator.from_content("<h1>Hello</h1>").generate_pdf()

        pdf = await generator.generate_multi_page_pdf([
            {"template_path": "cover.html"},
            {"content": "<p>Body</p>", "params": {"title": "Report"}},
        ])
    """

    def __init__(
        self,
        format: str | None = None,
        *,
        renderer: Renderer | None = None,
        temp_dir: Path | str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            format: Default page format. Defaults to settings.default_format.
            renderer: Rendering engine shared by every render of this
                generator. Defaults to PlaywrightRenderer.
            temp_dir: Directory for streamed PDFs. Defaults to settings.temp_dir.
        """
        self._content = ""
        self._render_options = RenderOptions(format=format or settings.default_format)
        self._renderer = renderer or PlaywrightRenderer()
        self._temp_dir = Path(temp_dir) if temp_dir is not None else settings.temp_dir

    @property
    def content(self) -> str:
        return self._content

    @property
    def render_options(self) -> RenderOptions:
        return self._render_options

    def snapshot(self) -> Document:
        """The current content and render options as one immutable value."""
        return Document(content=self._content, render_options=self._render_options)

    def set_render_options(self, options: RenderOptions | Mapping[str, Any] | None) -> Self:
        """Replace the render options. Previous options are discarded, not merged."""
        if options is None:
            options = RenderOptions()
        elif not isinstance(options, RenderOptions):
            options = RenderOptions.model_validate(options)
        self._render_options = options
        return self

    def from_content(self, html: str) -> Self:
        """Use an HTML string as the content for the next render."""
        self._content = html
        return self

    async def from_file(self, path: Path | str) -> Self:
        """
        Read an HTML file (UTF-8) as the content for the next render.

        Raises:
            FileReadError: If the file is missing or unreadable.
        """
        try:
            content = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            raise FileReadError(path, f'Error reading file at path: "{path}": {e}') from e

        self._content = content
        logger.debug("Loaded %d characters from %s", len(content), path)
        return self

    async def generate_pdf(self, params: Any = None) -> bytes:
        """
        Render the current content to PDF bytes.

        Suited to small documents; use generate_pdf_stream for large ones.

        Args:
            params: Exposed to page scripts as window.PDFGeneratorData.
                Defaults to {"pageNumber": 1}.

        Raises:
            RenderError: If rendering fails.
        """
        return await render_pdf(self.snapshot(), params, renderer=self._renderer)

    async def generate_pdf_stream(self, params: Any = None) -> PdfStream:
        """
        Render the current content into a temporary file and stream it.

        The file is deleted when the returned stream is closed.

        Raises:
            RenderError: If rendering fails or the stream cannot be opened.
        """
        document = self.snapshot()
        path = self._temp_dir / temp_file_name()

        try:
            await asyncio.to_thread(self._temp_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create temp directory %s: %s", self._temp_dir, e)
            raise RenderError(f"Could not create temp directory {self._temp_dir}: {e}") from e

        try:
            await render_pdf_to_file(document, path, params, renderer=self._renderer)
            stream = PdfStream(path)
        except OSError as e:
            remove_quietly(path)
            logger.error("Failed to open PDF stream for %s: %s", path, e)
            raise RenderError(f"Could not open PDF stream: {e}") from e
        except BaseException:
            # Render errors and cancellation alike
            remove_quietly(path)
            raise

        logger.debug("Streaming %s", path)
        return stream

    async def generate_multi_page_pdf(
        self,
        pages: Iterable[PageSpec | Mapping[str, Any]],
    ) -> bytes:
        """
        Render one PDF per page spec, in order, and merge them.

        Each page sees {"pageNumber": <1-based index>} merged with its own
        params (its own keys win). Pages render one after another because
        they share this generator's content and options.

        Raises:
            MultiPageRenderError: Wrapping the first failure; no partial PDF.
        """
        buffers: list[bytes] = []
        page_number: int | None = None

        try:
            for page_number, page in enumerate(pages, start=1):
                spec = PageSpec.model_validate(page)

                if spec.template_path is not None:
                    await self.from_file(spec.template_path)
                elif spec.content:
                    self._content = spec.content

                self.set_render_options(spec.render_options)
                buffers.append(await self.generate_pdf({"pageNumber": page_number, **spec.params}))
                logger.debug("Rendered page %d", page_number)

            page_number = None
            merged = self.merge_pdfs(buffers)

        except Exception as e:
            where = f"page {page_number}" if page_number is not None else "merge"
            logger.error("Multi-page PDF failed at %s: %s", where, e)
            raise MultiPageRenderError(
                f"Generate multi-page PDF error at {where}: {e}",
                cause=e,
                page_number=page_number,
            ) from e

        logger.info("Generated multi-page PDF from %d page specs", len(buffers))
        return merged

    def merge_pdfs(self, buffers: Sequence[bytes]) -> bytes:
        """
        Combine PDF documents into one, keeping list and page order.

        Raises:
            MergeError: If buffers is empty or holds something that is not a PDF.
        """
        return merger.merge_pdfs(buffers)
