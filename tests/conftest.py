"""Shared fixtures: a browser-free renderer that produces real PDFs."""

import re
from contextlib import asynccontextmanager
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from pdfgenerator import PdfGenerator


def build_pdf(*page_texts: str) -> bytes:
    """Create a PDF with one page per text."""
    output = BytesIO()
    c = canvas.Canvas(output, pagesize=A4)
    width, height = A4
    for text in page_texts or ("",):
        c.setFont("Helvetica", 14)
        c.drawString(50, height - 50, text)
        c.showPage()
    c.save()
    return output.getvalue()


def read_page_texts(pdf: bytes) -> list[str]:
    return [(page.extract_text() or "").strip() for page in PdfReader(BytesIO(pdf)).pages]


class FakeSession:
    """Renders the visible text of the loaded HTML; one page per <section>."""

    def __init__(self, renderer: "FakeRenderer"):
        self._renderer = renderer
        self._html = ""

    async def inject(self, params) -> None:
        self._renderer.fail_if("inject")
        self._renderer.calls.append("inject")
        self._renderer.injected.append(params)

    async def load(self, html: str) -> None:
        self._renderer.fail_if("load")
        self._renderer.calls.append("load")
        self._renderer.loaded.append(html)
        self._html = html

    async def pdf(self, options, path=None) -> bytes:
        self._renderer.fail_if("pdf")
        self._renderer.calls.append("pdf")
        self._renderer.options.append(options)

        sections = re.findall(r"<section>(.*?)</section>", self._html, re.S) or [self._html]
        pdf = build_pdf(*(re.sub(r"<[^>]+>", "", s).strip() for s in sections))
        if path is not None:
            Path(path).write_bytes(pdf)
        self._renderer.fail_if("after_write")
        return pdf


class FakeRenderer:
    """Records every session and call; fail_at makes one stage raise."""

    def __init__(
        self,
        fail_at: str | None = None,
        fail_on_session: int | None = None,
        error: type[BaseException] = RuntimeError,
    ):
        self.fail_at = fail_at
        self.fail_on_session = fail_on_session
        self.error = error
        self.calls: list[str] = []
        self.injected: list = []
        self.loaded: list[str] = []
        self.options: list = []
        self.opened = 0
        self.released = 0

    def fail_if(self, stage: str) -> None:
        if stage != self.fail_at:
            return
        if self.fail_on_session is None or self.fail_on_session == self.opened:
            raise self.error(f"engine failed during {stage}")

    @asynccontextmanager
    async def session(self):
        self.opened += 1
        self.fail_if("launch")
        try:
            yield FakeSession(self)
        finally:
            self.released += 1


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def failing_generator(tmp_path: Path):
    """Build a generator whose renderer raises at the given stage."""

    def _make(
        stage: str,
        on_session: int | None = None,
        error: type[BaseException] = RuntimeError,
    ) -> PdfGenerator:
        renderer = FakeRenderer(fail_at=stage, fail_on_session=on_session, error=error)
        return PdfGenerator(renderer=renderer, temp_dir=tmp_path / "temp")

    return _make


@pytest.fixture
def generator(fake_renderer: FakeRenderer, tmp_path: Path) -> PdfGenerator:
    return PdfGenerator(renderer=fake_renderer, temp_dir=tmp_path / "temp")


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def page_texts():
    return read_page_texts
