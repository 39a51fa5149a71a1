"""HTML to PDF rendering engine using Playwright."""

import logging
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Protocol

from playwright.async_api import Page, async_playwright

from pdfgenerator.config import settings
from pdfgenerator.errors import PdfGeneratorError
from pdfgenerator.models import RenderOptions

logger = logging.getLogger(__name__)

# Global the page scripts read their render-time parameters from
PARAMS_GLOBAL = "PDFGeneratorData"


class RenderError(PdfGeneratorError):
    """Error raised when the rendering engine fails at any stage."""

    pass


class RenderSession(Protocol):
    """One open page in the rendering engine."""

    async def inject(self, params: Any) -> None: ...

    async def load(self, html: str) -> None: ...

    async def pdf(self, options: RenderOptions, path: Path | None = None) -> bytes: ...


class Renderer(Protocol):
    """Something that can hand out rendering sessions."""

    def session(self) -> AbstractAsyncContextManager[RenderSession]: ...


class PlaywrightSession:
    """A Chromium page driven through Playwright."""

    def __init__(self, page: Page, *, timeout_ms: int, wait_until: str):
        self._page = page
        self._timeout_ms = timeout_ms
        self._wait_until = wait_until

    async def inject(self, params: Any) -> None:
        """Expose params to page scripts as window.PDFGeneratorData."""
        await self._page.evaluate(
            f"(data) => {{ window.{PARAMS_GLOBAL} = data || {{}}; }}",
            params,
        )

    async def load(self, html: str) -> None:
        await self._page.set_content(
            html,
            timeout=self._timeout_ms,
            wait_until=self._wait_until,
        )

    async def pdf(self, options: RenderOptions, path: Path | None = None) -> bytes:
        kwargs = options.to_pdf_kwargs()
        if path is not None:
            kwargs["path"] = str(path)
        return await self._page.pdf(**kwargs)


class PlaywrightRenderer:
    """
    Renders HTML through headless Chromium.

    Every call to session() launches its own browser and closes it on
    exit, so nothing is shared between renders.

    Usage:
        async with PlaywrightRenderer().session() as session:
            await session.inject({"pageNumber": 1})
            await session.load("<h1>Hello</h1>")
            pdf_bytes = await session.pdf(RenderOptions(format="A4"))
    """

    def __init__(
        self,
        *,
        headless: bool | None = None,
        timeout_ms: int | None = None,
        wait_until: str | None = None,
        browser_args: list[str] | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            headless: Run Chromium without a window. Defaults to settings.
            timeout_ms: Timeout in milliseconds for loading content.
            wait_until: Load state to wait for before printing.
            browser_args: Extra Chromium command line switches.
        """
        self._headless = settings.headless if headless is None else headless
        self._timeout_ms = settings.timeout_ms if timeout_ms is None else timeout_ms
        self._wait_until = wait_until or settings.wait_until
        self._browser_args = list(settings.browser_args if browser_args is None else browser_args)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[PlaywrightSession]:
        """Launch a browser, open a page, and close both on exit."""
        async with async_playwright() as playwright:
            logger.debug("Starting Playwright browser...")
            browser = await playwright.chromium.launch(
                headless=self._headless,
                args=self._browser_args,
            )
            try:
                page = await browser.new_page()
                yield PlaywrightSession(
                    page,
                    timeout_ms=self._timeout_ms,
                    wait_until=self._wait_until,
                )
            finally:
                await browser.close()
                logger.debug("Playwright browser closed")
