"""Headless-browser page rendering via Playwright."""

import logging
from typing import Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from docrag.core.errors import RenderError

logger = logging.getLogger(__name__)


class PageRenderer(Protocol):
    """Renders a URL to its post-script HTML."""

    async def render(self, url: str) -> str:
        """Return the rendered HTML of ``url``.

        Raises:
            RenderError: If the page could not be rendered.
        """
        ...


class PlaywrightRenderer:
    """Renders pages in a fresh headless Chromium per call.

    Every call launches its own browser and closes it before returning,
    whether navigation succeeded or not, so at most one browser is alive
    per in-flight render.
    """

    def __init__(self, timeout: float = 60.0, launch_args: list[str] | None = None):
        """Initialize the renderer.

        Args:
            timeout: Navigation timeout in seconds.
            launch_args: Extra Chromium command-line flags.
        """
        self.timeout = timeout
        self.launch_args = launch_args if launch_args is not None else ["--no-sandbox"]

    async def render(self, url: str) -> str:
        logger.info("Rendering: %s", url)
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=True, args=self.launch_args
                )
                try:
                    page = await browser.new_page()
                    await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=self.timeout * 1000,
                    )
                    html = await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.warning("Render failed for %s: %s", url, e)
            raise RenderError(url, str(e)) from e

        logger.debug("Rendered %s (%d chars)", url, len(html))
        return html
