"""Tests for the Playwright renderer's browser lifecycle."""

import pytest
from playwright.async_api import Error as PlaywrightError

from docrag.core import renderer as renderer_module
from docrag.core.errors import RenderError
from docrag.core.renderer import PlaywrightRenderer


class FakePage:
    def __init__(self, fail: bool):
        self.fail = fail
        self.goto_kwargs: dict = {}

    async def goto(self, url, **kwargs):
        self.goto_kwargs = kwargs
        if self.fail:
            raise PlaywrightError("Timeout 60000ms exceeded.")

    async def content(self):
        return "<html><body>rendered</body></html>"


class FakeBrowser:
    def __init__(self, fail: bool):
        self.page = FakePage(fail)
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, fail_navigation: bool, fail_launch: bool):
        self.fail_navigation = fail_navigation
        self.fail_launch = fail_launch
        self.browsers: list[FakeBrowser] = []
        self.launch_kwargs: dict = {}

    async def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.fail_launch:
            raise PlaywrightError("Executable doesn't exist")
        browser = FakeBrowser(self.fail_navigation)
        self.browsers.append(browser)
        return browser


class FakePlaywrightManager:
    def __init__(self, chromium: FakeChromium):
        self.chromium = chromium
        self.exited = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.exited = True
        return False


@pytest.fixture()
def fake_playwright(monkeypatch):
    def install(fail_navigation: bool = False, fail_launch: bool = False):
        manager = FakePlaywrightManager(FakeChromium(fail_navigation, fail_launch))
        monkeypatch.setattr(renderer_module, "async_playwright", lambda: manager)
        return manager

    return install


class TestPlaywrightRenderer:
    async def test_returns_rendered_html_and_closes_browser(self, fake_playwright):
        manager = fake_playwright()

        html = await PlaywrightRenderer(timeout=90).render("https://ex.com")

        assert "rendered" in html
        browser = manager.chromium.browsers[0]
        assert browser.closed
        assert manager.exited
        assert browser.page.goto_kwargs == {"wait_until": "networkidle", "timeout": 90000}
        assert manager.chromium.launch_kwargs["args"] == ["--no-sandbox"]

    async def test_navigation_failure_raises_and_closes_browser(self, fake_playwright):
        manager = fake_playwright(fail_navigation=True)

        with pytest.raises(RenderError) as exc_info:
            await PlaywrightRenderer().render("https://ex.com/slow")

        assert exc_info.value.url == "https://ex.com/slow"
        assert manager.chromium.browsers[0].closed
        assert manager.exited

    async def test_launch_failure_raises_render_error(self, fake_playwright):
        manager = fake_playwright(fail_launch=True)

        with pytest.raises(RenderError, match="Executable"):
            await PlaywrightRenderer().render("https://ex.com")

        assert manager.exited

    async def test_fresh_browser_per_render(self, fake_playwright):
        manager = fake_playwright()
        renderer = PlaywrightRenderer()

        await renderer.render("https://ex.com/a")
        await renderer.render("https://ex.com/b")

        assert len(manager.chromium.browsers) == 2
        assert all(b.closed for b in manager.chromium.browsers)
