"""HTML content extraction: title and visible text of a rendered page."""

import re
from dataclasses import dataclass
from enum import Enum

from bs4 import BeautifulSoup

WHITESPACE_PATTERN = re.compile(r"\s+")


class ExtractionPolicy(str, Enum):
    """Which non-content elements are stripped before text extraction."""

    AGGRESSIVE = "aggressive"  # also drops page chrome (nav, header, footer)
    MINIMAL = "minimal"  # only drops code and embedded media

    @property
    def removed_tags(self) -> tuple[str, ...]:
        if self is ExtractionPolicy.AGGRESSIVE:
            return ("script", "style", "noscript", "nav", "header", "footer", "svg", "iframe")
        return ("script", "style", "iframe", "svg")


@dataclass
class ExtractedContent:
    """Cleaned content of a single page."""

    text: str
    title: str
    section: str = ""


class ContentExtractor:
    """Turns raw HTML into a title and whitespace-normalized text."""

    def __init__(self, policy: ExtractionPolicy | str = ExtractionPolicy.AGGRESSIVE):
        self.policy = ExtractionPolicy(policy)

    def extract(self, html: str, url: str) -> ExtractedContent:
        """Extract the title and visible text of a page.

        Args:
            html: Rendered HTML.
            url: Source URL, used as the title when the page has none.

        Returns:
            ExtractedContent with an empty ``section``.
        """
        soup = BeautifulSoup(html, "html.parser")

        title_tag = soup.find("title")
        title = title_tag.get_text().strip() if title_tag else ""

        for tag in soup(list(self.policy.removed_tags)):
            tag.decompose()
        # <title> lives in <head> and is not body text
        for tag in soup(["title", "head"]):
            tag.decompose()

        text = WHITESPACE_PATTERN.sub(" ", soup.get_text(separator=" ")).strip()
        return ExtractedContent(text=text, title=title or url)
