"""
Page scraping module.
Fetches result pages and extracts their main text for summarization.
"""

import logging
import re
from typing import List, Optional

import aiohttp
from bs4 import BeautifulSoup

from newsdesk.utils.config import get_scraping_config
from newsdesk.scraper.search import search_web

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")

# Tried in order; the first selector with any text wins
CONTENT_SELECTORS = ["article", "main", "body"]


def extract_main_text(html: str, char_limit: int = 3000) -> str:
    """
    Extract the main text of a page.

    Uses the text of ``article`` elements, falling back to ``main`` and then
    ``body``. Whitespace runs collapse to single spaces and the result is cut
    to ``char_limit`` characters.

    Args:
        html: Page markup
        char_limit: Maximum characters to keep

    Returns:
        Cleaned page text, possibly empty
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup(["script", "style", "noscript"]):
        element.decompose()

    text = ""
    for selector in CONTENT_SELECTORS:
        text = "".join(element.get_text() for element in soup.select(selector))
        if text:
            break

    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    return text[:char_limit]


class WebScraper:
    """
    Searches the web and scrapes result pages over one HTTP session.
    """

    def __init__(self):
        """Initialize the scraper with configuration."""
        self.config = get_scraping_config()
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config["timeout"])
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()

    async def search(self, topic: str, keywords: str) -> List[str]:
        """
        Search for pages relevant to a topic.

        Args:
            topic: Main article topic
            keywords: Keywords separated by commas

        Returns:
            Up to the configured number of result URLs
        """
        return await search_web(self.session, topic, keywords, self.config["max_results"])

    async def scrape_main_text(self, url: str) -> str:
        """
        Fetch a page and extract its main text.

        Args:
            url: Page URL

        Returns:
            Page text truncated to the configured budget, or an empty string
            when the page cannot be fetched or parsed
        """
        try:
            # Pages without a declared charset may not be valid UTF-8
            async with self.session.get(url, headers={"User-Agent": self.config["user_agent"]}) as response:
                html = await response.text(errors="replace")

            return extract_main_text(html, self.config["char_limit"])

        except Exception as e:
            logger.debug(f"Failed to scrape {url}: {e}")
            return ""
