"""
Web search module.
Queries the DuckDuckGo HTML endpoint and extracts result page URLs.
"""

import logging
import re
from typing import List, Optional
from urllib.parse import unquote

import aiohttp
from bs4 import BeautifulSoup

from newsdesk.utils.config import get_scraping_config

logger = logging.getLogger(__name__)

# Result anchors wrap the target in a redirect link: //duckduckgo.com/l/?uddg=<encoded url>&rut=...
REDIRECT_TARGET_PATTERN = re.compile(r"uddg=([^&]+)")


def build_search_query(topic: str, keywords: str) -> str:
    """
    Combine a topic and comma-separated keywords into one search string.

    Args:
        topic: Main article topic
        keywords: Keywords separated by commas

    Returns:
        Search query text
    """
    return f"{topic} {keywords.replace(',', ' ')}"


def extract_result_urls(html: str, max_results: int = 3) -> List[str]:
    """
    Extract target URLs from a search results page.

    Only result title anchors (``a.result__a``) carrying a ``uddg=`` redirect
    parameter are considered; the parameter value is percent-decoded.

    Args:
        html: Search results markup
        max_results: Maximum URLs to return

    Returns:
        Result URLs in page order
    """
    soup = BeautifulSoup(html, "html.parser")
    links = []

    for anchor in soup.select("a.result__a"):
        href = anchor.get("href")
        if not href or "uddg=" not in href:
            continue

        match = REDIRECT_TARGET_PATTERN.search(href)
        if match and match.group(1):
            links.append(unquote(match.group(1)))

    return links[:max_results]


async def search_web(
    session: aiohttp.ClientSession,
    topic: str,
    keywords: str,
    max_results: Optional[int] = None
) -> List[str]:
    """
    Run a web search for a topic and return the top result URLs.

    Network errors propagate to the caller.

    Args:
        session: HTTP session used for the request
        topic: Main article topic
        keywords: Keywords separated by commas
        max_results: Maximum URLs to return (defaults to configuration)

    Returns:
        Result URLs
    """
    config = get_scraping_config()
    max_results = max_results or config["max_results"]
    query = build_search_query(topic, keywords)

    async with session.get(config["search_url"], params={"q": query}) as response:
        if response.status != 200:
            logger.warning(f"Search endpoint returned status {response.status} for '{query}'")
        html = await response.text()

    urls = extract_result_urls(html, max_results)
    logger.info(f"Search for '{query}' returned {len(urls)} result URLs")
    return urls
