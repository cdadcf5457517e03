"""
Summarization module using a hosted Hugging Face inference model.
Condenses scraped page text to a target word count.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from newsdesk.utils.config import get_summarizer_config

logger = logging.getLogger(__name__)


def build_prompt(text: str, target_length: int) -> str:
    """Prefix page text with the target length instruction."""
    return f"summarize to approximately {target_length} words: {text}"


def parse_summary_payload(data: Any) -> str:
    """
    Pull the summary text out of an inference API response body.

    The API answers either with a list of results or with a single result
    object; anything without a string ``summary_text`` yields an empty string.
    """
    if isinstance(data, list):
        if data and isinstance(data[0], dict) and data[0].get("summary_text"):
            return data[0]["summary_text"]
        return ""

    if isinstance(data, dict) and isinstance(data.get("summary_text"), str):
        return data["summary_text"]

    return ""


class PageSummarizer:
    """
    Client for the hosted summarization endpoint.
    """

    def __init__(self, api_url: Optional[str] = None, token: Optional[str] = None):
        """
        Initialize the summarizer.

        Args:
            api_url: Inference endpoint. If None, uses config.
            token: API token. If None, uses config.
        """
        self.config = get_summarizer_config()
        self.api_url = api_url or self.config["api_url"]
        self.token = token or self.config["token"]

        if not self.token:
            logger.warning("HF_TOKEN is not set; summarization requests will be unauthenticated")

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def summarize(self, text: str, target_length: int) -> str:
        """
        Summarize text to roughly ``target_length`` words.

        Args:
            text: Text to summarize
            target_length: Target summary length in words

        Returns:
            Summary text, or an empty string if the call fails or the
            response carries no summary
        """
        payload = {"inputs": build_prompt(text, target_length)}
        timeout = aiohttp.ClientTimeout(total=self.config["timeout"])

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.api_url, json=payload, headers=self._headers()) as response:
                    if response.status < 200 or response.status >= 300:
                        error_text = await response.text(errors="replace")
                        logger.error(f"Hugging Face API error: {error_text}")
                        return ""

                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        logger.error(f"Failed to parse Hugging Face API response as JSON: {e}")
                        return ""

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Hugging Face API request failed: {e}")
            return ""

        return parse_summary_payload(data)

