"""
Article generation workflow.
Manages the pipeline: Search → Scrape → Summarize → Assemble → Store.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from newsdesk.utils.config import settings, get_scraping_config
from newsdesk.db.session import database
from newsdesk.db.articles import ArticleCreate, make_summary
from newsdesk.scraper.page_scraper import WebScraper
from newsdesk.ai.summarizer import PageSummarizer

logger = logging.getLogger(__name__)

GENERATED_SOURCE = "AI Generated"
GENERATED_CATEGORY = "Technology"
GENERATED_SENTIMENT = "neutral"
GENERATED_SENTIMENT_EXPLANATION = "AI-generated content based on web research"


@dataclass
class GenerationRequest:
    """
    Parameters for generating one article.
    """
    topic: str
    keywords: str
    word_count: int
    author: str


@dataclass
class GenerationResult:
    """
    Outcome of an article generation run.
    """
    topic: str
    article_id: Optional[str] = None
    urls: List[str] = field(default_factory=list)
    summaries: List[str] = field(default_factory=list)
    execution_time: float = 0.0
    status: str = "completed"
    error_message: Optional[str] = None


def assemble_article(request: GenerationRequest, summaries: List[str]) -> ArticleCreate:
    """
    Combine page summaries into a new article record.

    Args:
        request: Generation parameters
        summaries: Non-empty page summaries in search order

    Returns:
        Field values for the generated article
    """
    content = "\n\n".join(summaries)

    return ArticleCreate(
        title=f"{request.topic} - Latest Insights",
        summary=make_summary(content, settings.SUMMARY_PREVIEW_LENGTH, generated=True),
        content=content,
        author=request.author,
        source=GENERATED_SOURCE,
        category=GENERATED_CATEGORY,
        sentiment=GENERATED_SENTIMENT,
        sentiment_explanation=GENERATED_SENTIMENT_EXPLANATION,
    )


def _preview(text: str, length: int = 300) -> str:
    return text[:length] + ("..." if len(text) > length else "")


class ArticleGenerator:
    """
    Generates an article from web search results.
    """

    def __init__(self, summarizer: Optional[PageSummarizer] = None):
        """Initialize the generator."""
        self.summarizer = summarizer or PageSummarizer()
        self.min_chars = get_scraping_config()["min_chars"]

    async def execute(self, request: GenerationRequest) -> GenerationResult:
        """
        Run the full generation workflow.

        Pages are processed one at a time in search order. A page is skipped
        when its text is too short or its summary comes back empty.

        Args:
            request: Generation parameters

        Returns:
            Result with the stored article id, or a failed status
        """
        start_time = datetime.now()

        try:
            # Step 1: Search for relevant pages
            async with WebScraper() as scraper:
                urls = await scraper.search(request.topic, request.keywords)
                logger.info(f"Scraped URLs: {urls}")

                # Step 2: Scrape and summarize each page
                summaries = await self._summarize_pages(scraper, urls, request.word_count)

            # Step 3: Combine summaries into an article
            article_data = assemble_article(request, summaries)

            # Step 4: Store in database
            async with database.articles() as articles:
                article = await articles.create(article_data)
                article_id = article.id

            execution_time = (datetime.now() - start_time).total_seconds()
            logger.info(f"Generated article {article_id} in {execution_time:.2f} seconds")

            return GenerationResult(
                topic=request.topic,
                article_id=article_id,
                urls=urls,
                summaries=summaries,
                execution_time=execution_time,
                status="completed"
            )

        except Exception as e:
            logger.error(f"Error generating article: {e}")

            return GenerationResult(
                topic=request.topic,
                status="failed",
                error_message=str(e),
                execution_time=(datetime.now() - start_time).total_seconds()
            )

    async def _summarize_pages(
        self,
        scraper: WebScraper,
        urls: List[str],
        word_count: int
    ) -> List[str]:
        """Scrape each URL in order and collect the non-empty summaries."""
        summaries = []

        for url in urls:
            text = await scraper.scrape_main_text(url)
            logger.info(f"Scraped text for {url}: {_preview(text)}")

            if len(text) <= self.min_chars:
                continue

            # Word budget is split evenly over every result, including skipped ones
            summary = await self.summarizer.summarize(text, word_count // len(urls))
            logger.info(f"Summary for {url}: {summary}")
            if summary:
                summaries.append(summary)

        return summaries

