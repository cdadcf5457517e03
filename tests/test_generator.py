"""
Test cases for the article generation workflow.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from newsdesk.generator import ArticleGenerator, GenerationRequest, assemble_article
from newsdesk.db.articles import make_summary

LONG_TEXT = "x" * 250
SHORT_TEXT = "x" * 200


def _request(word_count=300):
    return GenerationRequest(topic="Grid storage", keywords="batteries", word_count=word_count, author="a@b.c")


def test_assemble_article_joins_summaries():
    article = assemble_article(_request(), ["First.", "Second."])

    assert article.title == "Grid storage - Latest Insights"
    assert article.content == "First.\n\nSecond."
    assert article.summary == "First.\n\nSecond."
    assert article.source == "AI Generated"
    assert article.category == "Technology"
    assert article.sentiment == "neutral"
    assert article.author == "a@b.c"


def test_assemble_article_truncates_long_summary():
    article = assemble_article(_request(), ["y" * 100, "z" * 100])

    assert len(article.summary) == 150
    assert article.summary == article.content[:147] + "..."


def test_assemble_article_without_summaries():
    article = assemble_article(_request(), [])
    assert article.content == ""
    assert article.summary == ""


def test_make_summary_authored_keeps_full_prefix():
    content = "w" * 151
    assert make_summary(content) == "w" * 150 + "..."
    assert make_summary("w" * 150) == "w" * 150


@pytest.mark.asyncio
async def test_summarize_pages_skips_short_text_and_empty_summaries():
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(side_effect=["Kept.", ""])
    scraper = MagicMock()
    scraper.scrape_main_text = AsyncMock(side_effect=[LONG_TEXT, SHORT_TEXT, LONG_TEXT])

    generator = ArticleGenerator(summarizer=summarizer)
    urls = ["https://a.example", "https://b.example", "https://c.example"]
    summaries = await generator._summarize_pages(scraper, urls, 300)

    assert summaries == ["Kept."]
    # The 200-character page is never summarized
    assert summarizer.summarize.await_count == 2
    for call in summarizer.summarize.await_args_list:
        assert call.args == (LONG_TEXT, 100)


@pytest.mark.asyncio
async def test_summarize_pages_processes_urls_in_order():
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(side_effect=lambda text, length: f"summary of {text[:1]}")
    scraper = MagicMock()
    scraper.scrape_main_text = AsyncMock(side_effect=["a" * 300, "b" * 300])

    generator = ArticleGenerator(summarizer=summarizer)
    summaries = await generator._summarize_pages(scraper, ["https://1.example", "https://2.example"], 101)

    assert summaries == ["summary of a", "summary of b"]
    assert [call.args[0] for call in scraper.scrape_main_text.await_args_list] == [
        "https://1.example",
        "https://2.example",
    ]
    assert summarizer.summarize.await_args_list[0].args[1] == 50


@pytest.mark.asyncio
async def test_summarize_pages_with_no_results():
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock()
    generator = ArticleGenerator(summarizer=summarizer)

    assert await generator._summarize_pages(MagicMock(), [], 200) == []
    summarizer.summarize.assert_not_awaited()
