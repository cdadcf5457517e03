"""
Article persistence: create and read operations over the articles table.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.db.models import Article

logger = logging.getLogger(__name__)


@dataclass
class ArticleCreate:
    """
    Field values for a new article record.
    """
    title: str
    summary: str
    content: str
    author: str
    source: str
    category: str
    sentiment: str
    sentiment_explanation: str
    image_url: Optional[str] = None


def make_summary(content: str, max_length: int = 150, generated: bool = False) -> str:
    """
    Build the short summary shown on article cards.

    Authored articles keep the first ``max_length`` characters and append an
    ellipsis; generated articles trim three more characters so the summary
    never exceeds ``max_length``.
    """
    if len(content) <= max_length:
        return content
    if generated:
        return content[:max_length - 3] + "..."
    return content[:max_length] + "..."


class ArticleRepository:
    """
    Repository for article records bound to a database session.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: Database session
        """
        self.session = session

    async def create(self, data: ArticleCreate) -> Article:
        """
        Insert a new article and return it with its generated id.

        Args:
            data: Article field values

        Returns:
            The stored article
        """
        article = Article(
            title=data.title,
            summary=data.summary,
            content=data.content,
            author=data.author,
            source=data.source,
            category=data.category,
            sentiment=data.sentiment,
            sentiment_explanation=data.sentiment_explanation,
            image_url=data.image_url,
        )
        self.session.add(article)
        await self.session.flush()
        await self.session.refresh(article)

        logger.info(f"Stored article {article.id} ('{article.title[:50]}')")
        return article

    async def get(self, article_id: str) -> Optional[Article]:
        """Fetch one article by id, or None."""
        result = await self.session.execute(
            select(Article).where(Article.id == article_id)
        )
        return result.scalar_one_or_none()

    async def list_recent(
        self,
        category: Optional[str] = None,
        sentiment: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[Article]:
        """
        List articles, newest first.

        Args:
            category: Only articles in this category
            sentiment: Only articles with this sentiment
            limit: Maximum number of articles
            offset: Number of articles to skip

        Returns:
            Matching articles
        """
        query = select(Article)
        if category:
            query = query.where(Article.category == category)
        if sentiment:
            query = query.where(Article.sentiment == sentiment)
        query = query.order_by(Article.created_at.desc(), Article.id).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return list(result.scalars().all())
