"""
Database models for the newsdesk service.
Defines the SQLAlchemy model for stored articles.
"""

import uuid
from datetime import datetime
from typing import Optional, Dict, Any
from sqlalchemy import Column, String, Text, DateTime, Index
from sqlalchemy.orm import declarative_base, Mapped

Base = declarative_base()

SENTIMENTS = ("positive", "negative", "neutral")


def _new_article_id() -> str:
    return str(uuid.uuid4())


class Article(Base):
    """
    Model for storing authored and generated news articles.
    """
    __tablename__ = "articles"

    id: Mapped[str] = Column(String(36), primary_key=True, default=_new_article_id)
    title: Mapped[str] = Column(String(500), nullable=False)
    summary: Mapped[str] = Column(Text, nullable=False)
    content: Mapped[str] = Column(Text, nullable=False)
    author: Mapped[str] = Column(String(200), nullable=False)
    source: Mapped[str] = Column(String(200), nullable=False, index=True)
    category: Mapped[str] = Column(String(100), nullable=False, index=True)
    sentiment: Mapped[str] = Column(String(20), nullable=False, default="neutral")
    sentiment_explanation: Mapped[str] = Column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = Column(String(1000), nullable=True)
    created_at: Mapped[datetime] = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index("idx_articles_category_created", "category", "created_at"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "author": self.author,
            "source": self.source,
            "category": self.category,
            "sentiment": self.sentiment,
            "sentiment_explanation": self.sentiment_explanation,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title='{self.title[:50]}...', source='{self.source}')>"
