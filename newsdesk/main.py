"""
FastAPI main application for the newsdesk service.
Provides REST API endpoints for browsing, authoring and generating articles.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Dict, Any
from datetime import datetime

from fastapi import FastAPI, HTTPException, Depends, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
import uvicorn

from newsdesk import __version__
from newsdesk.utils.config import settings
from newsdesk.db.session import database, get_articles
from newsdesk.db.models import SENTIMENTS
from newsdesk.db.articles import ArticleRepository, ArticleCreate, make_summary
from newsdesk.generator import ArticleGenerator, GenerationRequest

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

CATEGORIES = [
    "Technology",
    "Finance",
    "Environment",
    "Healthcare",
    "Science",
    "Education",
    "Politics",
    "Sports",
    "Entertainment",
    "Business",
]

SOURCES = [
    "TechDaily",
    "Finance Weekly",
    "Green News",
    "Health Today",
    "Space News",
    "EduTech",
    "Global Times",
    "Sports Central",
]

WORD_COUNT_OPTIONS = [100, 200, 300, 500]
DEFAULT_WORD_COUNT = 200


# Pydantic models for API requests and responses
class GenerateRequestModel(BaseModel):
    """Request model for AI article generation."""
    topic: Optional[str] = Field(default=None, description="Main topic for the article")
    keywords: Optional[str] = Field(default=None, description="Keywords separated by commas")
    wordCount: Optional[int] = Field(default=None, description="Target article length in words")
    author: Optional[str] = Field(default=None, description="Author recorded on the article")


class GenerateResponseModel(BaseModel):
    """Response model for a generated article."""
    status: str
    message: str
    articleId: str


class ArticleCreateModel(BaseModel):
    """Request model for an authored article."""
    title: str = Field(default="", description="Article title")
    content: str = Field(default="", description="Article body")
    category: str = Field(default="", description="Article category")
    source: str = Field(default="", description="Publishing source")
    sentiment: str = Field(default="neutral", description="Sentiment: positive, negative, neutral")
    author: Optional[str] = Field(default=None, description="Author, Anonymous if omitted")
    image_url: Optional[str] = Field(default=None, description="Optional cover image URL")
    sentiment_explanation: Optional[str] = Field(default=None, description="Why the sentiment applies")


class ArticleModel(BaseModel):
    """Response model for a stored article."""
    id: str
    title: str
    summary: str
    content: str
    author: str
    source: str
    category: str
    sentiment: str
    sentiment_explanation: str
    image_url: Optional[str] = None
    created_at: Optional[str] = None


class ArticleListModel(BaseModel):
    """Response model for article listings."""
    total_results: int
    articles: List[ArticleModel]


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    database: bool
    timestamp: datetime


# Application lifecycle
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting newsdesk API...")
    try:
        await database.connect()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down newsdesk API...")
    try:
        await database.disconnect()
    except Exception as e:
        logger.error(f"Database cleanup failed: {e}")


# Create FastAPI application
app = FastAPI(
    title="Newsdesk API",
    description="News article browsing, authoring and AI-assisted generation",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Newsdesk API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    db_healthy = await database.ping()

    return HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        database=db_healthy,
        timestamp=datetime.now()
    )


@app.post("/api/generate", response_model=GenerateResponseModel)
async def generate(request: GenerateRequestModel) -> GenerateResponseModel:
    """
    Generate an article from web search results and store it.
    Returns the new article id for review in the editor.
    """
    if not request.topic or not request.keywords or not request.wordCount or not request.author:
        raise HTTPException(status_code=400, detail="Missing required fields")

    generator = ArticleGenerator()
    result = await generator.execute(
        GenerationRequest(
            topic=request.topic,
            keywords=request.keywords,
            word_count=request.wordCount,
            author=request.author
        )
    )

    if result.status != "completed":
        raise HTTPException(status_code=500, detail="Failed to generate article")

    return GenerateResponseModel(
        status="success",
        message="Article generated successfully",
        articleId=result.article_id
    )


@app.post("/api/articles", response_model=ArticleModel, status_code=201)
async def create_article(request: ArticleCreateModel) -> ArticleModel:
    """
    Store an article written in the editor.
    """
    title = request.title.strip()
    content = request.content.strip()

    if not title or not content or not request.category or not request.source or not request.sentiment:
        raise HTTPException(status_code=400, detail="Please fill in all fields")

    if request.sentiment not in SENTIMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"Sentiment must be one of: {', '.join(SENTIMENTS)}"
        )

    # Summary is derived from the submitted text before trimming
    summary = make_summary(request.content, settings.SUMMARY_PREVIEW_LENGTH)
    image_url = (request.image_url or "").strip() or None

    try:
        async with database.articles() as articles:
            article = await articles.create(
                ArticleCreate(
                    title=title,
                    summary=summary,
                    content=content,
                    author=request.author or "Anonymous",
                    source=request.source,
                    category=request.category,
                    sentiment=request.sentiment,
                    sentiment_explanation=request.sentiment_explanation or "User-generated content",
                    image_url=image_url
                )
            )
            return ArticleModel(**article.to_dict())

    except Exception as e:
        logger.error(f"Error creating article: {e}")
        raise HTTPException(status_code=500, detail="Failed to create article")


@app.get("/api/articles", response_model=ArticleListModel)
async def list_articles(
    category: Optional[str] = Query(default=None, description="Only articles in this category"),
    sentiment: Optional[str] = Query(default=None, description="Only articles with this sentiment"),
    limit: int = Query(default=50, ge=1, le=100, description="Maximum results"),
    offset: int = Query(default=0, ge=0, description="Results to skip"),
    articles: ArticleRepository = Depends(get_articles)
) -> ArticleListModel:
    """
    List stored articles, newest first.
    """
    found = await articles.list_recent(
        category=category,
        sentiment=sentiment,
        limit=limit,
        offset=offset
    )

    return ArticleListModel(
        total_results=len(found),
        articles=[ArticleModel(**article.to_dict()) for article in found]
    )


@app.get("/api/articles/{article_id}", response_model=ArticleModel)
async def get_article(
    article_id: str,
    articles: ArticleRepository = Depends(get_articles)
) -> ArticleModel:
    """
    Fetch one stored article.
    """
    article = await articles.get(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")

    return ArticleModel(**article.to_dict())


@app.get("/api/options", response_model=Dict[str, Any])
async def get_form_options() -> Dict[str, Any]:
    """
    Vocabularies offered by the authoring and generation forms.
    """
    return {
        "categories": CATEGORIES,
        "sources": SOURCES,
        "sentiments": list(SENTIMENTS),
        "word_counts": WORD_COUNT_OPTIONS,
        "default_word_count": DEFAULT_WORD_COUNT
    }


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.now().isoformat()
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Handle malformed request bodies and parameters."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "status_code": 400,
            "timestamp": datetime.now().isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "status_code": 500,
            "timestamp": datetime.now().isoformat()
        }
    )


if __name__ == "__main__":
    uvicorn.run(
        "newsdesk.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
