"""
Newsdesk

A news article service for browsing and authoring articles, with an
AI-assisted generator that searches the web, scrapes the top results and
summarizes them into a draft article.
"""

__version__ = "1.0.0"
__author__ = "Newsdesk Team"
__description__ = "News article authoring service with AI-assisted generation"
