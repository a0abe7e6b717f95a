"""Pydantic DTOs for sitemap generation results."""

from pydantic import BaseModel


class SitemapResult(BaseModel):
    file: str
    url: str
    count: int
    categories: int | None = None
    pages: int | None = None


class SitemapAllResult(BaseModel):
    txt: SitemapResult
    xml: SitemapResult
    html: SitemapResult
