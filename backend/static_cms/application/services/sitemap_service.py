"""Sitemap generation — TXT, XML and HTML views of the same public URL set.

All three formats enumerate URLs through ``_collect_entries`` and build
links with the same UrlBuilder as the page builds, so a sitemap never
points at a file name the build engine does not produce.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from jinja2 import Environment, select_autoescape

from static_cms.application.interfaces import ContentRepository, StaticFileWriter
from static_cms.application.services.static_paths import (
    ARTICLE_LIST_PAGE_SIZE,
    SITEMAP_HTML_PATH,
    SITEMAP_TXT_PATH,
    SITEMAP_XML_PATH,
    UrlBuilder,
    article_list_page_count,
)

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
HTML_CATEGORY_ARTICLE_LIMIT = 10

_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sitemap - {{ site_name }}</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 20px; line-height: 1.6; }
    h1 { color: #333; border-bottom: 2px solid #409EFF; padding-bottom: 10px; }
    h2 { color: #555; margin-top: 30px; }
    ul { list-style: none; padding-left: 0; }
    li { margin: 8px 0; }
    a { color: #409EFF; text-decoration: none; }
    .category-item { margin-left: 20px; }
    .article-item { margin-left: 40px; font-size: 14px; }
    .count { color: #999; font-size: 12px; }
  </style>
</head>
<body>
  <h1>Sitemap</h1>
  <div class="section">
    <h2>Home</h2>
    <ul><li><a href="{{ urls.home() }}">{{ site_name }}</a></li></ul>
  </div>
{% if categories %}
  <div class="section">
    <h2>Categories <span class="count">({{ categories|length }})</span></h2>
    <ul>
{% for item in categories %}
      <li class="category-item">
        <a href="{{ urls.category(item.category.id) }}">{{ item.category.name }}</a>
        <span class="count">({{ item.article_count }} articles)</span>
{% if item.articles %}
        <ul>
{% for article in item.articles %}
          <li class="article-item"><a href="{{ urls.article(article.id) }}">{{ article.title }}</a></li>
{% endfor %}
        </ul>
{% endif %}
      </li>
{% endfor %}
    </ul>
  </div>
{% endif %}
{% if list_pages %}
  <div class="section">
    <h2>Articles <span class="count">({{ list_pages }} pages)</span></h2>
    <ul>
{% for n in range(1, list_pages + 1) %}
      <li><a href="{{ urls.article_list(n) }}">Page {{ n }}</a></li>
{% endfor %}
    </ul>
  </div>
{% endif %}
{% if pages %}
  <div class="section">
    <h2>Pages <span class="count">({{ pages|length }})</span></h2>
    <ul>
{% for page in pages %}
      <li><a href="{{ urls.page(page.output_name) }}">{{ page.title }}</a></li>
{% endfor %}
    </ul>
  </div>
{% endif %}
  <div class="generated">
    <p>Generated at {{ generated_at }}</p>
  </div>
</body>
</html>
"""

_html_env = Environment(
    autoescape=select_autoescape(default_for_string=True),
    trim_blocks=True,
)


@dataclass
class SitemapEntry:
    """One ``<url>`` of the XML sitemap."""

    loc: str
    lastmod: str
    changefreq: str
    priority: str


class SitemapService:
    """Generates ``sitemap.txt``, ``sitemap.xml`` and ``sitemap.html``.

    Usage:
        service = SitemapService(content, writer, UrlBuilder("https://example.com"))
        result = await service.generate_xml()
    """

    def __init__(
        self,
        content: ContentRepository,
        writer: StaticFileWriter,
        urls: UrlBuilder,
        site_name: str = "CMS",
    ):
        self._content = content
        self._writer = writer
        self._urls = urls
        self._site_name = site_name

    async def generate_txt(self) -> dict[str, Any]:
        entries = await self._collect_entries()
        content = "\n".join(entry.loc for entry in entries)
        await self._writer.write(SITEMAP_TXT_PATH, content)
        logger.info("Generated %s with %d URLs", SITEMAP_TXT_PATH, len(entries))
        return self._result(SITEMAP_TXT_PATH, count=len(entries))

    async def generate_xml(self) -> dict[str, Any]:
        entries = await self._collect_entries()

        urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
        for entry in entries:
            url = ET.SubElement(urlset, "url")
            ET.SubElement(url, "loc").text = entry.loc
            ET.SubElement(url, "lastmod").text = entry.lastmod
            ET.SubElement(url, "changefreq").text = entry.changefreq
            ET.SubElement(url, "priority").text = entry.priority
        ET.indent(urlset, space="  ")
        body = ET.tostring(urlset, encoding="unicode")
        content = f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'

        await self._writer.write(SITEMAP_XML_PATH, content)
        logger.info("Generated %s with %d URLs", SITEMAP_XML_PATH, len(entries))
        return self._result(SITEMAP_XML_PATH, count=len(entries))

    async def generate_html(self) -> dict[str, Any]:
        categories = []
        for category in await self._content.list_categories(published_only=True):
            categories.append(
                {
                    "category": category,
                    "article_count": await self._content.count_category_articles(category.id),
                    "articles": await self._content.list_category_articles(
                        category.id, limit=HTML_CATEGORY_ARTICLE_LIMIT
                    ),
                }
            )
        list_pages = await self._list_page_count()
        pages = await self._content.list_pages(published_only=True)

        html = _html_env.from_string(_HTML_TEMPLATE).render(
            site_name=self._site_name,
            urls=self._urls,
            categories=categories,
            list_pages=list_pages,
            pages=pages,
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        )
        await self._writer.write(SITEMAP_HTML_PATH, html)

        count = 1 + len(categories) + list_pages + len(pages)
        count += sum(len(item["articles"]) for item in categories)
        logger.info(
            "Generated %s (%d categories, %d pages)",
            SITEMAP_HTML_PATH,
            len(categories),
            len(pages),
        )
        return self._result(
            SITEMAP_HTML_PATH, count=count, categories=len(categories), pages=len(pages)
        )

    async def generate_all(self) -> dict[str, dict[str, Any]]:
        return {
            "txt": await self.generate_txt(),
            "xml": await self.generate_xml(),
            "html": await self.generate_html(),
        }

    # ── Helpers ─────────────────────────────────────────────────────

    async def _collect_entries(self) -> list[SitemapEntry]:
        """Home, article list pages, categories, articles, pages — in that order."""
        today = date.today().isoformat()

        entries = [SitemapEntry(self._urls.home(), today, "daily", "1.0")]
        for page in range(1, await self._list_page_count() + 1):
            entries.append(SitemapEntry(self._urls.article_list(page), today, "daily", "0.8"))

        for category in await self._content.list_categories(published_only=True):
            entries.append(
                SitemapEntry(
                    self._urls.category(category.id),
                    _lastmod(category.update_time, today),
                    "weekly",
                    "0.7",
                )
            )
        for article in await self._content.list_published_articles():
            entries.append(
                SitemapEntry(
                    self._urls.article(article.id),
                    _lastmod(article.update_time, today),
                    "monthly",
                    "0.6",
                )
            )
        for page in await self._content.list_pages(published_only=True):
            entries.append(
                SitemapEntry(
                    self._urls.page(page.output_name),
                    _lastmod(page.update_time, today),
                    "monthly",
                    "0.5",
                )
            )
        return entries

    async def _list_page_count(self) -> int:
        total = await self._content.count_published_articles()
        return article_list_page_count(total, ARTICLE_LIST_PAGE_SIZE)

    def _result(self, path: str, **extra: Any) -> dict[str, Any]:
        return {"file": f"/{path}", "url": self._urls.url(path), **extra}


def _lastmod(value: datetime | None, fallback: str) -> str:
    return value.date().isoformat() if value else fallback
