"""Output paths and public URLs of every static artifact.

The build orchestrator and the sitemap generator both derive file names
from here, so a page is always linked under the name it was written to.
"""

import math

ARTICLE_LIST_PAGE_SIZE = 20
INDEX_ARTICLE_LIMIT = 10

INDEX_PATH = "index.html"
SITEMAP_TXT_PATH = "sitemap.txt"
SITEMAP_XML_PATH = "sitemap.xml"
SITEMAP_HTML_PATH = "sitemap.html"


def article_list_page_count(total: int, page_size: int = ARTICLE_LIST_PAGE_SIZE) -> int:
    return math.ceil(total / page_size) if total > 0 else 0


def article_list_path(page: int) -> str:
    return "articles.html" if page <= 1 else f"articles-{page}.html"


def article_path(article_id: int) -> str:
    return f"article/{article_id}.html"


def category_path(category_id: int) -> str:
    return f"category/{category_id}.html"


def tag_path(tag_id: int) -> str:
    return f"tag/{tag_id}.html"


def page_path(output_name: str) -> str:
    return f"{output_name}.html"


class UrlBuilder:
    """Joins output paths onto a public base URL.

    An empty base yields root-relative links (``/article/1.html``), which is
    what the templates use when no public site URL is configured.
    """

    def __init__(self, base_url: str = ""):
        self.base_url = base_url.rstrip("/")

    def url(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path.lstrip('/')}"

    def home(self) -> str:
        return self.url(INDEX_PATH)

    def article_list(self, page: int = 1) -> str:
        return self.url(article_list_path(page))

    def article(self, article_id: int) -> str:
        return self.url(article_path(article_id))

    def category(self, category_id: int) -> str:
        return self.url(category_path(category_id))

    def tag(self, tag_id: int) -> str:
        return self.url(tag_path(tag_id))

    def page(self, output_name: str) -> str:
        return self.url(page_path(output_name))
