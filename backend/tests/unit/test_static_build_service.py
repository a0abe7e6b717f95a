"""Unit tests for the StaticBuildService."""

import logging
import re
from datetime import datetime, timedelta, timezone

import pytest

from static_cms.domain.entities import (
    Article,
    ArticleLifecycle,
    ArticleStatus,
    BuildScope,
    BuildStatus,
    BuildType,
    Category,
    Page,
    PublishStatus,
    SiteConfig,
    Tag,
    TagRef,
)
from static_cms.domain.exceptions import (
    EntityNotFoundError,
    EntityNotPublishedError,
    StaticBuildError,
    ThemeNotFoundError,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _article(article_id: int, status=ArticleStatus.PUBLISHED, category_id: int = 1, **kwargs) -> Article:
    return Article(
        id=article_id,
        title=f"Article {article_id}",
        content=f"<p>Body of {article_id}</p>",
        category_id=category_id,
        status=status,
        create_time=BASE_TIME + timedelta(hours=article_id),
        publish_time=BASE_TIME + timedelta(hours=article_id),
        **kwargs,
    )


def _ids(html: str) -> list[int]:
    return [int(m) for m in re.findall(r'data-id="(\d+)"', html)]


# ── Articles ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_build_article_writes_file_and_logs_success(builder, content, log_repo, output_dir):
    content.add(_article(1))

    outcome = await builder.build_article(1)

    target = output_dir / "article" / "1.html"
    assert outcome.files == [str(target.resolve())]
    html = target.read_text("utf-8")
    assert "<h1>Article 1</h1>" in html
    assert "<p>Body of 1</p>" in html
    assert [(l.scope, l.target_id, l.status) for l in log_repo.logs] == [
        (BuildScope.ARTICLE, 1, BuildStatus.SUCCESS)
    ]


@pytest.mark.asyncio
async def test_build_article_twice_is_byte_identical(builder, content, output_dir):
    content.add(_article(1))

    await builder.build_article(1)
    first = (output_dir / "article" / "1.html").read_bytes()
    await builder.build_article(1)
    second = (output_dir / "article" / "1.html").read_bytes()

    assert first == second


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status", [ArticleStatus.DRAFT, ArticleStatus.PENDING_REVIEW, ArticleStatus.OFFLINE]
)
async def test_build_unpublished_article_fails_without_writing(
    builder, content, log_repo, output_dir, status
):
    content.add(_article(3, status=status))

    with pytest.raises(EntityNotPublishedError):
        await builder.build_article(3)

    assert not (output_dir / "article" / "3.html").exists()
    assert len(log_repo.logs) == 1
    assert log_repo.logs[0].status == BuildStatus.FAILED
    assert "not published" in log_repo.logs[0].error_message


@pytest.mark.asyncio
async def test_build_recycled_article_is_not_published(builder, content, output_dir):
    content.add(_article(2, lifecycle=ArticleLifecycle.RECYCLED))

    with pytest.raises(EntityNotPublishedError):
        await builder.build_article(2)
    assert not (output_dir / "article" / "2.html").exists()


@pytest.mark.asyncio
async def test_build_missing_article_raises_not_found(builder, log_repo):
    with pytest.raises(EntityNotFoundError):
        await builder.build_article(404)

    assert log_repo.logs[0].target_id == 404
    assert log_repo.logs[0].status == BuildStatus.FAILED


@pytest.mark.asyncio
async def test_prev_next_skip_unpublished_neighbours(builder, content, output_dir):
    for article_id in (1, 3, 5, 7):
        content.add(_article(article_id))
    content.add(_article(4, status=ArticleStatus.DRAFT), _article(6, status=ArticleStatus.OFFLINE))

    for article_id in (1, 5, 7):
        await builder.build_article(article_id)

    def neighbours(article_id: int) -> tuple[str, str]:
        html = (output_dir / "article" / f"{article_id}.html").read_text("utf-8")
        prev = re.search(r'<p class="prev">(\w+)</p>', html).group(1)
        next_ = re.search(r'<p class="next">(\w+)</p>', html).group(1)
        return prev, next_

    assert neighbours(5) == ("3", "7")
    assert neighbours(1) == ("none", "3")
    assert neighbours(7) == ("5", "none")


@pytest.mark.asyncio
async def test_auto_build_type_is_recorded(builder, content, log_repo):
    content.add(_article(1))

    await builder.build_article(1, BuildType.AUTO)

    assert log_repo.logs[0].build_type == BuildType.AUTO


@pytest.mark.asyncio
async def test_unexpected_error_is_wrapped_and_logged(builder, content, log_repo, monkeypatch):
    async def boom(article_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(content, "get_article", boom)

    with pytest.raises(StaticBuildError, match="database went away"):
        await builder.build_article(1)
    assert log_repo.logs[0].status == BuildStatus.FAILED


# ── Index and article list ──────────────────────────────────────────


@pytest.mark.asyncio
async def test_build_index_lists_ten_newest_published(builder, content, output_dir):
    for article_id in range(1, 13):
        content.add(_article(article_id))
    content.add(_article(13, status=ArticleStatus.DRAFT))

    await builder.build_index()

    html = (output_dir / "index.html").read_text("utf-8")
    assert _ids(html) == [12, 11, 10, 9, 8, 7, 6, 5, 4, 3]
    assert 'data-home="True"' in html


@pytest.mark.asyncio
async def test_build_index_uses_configured_template(make_builder, content, output_dir):
    builder = make_builder(SiteConfig(index_template="landing"))

    with pytest.raises(StaticBuildError):
        # landing.html expects a category or page in its context
        await builder.build_index()
    assert not (output_dir / "index.html").exists()


@pytest.mark.asyncio
async def test_article_list_writes_one_file_per_twenty_articles(builder, content, output_dir):
    for article_id in range(1, 46):
        content.add(_article(article_id))
    content.add(_article(99, status=ArticleStatus.DRAFT))

    pages = await builder.build_article_list()

    assert pages == 3
    names = sorted(p.name for p in output_dir.glob("articles*.html"))
    assert names == ["articles-2.html", "articles-3.html", "articles.html"]

    seen: list[int] = []
    for name in ("articles.html", "articles-2.html", "articles-3.html"):
        seen.extend(_ids((output_dir / name).read_text("utf-8")))
    assert len(seen) == 45
    assert sorted(seen) == list(range(1, 46))
    assert "2/3 total=45 size=20" in (output_dir / "articles-2.html").read_text("utf-8")


@pytest.mark.asyncio
async def test_article_list_puts_pinned_articles_first(builder, content, output_dir):
    content.add(_article(1, is_top=True), _article(2), _article(3))

    await builder.build_article_list()

    assert _ids((output_dir / "articles.html").read_text("utf-8")) == [1, 3, 2]


@pytest.mark.asyncio
async def test_article_list_with_no_articles_writes_nothing(builder, log_repo, output_dir):
    pages = await builder.build_article_list()

    assert pages == 0
    assert list(output_dir.glob("articles*.html")) == []
    assert log_repo.logs[0].status == BuildStatus.SUCCESS


# ── Categories, tags and pages ──────────────────────────────────────


@pytest.mark.asyncio
async def test_category_lists_only_published_articles_newest_first(builder, content, output_dir):
    content.add(Category(id=1, name="News"))
    content.add(_article(1), _article(2), _article(3), _article(4, status=ArticleStatus.DRAFT))
    content.add(_article(5, category_id=2))

    await builder.build_category(1)

    html = (output_dir / "category" / "1.html").read_text("utf-8")
    assert "<h1>News</h1>" in html
    assert _ids(html) == [3, 2, 1]


@pytest.mark.asyncio
async def test_category_custom_template(builder, content, output_dir):
    content.add(Category(id=2, name="Promo", template="landing"))

    await builder.build_category(2)

    assert (output_dir / "category" / "2.html").read_text("utf-8") == "LANDING Promo\n"


@pytest.mark.asyncio
async def test_unpublished_category_is_rejected(builder, content, output_dir):
    content.add(Category(id=3, name="Hidden", status=PublishStatus.UNPUBLISHED))

    with pytest.raises(EntityNotPublishedError):
        await builder.build_category(3)
    assert not (output_dir / "category" / "3.html").exists()


@pytest.mark.asyncio
async def test_tag_lists_linked_articles(builder, content, output_dir):
    content.add(Tag(id=1, name="python"))
    content.add(
        _article(1, tags=[TagRef(id=1, name="python")]),
        _article(2),
        _article(3, tags=[TagRef(id=1, name="python")]),
    )

    await builder.build_tag(1)

    assert _ids((output_dir / "tag" / "1.html").read_text("utf-8")) == [3, 1]


@pytest.mark.asyncio
async def test_build_all_tags_counts_failures_and_continues(builder, content, log_repo, output_dir):
    content.add(Tag(id=1, name="ok"), Tag(id=2, name="broken"), Tag(id=3, name="fine"))
    content.add(Tag(id=4, name="disabled", status=PublishStatus.UNPUBLISHED))

    result = await builder.build_all_tags()

    assert (result.built, result.failed) == (2, 1)
    assert (output_dir / "tag" / "1.html").exists()
    assert not (output_dir / "tag" / "2.html").exists()
    assert (output_dir / "tag" / "3.html").exists()
    assert not (output_dir / "tag" / "4.html").exists()

    tag_logs = [l for l in log_repo.logs if l.scope == BuildScope.TAG]
    assert [l.status for l in tag_logs] == [
        BuildStatus.SUCCESS,
        BuildStatus.FAILED,
        BuildStatus.SUCCESS,
    ]
    bulk = [l for l in log_repo.logs if l.scope == BuildScope.TAGS]
    assert len(bulk) == 1
    assert bulk[0].status == BuildStatus.FAILED
    assert bulk[0].error_message == "1 of 3 failed"


@pytest.mark.asyncio
async def test_page_uses_slug_and_falls_back_to_id(builder, content, output_dir):
    content.add(
        Page(id=1, title="About", slug="about", content="<b>us</b>", status=PublishStatus.PUBLISHED),
        Page(id=2, title="Untitled", slug="", content="x", status=PublishStatus.PUBLISHED),
    )

    result = await builder.build_all_pages()

    assert (result.built, result.failed) == (2, 0)
    assert "<b>us</b>" in (output_dir / "about.html").read_text("utf-8")
    assert (output_dir / "page-2.html").exists()


@pytest.mark.asyncio
async def test_build_all_pages_counts_failures_and_continues(builder, content, log_repo, output_dir):
    content.add(
        Page(id=1, title="About", slug="about", status=PublishStatus.PUBLISHED),
        Page(id=2, title="Broken", slug="broken", template="missing", status=PublishStatus.PUBLISHED),
        Page(id=3, title="Contact", slug="contact", status=PublishStatus.PUBLISHED),
        Page(id=4, title="Draft", slug="draft"),
    )

    result = await builder.build_all_pages()

    assert (result.built, result.failed) == (2, 1)
    assert (output_dir / "about.html").exists()
    assert not (output_dir / "broken.html").exists()
    assert (output_dir / "contact.html").exists()
    assert not (output_dir / "draft.html").exists()

    page_logs = [l for l in log_repo.logs if l.scope == BuildScope.PAGE]
    assert [(l.target_id, l.status) for l in page_logs] == [
        (1, BuildStatus.SUCCESS),
        (2, BuildStatus.FAILED),
        (3, BuildStatus.SUCCESS),
    ]
    bulk = [l for l in log_repo.logs if l.scope == BuildScope.PAGES]
    assert len(bulk) == 1
    assert bulk[0].status == BuildStatus.FAILED
    assert bulk[0].error_message == "1 of 3 failed"


@pytest.mark.asyncio
async def test_unpublished_page_fails_without_writing(builder, content, output_dir):
    content.add(Page(id=5, title="Draft", slug="draft"))

    with pytest.raises(EntityNotPublishedError):
        await builder.build_page(5)
    assert not (output_dir / "draft.html").exists()


# ── Full rebuild ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_build_all_summary(builder, content, log_repo, output_dir):
    content.add(Category(id=1, name="News"), Category(id=2, name="Off", status=PublishStatus.UNPUBLISHED))
    content.add(*[_article(i) for i in range(1, 4)])
    content.add(Tag(id=1, name="ok"), Tag(id=2, name="broken"))
    content.add(Page(id=1, title="About", slug="about", status=PublishStatus.PUBLISHED))

    summary = await builder.build_all()

    assert summary.index == 1
    assert summary.article_list_pages == 1
    assert summary.articles == 3
    assert summary.categories == 1
    assert summary.tags == 1
    assert summary.pages == 1
    assert summary.failed == 1
    assert (output_dir / "index.html").exists()
    assert not (output_dir / "category" / "2.html").exists()

    all_logs = [l for l in log_repo.logs if l.scope == BuildScope.ALL]
    assert len(all_logs) == 1
    assert all_logs[0].error_message == "1 of 9 failed"


@pytest.mark.asyncio
async def test_missing_theme_fails_every_build(make_builder, content, log_repo, output_dir):
    builder = make_builder(SiteConfig(current_template_theme="nope"))
    content.add(_article(1))

    with pytest.raises(ThemeNotFoundError):
        await builder.build_article(1)
    assert not (output_dir / "article" / "1.html").exists()
    assert log_repo.logs[0].status == BuildStatus.FAILED


@pytest.mark.asyncio
async def test_bulk_scope_cannot_be_dispatched_as_single_build(builder):
    with pytest.raises(ValueError):
        await builder.build(BuildScope.TAGS)


# ── Pipeline tracing ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_build_traces_each_pipeline_stage(builder, content, caplog):
    content.add(Category(id=1, name="News"), _article(1))
    caplog.set_level(logging.INFO, logger="StaticBuildService")

    await builder.build_category(1)

    text = caplog.text
    for stage in ("[BUILD]", "[QUERY]", "[RENDER]", "[WRITE]", "[LOG]"):
        assert stage in text
    assert text.index("[QUERY]") < text.index("[RENDER]") < text.index("[WRITE]") < text.index("[LOG]")
