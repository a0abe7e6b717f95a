"""ORM model → domain entity mapping shared by the SQLAlchemy repositories."""

from static_cms.domain.entities import (
    Article,
    ArticleCategoryLink,
    ArticleLifecycle,
    ArticleStatus,
    BuildLog,
    BuildScope,
    BuildStatus,
    BuildType,
    Category,
    CategoryRef,
    Page,
    PublishStatus,
    Tag,
    TagRef,
)
from static_cms.infrastructure.database.models import (
    ArticleModel,
    CategoryModel,
    PageModel,
    StaticBuildLogModel,
    TagModel,
)


def article_to_entity(model: ArticleModel) -> Article:
    return Article(
        id=model.id,
        title=model.title,
        content=model.content,
        summary=model.summary,
        category_id=model.category_id,
        author=model.author,
        status=ArticleStatus(model.status),
        lifecycle=ArticleLifecycle(model.lifecycle),
        is_top=bool(model.is_top),
        sort=model.sort,
        seo_keywords=model.seo_keywords,
        seo_description=model.seo_description,
        category=CategoryRef(id=model.category.id, name=model.category.name) if model.category else None,
        tags=[TagRef(id=tag.id, name=tag.name) for tag in model.tags],
        category_links=[
            ArticleCategoryLink(category_id=link.category_id, is_main=bool(link.is_main))
            for link in model.category_links
        ],
        publish_time=model.publish_time,
        create_time=model.create_time,
        update_time=model.update_time,
    )


def category_to_entity(model: CategoryModel) -> Category:
    return Category(
        id=model.id,
        parent_id=model.parent_id,
        name=model.name,
        description=model.description,
        template=model.template,
        status=PublishStatus(model.status),
        sort=model.sort,
        create_time=model.create_time,
        update_time=model.update_time,
    )


def tag_to_entity(model: TagModel) -> Tag:
    return Tag(
        id=model.id,
        name=model.name,
        description=model.description,
        status=PublishStatus(model.status),
        sort=model.sort,
        article_count=model.article_count,
        create_time=model.create_time,
        update_time=model.update_time,
    )


def page_to_entity(model: PageModel) -> Page:
    return Page(
        id=model.id,
        title=model.title,
        slug=model.slug,
        content=model.content,
        template=model.template,
        status=PublishStatus(model.status),
        seo_keywords=model.seo_keywords,
        seo_description=model.seo_description,
        sort=model.sort,
        create_time=model.create_time,
        update_time=model.update_time,
    )


def build_log_to_entity(model: StaticBuildLogModel) -> BuildLog:
    return BuildLog(
        id=model.id,
        build_type=BuildType(model.build_type),
        scope=BuildScope(model.build_scope),
        target_id=model.target_id,
        status=BuildStatus(model.status),
        error_message=model.error_message,
        create_time=model.create_time,
    )
