"""Article persistence with author-ownership enforcement on mutation."""

import logging
from typing import Any, Iterable

from django.conf import settings
from rest_framework.exceptions import NotFound, PermissionDenied

from access_control.services import UserPermissionService
from .models import Article

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "content")


class ArticleService:
    """CRUD on articles.

    Coarse permission checks belong to the route guard; this service only
    decides whether a caller may touch a specific article. Authors may always
    modify their own rows, and holders of ``OWNERSHIP_BYPASS_PERMISSION``
    (``admin`` by default) may modify anyone's.
    """

    def __init__(self, user_permission_service: UserPermissionService | None = None):
        self.user_permission_service = user_permission_service or UserPermissionService()

    @staticmethod
    def _articles(relations: Iterable[str] = ("author",)):
        return Article.objects.select_related(*relations)

    def create(self, title: str, content: str, author_id: int) -> Article:
        article = Article.objects.create(title=title, content=content, author_id=author_id)
        logger.info("Article %s created by user %s", article.pk, author_id)
        return self.find_one(article.pk)

    def find_all(self) -> list[Article]:
        return list(self._articles().order_by("-created_at", "-id"))

    def find_by_author(self, author_id: int) -> list[Article]:
        return list(self._articles().filter(author_id=author_id).order_by("-created_at", "-id"))

    def find_one(self, article_id: int) -> Article | None:
        """Article with its author, or None; absence is not an error on reads."""
        return self._articles().filter(pk=article_id).first()

    def update(self, article_id: int, fields: dict[str, Any], caller_id: int) -> Article:
        article = self._get_for_modification(article_id, caller_id, "edit")
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS}
        if changes:
            for name, value in changes.items():
                setattr(article, name, value)
            article.save(update_fields=[*changes, "updated_at"])
        return self.find_one(article_id)

    def remove(self, article_id: int, caller_id: int) -> None:
        article = self._get_for_modification(article_id, caller_id, "delete")
        article.delete()
        logger.info("Article %s deleted by user %s", article_id, caller_id)

    def _get_for_modification(self, article_id: int, caller_id: int, verb: str) -> Article:
        article = self.find_one(article_id)
        if article is None:
            raise NotFound("Article not found")
        if article.author_id != caller_id and not self._can_bypass_ownership(caller_id):
            raise PermissionDenied(f"You can only {verb} your own articles")
        return article

    def _can_bypass_ownership(self, caller_id: int) -> bool:
        bypass = settings.OWNERSHIP_BYPASS_PERMISSION
        return bool(bypass) and bypass in self.user_permission_service.get_user_permissions(caller_id)


__all__ = ["ArticleService", "EDITABLE_FIELDS"]
