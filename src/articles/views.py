"""Article endpoints guarded by RoleGuard with ownership checks in ArticleService."""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from access_control.models import PermissionName
from access_control.permissions import RoleGuard
from core.response import BaseViewSet, api_response
from .serializers import ArticleCreateSerializer, ArticleSerializer, ArticleUpdateSerializer
from .services import ArticleService

WRITERS = (PermissionName.ADMIN.value, PermissionName.EDITOR.value)


class ArticleViewSet(BaseViewSet):
    permission_classes = [RoleGuard]
    lookup_value_regex = r"\d+"
    # Reads are public; every other action names its own requirement.
    required_permissions = None
    action_permissions = {
        "create": WRITERS,
        "partial_update": WRITERS,
        "destroy": WRITERS,
        "my_articles": (*WRITERS, PermissionName.READER.value),
    }
    service = ArticleService()

    @extend_schema(responses={200: ArticleSerializer(many=True)}, auth=[])
    def list(self, request):
        return api_response(ArticleSerializer(self.service.find_all(), many=True).data)

    @extend_schema(responses={200: ArticleSerializer}, auth=[])
    def retrieve(self, request, pk=None):
        """Return the article, or null data when it does not exist."""
        article = self.service.find_one(int(pk))
        return api_response(ArticleSerializer(article).data if article else None)

    @extend_schema(request=ArticleCreateSerializer, responses={201: ArticleSerializer})
    def create(self, request):
        """Create an article authored by the caller."""
        serializer = ArticleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = self.service.create(author_id=request.user.pk, **serializer.validated_data)
        return api_response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ArticleUpdateSerializer, responses={200: ArticleSerializer})
    def partial_update(self, request, pk=None):
        serializer = ArticleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = self.service.update(int(pk), serializer.validated_data, request.user.pk)
        return api_response(ArticleSerializer(article).data)

    @extend_schema(responses={204: None})
    def destroy(self, request, pk=None):
        self.service.remove(int(pk), request.user.pk)
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ArticleSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="my-articles")
    def my_articles(self, request):
        """Articles authored by the caller, newest first."""
        return api_response(ArticleSerializer(self.service.find_by_author(request.user.pk), many=True).data)


__all__ = ["ArticleViewSet"]
