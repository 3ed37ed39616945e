"""Serializers for Article CRUD with standard envelope support."""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Article

CONTENT_MIN_LENGTH = 10


class AuthorSerializer(serializers.ModelSerializer):
    """Public byline of an article author."""

    class Meta:
        model = get_user_model()
        fields = ["id", "name", "email"]
        read_only_fields = fields


class ArticleSerializer(serializers.ModelSerializer):
    author_id = serializers.IntegerField(read_only=True)
    author = AuthorSerializer(read_only=True)

    class Meta:
        """Expose article fields with the author's public profile; ownership is read-only."""
        model = Article
        fields = ["id", "title", "content", "author_id", "author", "created_at", "updated_at"]
        read_only_fields = fields


class ArticleCreateSerializer(serializers.Serializer):
    """Input for new articles; any client-supplied author is ignored."""

    title = serializers.CharField(max_length=255, allow_blank=False)
    content = serializers.CharField(min_length=CONTENT_MIN_LENGTH, allow_blank=False)


class ArticleUpdateSerializer(serializers.Serializer):
    """Partial update input; at least one field must be present."""

    title = serializers.CharField(max_length=255, allow_blank=False, required=False)
    content = serializers.CharField(min_length=CONTENT_MIN_LENGTH, allow_blank=False, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one of: title, content")
        return attrs


__all__ = ["ArticleSerializer", "ArticleCreateSerializer", "ArticleUpdateSerializer"]
