"""Serializers for authentication flows (register, login, profile)."""

from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    """Validate registration input; uniqueness is enforced by AuthService."""

    name = serializers.CharField(max_length=150, allow_blank=False)
    email = serializers.EmailField()
    # bcrypt only considers the first 72 bytes of a password.
    password = serializers.CharField(write_only=True, min_length=6, max_length=72)


class LoginSerializer(serializers.Serializer):
    """Validate login input shape; credentials are checked by AuthService."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, max_length=72)


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only public projection of a user; never includes password data."""

    permissions = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)

    class Meta:
        """Expose identity fields and granted permission names."""
        model = User
        fields = [
            "id",
            "name",
            "email",
            "permissions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SessionSerializer(serializers.Serializer):
    """Shape of register/login responses (documentation only)."""

    user = UserDetailSerializer()
    token = serializers.CharField()


__all__ = ["RegisterSerializer", "LoginSerializer", "UserDetailSerializer", "SessionSerializer"]
