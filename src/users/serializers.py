"""Serializers for user administration."""

from rest_framework import serializers


class UserCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, allow_blank=False)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, max_length=72)


class UserUpdateSerializer(serializers.Serializer):
    """Partial update; permission changes go through the permissions endpoints."""

    name = serializers.CharField(max_length=150, allow_blank=False, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True, min_length=6, max_length=72, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one of: name, email, password")
        return attrs


class PermissionGrantSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)


__all__ = ["UserCreateSerializer", "UserUpdateSerializer", "PermissionGrantSerializer"]
