"""User administration endpoints, restricted to the admin permission."""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from access_control.models import PermissionName
from access_control.permissions import RoleGuard
from access_control.services import UserPermissionService
from authentication.serializers import UserDetailSerializer
from core.response import BaseViewSet, api_response
from .serializers import PermissionGrantSerializer, UserCreateSerializer, UserUpdateSerializer
from .services import UserService


class UserViewSet(BaseViewSet):
    permission_classes = [RoleGuard]
    lookup_value_regex = r"\d+"
    required_permissions = (PermissionName.ADMIN.value,)
    service = UserService()
    user_permission_service = UserPermissionService()

    @extend_schema(responses={200: UserDetailSerializer(many=True)})
    def list(self, request):
        return api_response(UserDetailSerializer(self.service.find_all(), many=True).data)

    @extend_schema(responses={200: UserDetailSerializer})
    def retrieve(self, request, pk=None):
        return api_response(UserDetailSerializer(self._get_user(pk)).data)

    @extend_schema(request=UserCreateSerializer, responses={201: UserDetailSerializer})
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.service.create(**serializer.validated_data)
        return api_response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UserUpdateSerializer, responses={200: UserDetailSerializer})
    def partial_update(self, request, pk=None):
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.service.update(int(pk), serializer.validated_data)
        if user is None:
            raise NotFound("User not found")
        return api_response(UserDetailSerializer(user).data)

    @extend_schema(responses={204: None})
    def destroy(self, request, pk=None):
        if not self.service.remove(int(pk)):
            raise NotFound("User not found")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=PermissionGrantSerializer, responses={200: UserDetailSerializer})
    @action(detail=True, methods=["post"], url_path="permissions")
    def grant_permission(self, request, pk=None):
        """Grant a catalog permission to the user (idempotent)."""
        serializer = PermissionGrantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.user_permission_service.assign_permission_to_user(int(pk), serializer.validated_data["name"])
        return api_response(UserDetailSerializer(self._get_user(pk)).data)

    @extend_schema(responses={200: UserDetailSerializer})
    @action(detail=True, methods=["delete"], url_path=r"permissions/(?P<permission_name>[\w-]+)")
    def revoke_permission(self, request, pk=None, permission_name=None):
        self.user_permission_service.revoke_permission_from_user(int(pk), permission_name)
        return api_response(UserDetailSerializer(self._get_user(pk)).data)

    def _get_user(self, pk):
        user = self.service.find_one(int(pk))
        if user is None:
            raise NotFound("User not found")
        return user


__all__ = ["UserViewSet"]
