"""Authentication endpoints: register, login, and profile."""

from typing import Any

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated

from core.response import BaseAPIView, api_response
from .serializers import LoginSerializer, RegisterSerializer, SessionSerializer, UserDetailSerializer
from .services import AuthService


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []
    auth_service = AuthService()

    @extend_schema(request=RegisterSerializer, responses={201: SessionSerializer}, auth=[])
    def post(self, request):
        """Register a new user and return their profile with a session token."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = self.auth_service.register(**serializer.validated_data)
        return api_response(session, status=status.HTTP_201_CREATED)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []
    auth_service = AuthService()

    @extend_schema(request=LoginSerializer, responses={200: SessionSerializer}, auth=[])
    def post(self, request):
        """Authenticate and issue a session token."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = self.auth_service.login(**serializer.validated_data)
        return api_response(session)


class ProfileView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserDetailSerializer})
    def get(self, request):
        """Return the current user's profile."""
        return api_response(UserDetailSerializer(request.user).data)
