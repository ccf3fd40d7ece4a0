"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.

View Map
--------
- ``RosterView``         — GET   /auth/roster/
- ``RegisterView``       — POST  /auth/register/
- ``LoginView``          — POST  /auth/login/
- ``MeView``             — GET | PATCH /me/
- ``PasswordChangeView`` — POST  /me/password/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    CustomTokenObtainPairSerializer,
    MeUpdateSerializer,
    PasswordChangeSerializer,
    RegisterRequestSerializer,
    RosterEntrySerializer,
    UserDetailSerializer,
)
from .services import CurrentUserService, UserRegistrationService


# ═══════════════════════════════════════════════════════════════════
#  Registration
# ═══════════════════════════════════════════════════════════════════


class RosterView(generics.ListAPIView):
    """
    GET /api/accounts/auth/roster/

    Public endpoint.  Officers pick their entry here before registering;
    entries that already have an account are left out.
    """

    permission_classes = [AllowAny]
    serializer_class = RosterEntrySerializer
    pagination_class = None

    @extend_schema(summary="Unclaimed officer roster", tags=["Accounts"])
    def get(self, request: Request, *args, **kwargs) -> Response:
        return super().get(request, *args, **kwargs)

    def get_queryset(self):
        return UserRegistrationService.open_roster()


class RegisterView(generics.CreateAPIView):
    """
    POST /api/accounts/auth/register/

    Public endpoint.  Creates an officer account for a roster entry.

    Request body  → ``RegisterRequestSerializer``
    Response body → ``UserDetailSerializer`` (201 Created)
    """

    permission_classes = [AllowAny]
    serializer_class = RegisterRequestSerializer

    @extend_schema(
        summary="Register as an officer",
        responses={
            201: UserDetailSerializer,
            400: OpenApiResponse(description="Not on the roster, already registered, or bad password."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request, *args, **kwargs) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserRegistrationService.register_officer(**serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)


# ═══════════════════════════════════════════════════════════════════
#  Authentication
# ═══════════════════════════════════════════════════════════════════


class LoginView(APIView):
    """
    POST /api/accounts/auth/login/

    Public endpoint.  Authenticates a user by username or staff number
    plus password and returns a JWT pair with the user's profile.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in",
        description="Exchange a username or staff number and password for a JWT pair.",
        request=CustomTokenObtainPairSerializer,
        responses={
            200: OpenApiResponse(description="Token pair plus `user` profile."),
            400: OpenApiResponse(description="Invalid credentials."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = CustomTokenObtainPairSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        payload = serializer.validated_data  # contains 'access' and 'refresh'
        payload["user"] = UserDetailSerializer(serializer.user).data

        return Response(payload, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  Current User
# ═══════════════════════════════════════════════════════════════════


class MeView(APIView):
    """
    GET   /api/accounts/me/ → profile with resolved role flags.
    PATCH /api/accounts/me/ → update own ``full_name`` / ``phone``.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user",
        responses={200: UserDetailSerializer},
        tags=["Accounts"],
    )
    def get(self, request: Request) -> Response:
        user, flags = CurrentUserService.get_profile(request.user)
        serializer = UserDetailSerializer(user, context={"role_flags": flags})
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update own profile",
        request=MeUpdateSerializer,
        responses={200: UserDetailSerializer},
        tags=["Accounts"],
    )
    def patch(self, request: Request) -> Response:
        serializer = MeUpdateSerializer(
            instance=request.user, data=request.data, partial=True,
        )
        serializer.is_valid(raise_exception=True)
        user, flags = CurrentUserService.update_profile(
            request.user, serializer.validated_data,
        )
        return Response(
            UserDetailSerializer(user, context={"role_flags": flags}).data,
            status=status.HTTP_200_OK,
        )


class PasswordChangeView(APIView):
    """
    POST /api/accounts/me/password/

    Sets a new password for the authenticated user.  Tokens issued
    before the change stay valid until they expire.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Change own password",
        request=PasswordChangeSerializer,
        responses={204: None},
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        CurrentUserService.change_password(
            request.user, serializer.validated_data["new_password"],
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
