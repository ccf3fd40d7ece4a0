"""
Accounts app serializers.

Contains the Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here; role questions are
answered by ``accounts.roles``.
"""

from __future__ import annotations

import re
from typing import Any

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core.constants import MIN_PASSWORD_LENGTH, PHONE_MAX_DIGITS, PHONE_MIN_DIGITS

from .models import OfficerRoster, Role

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom SimpleJWT serializer that:

    1. Accepts ``identifier`` + ``password`` instead of
       ``username`` + ``password``.
    2. Resolves the user via the ``MultiFieldAuthBackend``.
    3. Injects ``role`` and ``staff_number`` claims into the token.
    """

    # Override the default username field with our multi-field identifier
    username_field = "identifier"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.pop(self.username_field, None)
        self.fields["identifier"] = serializers.CharField(
            help_text="Username or staff number.",
        )

    @classmethod
    def get_token(cls, user) -> Any:
        token = super().get_token(user)
        token["role"] = user.role.name if user.role else None
        token["staff_number"] = user.staff_number
        return token

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """
        Authenticate using the custom ``MultiFieldAuthBackend``.

        Returns a dict containing ``access`` and ``refresh``; the
        authenticated user is left on ``self.user`` for the view.
        """
        user = authenticate(
            request=self.context.get("request"),
            identifier=attrs.get("identifier"),
            password=attrs.get("password"),
        )

        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid credentials."},
                code="authentication",
            )

        if not user.is_active:
            raise serializers.ValidationError(
                {"detail": "User account is disabled."},
                code="authentication",
            )

        refresh = self.get_token(user)
        self.user = user
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


# ═══════════════════════════════════════════════════════════════════
#  Registration Serializers
# ═══════════════════════════════════════════════════════════════════


class RosterEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = OfficerRoster
        fields = ["staff_number", "full_name"]
        read_only_fields = fields


class RegisterRequestSerializer(serializers.Serializer):
    """
    Officer self-registration.

    The staff number must be on the officer roster; the roster supplies
    the display name.  The staff number doubles as the username.
    """

    staff_number = serializers.CharField(max_length=30)
    password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
        help_text=f"Minimum {MIN_PASSWORD_LENGTH} characters.",
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Must match 'password'.",
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["password"] != attrs.pop("password_confirm"):
            raise serializers.ValidationError(
                {"password_confirm": "Passwords do not match."}
            )
        return attrs


# ═══════════════════════════════════════════════════════════════════
#  Self-Service Profile Serializers
# ═══════════════════════════════════════════════════════════════════


def sanitize_phone(raw: str) -> str:
    """Keep digits only; an empty result clears the phone number."""
    return re.sub(r"\D", "", raw.strip())


class MeUpdateSerializer(serializers.ModelSerializer):
    """
    Fields a user may change on their own profile.  Staff number, role
    and username are managed by administrators.
    """

    phone = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=32,
        help_text=f"{PHONE_MIN_DIGITS}-{PHONE_MAX_DIGITS} digits; separators are stripped.",
    )

    class Meta:
        model = User
        fields = ["full_name", "phone"]

    def validate_phone(self, value: str) -> str:
        digits = sanitize_phone(value)
        if digits and not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
            raise serializers.ValidationError(
                f"Phone number should be {PHONE_MIN_DIGITS}-{PHONE_MAX_DIGITS} digits."
            )
        return digits


class PasswordChangeSerializer(serializers.Serializer):
    new_password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
    )
    confirm_password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["new_password"] != attrs["confirm_password"]:
            raise serializers.ValidationError(
                {"confirm_password": "Passwords do not match."}
            )
        return attrs


# ═══════════════════════════════════════════════════════════════════
#  Role / User Serializers
# ═══════════════════════════════════════════════════════════════════


class RoleListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ["id", "name", "description", "hierarchy_level"]
        read_only_fields = fields


class RoleFlagsSerializer(serializers.Serializer):
    """Read-only rendering of ``accounts.roles.RoleFlags``."""

    resolution = serializers.CharField(source="resolution.value")
    is_admin = serializers.BooleanField()
    is_in_charge = serializers.BooleanField()
    is_admin_or_in_charge = serializers.BooleanField()


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full user representation (login response and ``/me/``).

    ``role_flags`` is only present when the view passes the resolved
    snapshot in the serializer context as ``role_flags``.
    """

    role_detail = RoleListSerializer(source="role", read_only=True)
    role_flags = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "full_name",
            "staff_number",
            "phone",
            "is_active",
            "date_joined",
            "role",
            "role_detail",
            "role_flags",
        ]
        read_only_fields = fields

    def get_role_flags(self, obj) -> dict | None:
        flags = self.context.get("role_flags")
        if flags is None:
            return None
        return RoleFlagsSerializer(flags).data
