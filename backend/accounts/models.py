"""
Accounts app models.

Defines the three-tier Role system (officer, in-charge, admin) and a
custom User model that extends Django's ``AbstractUser`` with the staff
profile a complaint snapshots at submission time (display name and
staff number).
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class AppRole(models.TextChoices):
    """Privilege tiers.  In-charge and admin are the privileged tiers."""

    ADMIN = "admin", "Admin"
    IN_CHARGE = "in_charge", "In-Charge"
    OFFICER = "officer", "Officer"


class Role(models.Model):
    """
    Admin-manageable role.

    ``hierarchy_level`` only orders roles for display; privilege is decided
    by ``name`` through ``accounts.roles.RoleAuthorizationBackend``.

    Default roles are seeded by ``python manage.py setup_roles``.
    """

    name = models.CharField(
        max_length=20,
        unique=True,
        choices=AppRole.choices,
        verbose_name="Role Name",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    hierarchy_level = models.PositiveSmallIntegerField(
        default=0,
        verbose_name="Hierarchy Level",
        help_text="Higher value = more authority (e.g. Admin=100, Officer=1).",
    )

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ["-hierarchy_level"]

    def __str__(self):
        return self.get_name_display()


class User(AbstractUser):
    """
    Railway staff member.

    Login is supported via ``username`` or ``staff_number`` together with
    the password.  ``full_name`` and ``staff_number`` are copied onto every
    complaint the user reports.

    Each user holds exactly **one** role at a time (FK to ``Role``); a user
    without a role is treated as an officer.
    """

    full_name = models.CharField(
        max_length=150,
        verbose_name="Full Name",
    )
    staff_number = models.CharField(
        max_length=30,
        unique=True,
        verbose_name="Staff Number",
        db_index=True,
    )
    phone = models.CharField(
        max_length=15,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )

    # ── Single-role assignment ───────────────────────────────────────
    role = models.ForeignKey(
        Role,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        verbose_name="Assigned Role",
    )

    # Fields required when creating a superuser via CLI
    REQUIRED_FIELDS = ["email", "full_name", "staff_number"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        role_name = self.role.name if self.role else "No Role"
        return f"{self.username} ({self.full_name}) - {role_name}"

    @property
    def display_name(self) -> str:
        """Name shown on complaints; falls back to Django's full name."""
        return self.full_name or self.get_full_name() or self.username


class OfficerRoster(models.Model):
    """
    Staff cleared to create their own officer account.

    Self-registration is only open to staff numbers listed here; the
    account takes its ``full_name`` from the roster entry.
    """

    staff_number = models.CharField(
        max_length=30,
        unique=True,
        verbose_name="Staff Number",
    )
    full_name = models.CharField(
        max_length=150,
        verbose_name="Full Name",
    )

    class Meta:
        verbose_name = "Officer Roster Entry"
        verbose_name_plural = "Officer Roster"
        ordering = ["full_name"]

    def __str__(self):
        return f"{self.full_name} ({self.staff_number})"
