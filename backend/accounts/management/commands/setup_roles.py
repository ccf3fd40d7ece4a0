"""
Management command: setup_roles
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the database with the three complaint-handling **Roles**.

The command is **idempotent**: safe to run multiple times.  Existing
roles keep their primary key; description and hierarchy level are
brought in line with the table below.

Usage::

    python manage.py setup_roles
"""

from django.core.management.base import BaseCommand

from accounts.models import AppRole, Role

# (role_name, description, hierarchy_level)
DEFAULT_ROLES: list[tuple[str, str, int]] = [
    (
        AppRole.ADMIN,
        "Full access: edits any complaint, changes status, deletes.",
        100,
    ),
    (
        AppRole.IN_CHARGE,
        "Coach in-charge: edits any complaint, changes status, deletes.",
        50,
    ),
    (
        AppRole.OFFICER,
        "Field officer: files complaints and edits own for 24 hours.",
        1,
    ),
]


class Command(BaseCommand):
    help = (
        "Seeds the admin, in_charge and officer roles.  "
        "Safe to run multiple times (idempotent)."
    )

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n══════════════════════════════════════════"
            "\n  Role Setup — Seeding Roles"
            "\n══════════════════════════════════════════\n"
        ))

        roles_created = 0
        roles_updated = 0

        for role_name, description, hierarchy_level in DEFAULT_ROLES:
            role, created = Role.objects.get_or_create(
                name=role_name,
                defaults={
                    "description": description,
                    "hierarchy_level": hierarchy_level,
                },
            )

            if created:
                roles_created += 1
            else:
                if (role.description, role.hierarchy_level) != (description, hierarchy_level):
                    role.description = description
                    role.hierarchy_level = hierarchy_level
                    role.save(update_fields=["description", "hierarchy_level"])
                roles_updated += 1

            action = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(
                f"  ✔  {action} role: {role_name:<12s} (hierarchy={hierarchy_level})"
            ))

        self.stdout.write(self.style.SUCCESS(
            f"\n  Done!  {roles_created} role(s) created, "
            f"{roles_updated} role(s) updated.\n"
        ))
