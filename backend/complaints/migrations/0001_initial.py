# Generated manually for initial project scaffold.

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reporter_name", models.CharField(max_length=150, verbose_name="Reporter Name")),
                ("reporter_staff_number", models.CharField(max_length=30, verbose_name="Reporter Staff Number")),
                ("train_number", models.CharField(db_index=True, max_length=20, verbose_name="Train Number")),
                ("coach_number", models.CharField(db_index=True, max_length=20, verbose_name="Coach Number")),
                ("coach_class", models.CharField(db_column="class", max_length=20, verbose_name="Class")),
                ("unit", models.CharField(max_length=50, verbose_name="Unit")),
                ("configuration", models.CharField(max_length=50, verbose_name="Configuration")),
                ("capacity", models.PositiveIntegerField(verbose_name="Capacity")),
                ("position", models.PositiveIntegerField(verbose_name="Position")),
                ("pnr_number", models.CharField(max_length=20, verbose_name="PNR Number")),
                ("customer_name", models.CharField(max_length=120, verbose_name="Customer Name")),
                ("berth_number", models.CharField(max_length=20, verbose_name="Berth Number")),
                ("contact_number", models.CharField(blank=True, max_length=15, null=True, verbose_name="Contact Number")),
                ("issue_description", models.TextField(verbose_name="Issue Description")),
                ("action_plan", models.TextField(verbose_name="Action Plan")),
                ("action_during_service", models.TextField(blank=True, null=True, verbose_name="Action During Service")),
                ("action_required_in_yard", models.TextField(blank=True, null=True, verbose_name="Action Required In Yard")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("open", "Open"),
                            ("in_progress", "In Progress"),
                            ("resolved", "Resolved"),
                        ],
                        db_index=True,
                        default="open",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("resolved_at", models.DateTimeField(blank=True, null=True, verbose_name="Resolved At")),
                ("evidence_paths", models.JSONField(blank=True, default=list, verbose_name="Evidence Paths")),
                (
                    "reporter_user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reported_complaints",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Reporter",
                    ),
                ),
            ],
            options={
                "verbose_name": "Complaint",
                "verbose_name_plural": "Complaints",
                "ordering": ["-created_at"],
            },
        ),
    ]
