# Generated manually for initial project scaffold.

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("complaints", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ComplianceSyncAttempt",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("attempt_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Attempted At")),
                (
                    "outcome",
                    models.CharField(
                        choices=[("success", "Success"), ("failed", "Failed")],
                        max_length=10,
                        verbose_name="Outcome",
                    ),
                ),
                ("message", models.TextField(blank=True, null=True, verbose_name="Message")),
                (
                    "complaint",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="sync_attempts",
                        to="complaints.complaint",
                        verbose_name="Complaint",
                    ),
                ),
            ],
            options={
                "verbose_name": "Compliance Sync Attempt",
                "verbose_name_plural": "Compliance Sync Attempts",
                "ordering": ["-attempt_at", "-id"],
            },
        ),
    ]
