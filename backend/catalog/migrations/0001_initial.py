# Generated manually for initial project scaffold.

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Train",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("train_number", models.CharField(max_length=20, unique=True, verbose_name="Train Number")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
            ],
            options={
                "verbose_name": "Train",
                "verbose_name_plural": "Trains",
                "ordering": ["train_number"],
            },
        ),
        migrations.CreateModel(
            name="CoachFormation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("coach_number", models.CharField(max_length=20, verbose_name="Coach Number")),
                ("coach_class", models.CharField(db_column="class", max_length=20, verbose_name="Class")),
                ("unit", models.CharField(max_length=50, verbose_name="Unit")),
                ("configuration", models.CharField(max_length=50, verbose_name="Configuration")),
                ("capacity", models.PositiveIntegerField(verbose_name="Capacity")),
                ("position", models.PositiveIntegerField(verbose_name="Position")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                (
                    "train",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coaches",
                        to="catalog.train",
                        verbose_name="Train",
                    ),
                ),
            ],
            options={
                "verbose_name": "Coach Formation",
                "verbose_name_plural": "Coach Formations",
                "ordering": ["train", "position"],
            },
        ),
        migrations.AddConstraint(
            model_name="coachformation",
            constraint=models.UniqueConstraint(fields=("train", "coach_number"), name="unique_coach_per_train"),
        ),
    ]
