"""
Catalog app models.

The train catalog is the read-only source of the coach metadata that a
complaint snapshots when it is filed.  Editing a coach here never changes
complaints that already copied it.
"""

from django.db import models


class Train(models.Model):
    train_number = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Train Number",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        verbose_name = "Train"
        verbose_name_plural = "Trains"
        ordering = ["train_number"]

    def __str__(self):
        return self.train_number


class CoachFormation(models.Model):
    """One coach in a train's rake, at a fixed ``position``."""

    train = models.ForeignKey(
        Train,
        on_delete=models.CASCADE,
        related_name="coaches",
        verbose_name="Train",
    )
    coach_number = models.CharField(
        max_length=20,
        verbose_name="Coach Number",
    )
    coach_class = models.CharField(
        max_length=20,
        db_column="class",
        verbose_name="Class",
    )
    unit = models.CharField(
        max_length=50,
        verbose_name="Unit",
    )
    configuration = models.CharField(
        max_length=50,
        verbose_name="Configuration",
    )
    capacity = models.PositiveIntegerField(verbose_name="Capacity")
    position = models.PositiveIntegerField(verbose_name="Position")
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        verbose_name = "Coach Formation"
        verbose_name_plural = "Coach Formations"
        ordering = ["train", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["train", "coach_number"],
                name="unique_coach_per_train",
            ),
        ]

    def __str__(self):
        return f"{self.train.train_number}/{self.coach_number}"
