# Generated manually for officer self-registration.

from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OfficerRoster",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("staff_number", models.CharField(max_length=30, unique=True, verbose_name="Staff Number")),
                ("full_name", models.CharField(max_length=150, verbose_name="Full Name")),
            ],
            options={
                "verbose_name": "Officer Roster Entry",
                "verbose_name_plural": "Officer Roster",
                "ordering": ["full_name"],
            },
        ),
    ]
