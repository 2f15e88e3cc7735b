import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LicenseRecord",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(max_length=100, unique=True)),
                (
                    "owner_user_id",
                    models.PositiveIntegerField(
                        default=0, help_text="Owning user, 0 when no user is attached"
                    ),
                ),
                ("tier", models.CharField(max_length=50)),
                (
                    "bound_device_id",
                    models.CharField(
                        db_index=True,
                        help_text="Full identifier of the bound device",
                        max_length=255,
                    ),
                ),
                (
                    "bound_device_prefix",
                    models.CharField(
                        db_index=True,
                        editable=False,
                        help_text="Uppercase display prefix of the bound device",
                        max_length=8,
                    ),
                ),
                ("expires_at", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("banned", "Banned")],
                        db_index=True,
                        default="active",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "db_table": "license_records",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["bound_device_prefix", "status"],
                        name="license_prefix_status_idx",
                    )
                ],
            },
        ),
    ]
