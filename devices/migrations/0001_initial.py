import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DeviceBan",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "identifier",
                    models.CharField(help_text="Identifier as entered", max_length=255),
                ),
                (
                    "identifier_normalized",
                    models.CharField(
                        editable=False,
                        help_text="Lower-cased identifier; enforces case-insensitive uniqueness",
                        max_length=255,
                        unique=True,
                    ),
                ),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "db_table": "device_bans",
                "ordering": ["created_at"],
            },
        ),
    ]
