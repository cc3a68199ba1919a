import django.core.serializers.json
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="UrlMetadataCache",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("url", models.CharField(db_index=True, max_length=2048)),
                ("normalized_url", models.CharField(db_index=True, max_length=2048)),
                ("url_hash", models.CharField(max_length=64, unique=True)),
                ("title", models.CharField(blank=True, max_length=500, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("image_url", models.CharField(blank=True, max_length=2048, null=True)),
                (
                    "price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("currency", models.CharField(blank=True, max_length=3, null=True)),
                ("platform", models.CharField(blank=True, db_index=True, max_length=50, null=True)),
                ("extraction_method", models.CharField(blank=True, max_length=100, null=True)),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                    ),
                ),
                ("hit_count", models.PositiveIntegerField(default=0)),
                ("extracted_at", models.DateTimeField(blank=True, null=True)),
                ("last_accessed_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, db_index=True, null=True)),
            ],
            options={
                "db_table": "url_metadata_caches",
                "ordering": ["-hit_count", "-id"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["hit_count", "last_accessed_at"], name="idx_url_caches_popularity"),
                    models.Index(fields=["url", "expires_at"], name="idx_url_caches_url_expiry"),
                ],
            },
        ),
    ]
