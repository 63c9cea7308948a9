from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Location",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200, unique=True)),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("warehouse", "Warehouse"),
                            ("company", "Company"),
                            ("partner", "Partner"),
                            ("hospital", "Hospital"),
                        ],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("is_primary_warehouse", models.BooleanField(default=False)),
                ("supplier_name", models.CharField(blank=True, max_length=200)),
                ("gstin", models.CharField(blank=True, max_length=20, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("contact", models.CharField(blank=True, max_length=200, null=True)),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_primary_warehouse", True)),
                        fields=("is_primary_warehouse",),
                        name="unique_primary_warehouse",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("is_primary_warehouse", False), ("kind", "warehouse"), _connector="OR"),
                        name="primary_warehouse_kind",
                    ),
                ],
            },
        ),
    ]
