import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("material_code", models.CharField(max_length=64, unique=True)),
                ("description", models.CharField(blank=True, max_length=255, null=True)),
                ("uom", models.CharField(default="NOS", max_length=16)),
            ],
            options={
                "ordering": ["material_code"],
            },
        ),
        migrations.CreateModel(
            name="Challan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("supplier_name", models.CharField(db_index=True, max_length=200)),
                ("delivery_number", models.CharField(db_index=True, max_length=64)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("raw_doc_ref", models.CharField(blank=True, max_length=255, null=True)),
            ],
            options={
                "ordering": ["delivery_number"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("supplier_name", "delivery_number"), name="unique_challan_per_supplier"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ChallanLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("item_number", models.CharField(blank=True, max_length=32, null=True)),
                ("hsn_code", models.CharField(blank=True, max_length=16, null=True)),
                ("unit_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("qty_received", models.IntegerField()),
                (
                    "challan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, related_name="lines", to="challans.challan"
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, related_name="challan_lines", to="challans.item"
                    ),
                ),
            ],
            options={
                "ordering": ["challan__delivery_number", "item__material_code", "id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("qty_received__gt", 0)), name="qty_received_positive"),
                ],
            },
        ),
    ]
