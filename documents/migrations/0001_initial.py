import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("challans", "0001_initial"),
        ("locations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Document",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("doc_no", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                (
                    "doc_type",
                    models.CharField(
                        choices=[("in", "Inbound"), ("out", "Outbound"), ("return", "Return")],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                ("doc_date", models.DateField(db_index=True)),
                ("counterparty_name", models.CharField(blank=True, max_length=200, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "source_location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outbound_documents",
                        to="locations.location",
                    ),
                ),
                (
                    "dest_location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inbound_documents",
                        to="locations.location",
                    ),
                ),
            ],
            options={
                "ordering": ["-doc_date", "-id"],
                "indexes": [
                    models.Index(fields=["source_location", "doc_date"], name="document_source_date_idx"),
                    models.Index(fields=["dest_location", "doc_date"], name="document_dest_date_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("source_location", models.F("dest_location")), _negated=True),
                        name="document_source_ne_dest",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DocumentLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("ticket_code", models.CharField(blank=True, db_index=True, max_length=32, null=True)),
                ("qty", models.IntegerField()),
                ("material_code", models.CharField(blank=True, max_length=64, null=True)),
                ("material_description", models.CharField(blank=True, max_length=255, null=True)),
                ("company_delivery_no", models.CharField(blank=True, max_length=64, null=True)),
                ("company_delivery_date", models.DateField(blank=True, null=True)),
                (
                    "challan_line",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="challans.challanline",
                    ),
                ),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, related_name="lines", to="documents.document"
                    ),
                ),
            ],
            options={
                "ordering": ["document_id", "id"],
                "indexes": [
                    models.Index(fields=["challan_line", "document"], name="docline_batch_document_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("qty__gt", 0)), name="document_line_qty_positive"),
                ],
            },
        ),
    ]
