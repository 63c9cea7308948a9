"""Import a supplier delivery challan exported as CSV.

Expects the supplier's standard export headers (``Delivery Number``,
``Material Code``, ``QTY`` ...). Each row becomes a batch received into the
warehouse.
"""

import csv

from challans.services import import_challan
from django.core.management.base import BaseCommand, CommandError

COLUMNS = {
    "delivery_number": "Delivery Number",
    "delivery_date": "Delivery Date",
    "item_number": "Item Number",
    "material_code": "Material Code",
    "material_description": "Material Description",
    "hsn_code": "HSN Code",
    "qty": "QTY",
    "unit_cost": "Unit Cost",
}


class Command(BaseCommand):
    help = "Import a supplier challan CSV and book its lines into the warehouse."

    def add_arguments(self, parser):
        parser.add_argument("path", help="CSV file with one row per delivered line")
        parser.add_argument("--supplier", required=True, help="Supplier name as printed on the challan")

    def handle(self, *args, **options):
        try:
            with open(options["path"], newline="", encoding="utf-8-sig") as fh:
                reader = csv.DictReader(fh)
                rows = [{key: raw.get(header) for key, header in COLUMNS.items()} for raw in reader]
        except OSError as exc:
            raise CommandError(f"Cannot read {options['path']}: {exc}")

        result = import_challan(supplier_name=options["supplier"], rows=rows)
        if not result.success:
            raise CommandError(result.message)
        self.stdout.write(self.style.SUCCESS(f"{result.message} (document {result.doc_id})"))
