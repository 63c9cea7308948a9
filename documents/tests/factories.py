from datetime import date

import factory
from documents.models import Document, DocumentLine
from documents.services import determine_doc_type
from factory.django import DjangoModelFactory
from locations.tests.factories import CompanyFactory, WarehouseFactory


class DocumentFactory(DjangoModelFactory):
    class Meta:
        model = Document

    doc_no = factory.Sequence(lambda n: f"DOC-{n:06d}")
    doc_date = date(2024, 1, 1)
    source_location = factory.SubFactory(CompanyFactory)
    dest_location = factory.SubFactory(WarehouseFactory)
    doc_type = factory.LazyAttribute(lambda o: determine_doc_type(o.dest_location.kind))


class DocumentLineFactory(DjangoModelFactory):
    class Meta:
        model = DocumentLine

    document = factory.SubFactory(DocumentFactory)
    challan_line = factory.SubFactory("challans.tests.factories.ChallanLineFactory")
    qty = 1
    material_code = factory.LazyAttribute(lambda o: o.challan_line.item.material_code)
    material_description = factory.LazyAttribute(lambda o: o.challan_line.item.description)
    company_delivery_no = factory.LazyAttribute(lambda o: o.challan_line.challan.delivery_number)
    company_delivery_date = factory.LazyAttribute(lambda o: o.challan_line.challan.delivery_date)


def move(batch, source, dest, qty, *, ticket_code=None, doc_date=date(2024, 1, 1)):
    """Record a single-line movement directly, bypassing validation."""

    document = DocumentFactory(source_location=source, dest_location=dest, doc_date=doc_date)
    return DocumentLineFactory(document=document, challan_line=batch, qty=qty, ticket_code=ticket_code)


def receive(batch, *, warehouse=None, company=None, doc_date=date(2024, 1, 1)):
    """Book a batch's full received quantity from its supplier into the warehouse."""

    warehouse = warehouse or WarehouseFactory()
    company = company or CompanyFactory(supplier=batch.challan.supplier_name)
    move(batch, company, warehouse, batch.qty_received, doc_date=doc_date)
    return warehouse, company
