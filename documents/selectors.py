"""Selectors for movement documents."""

from typing import Optional

from django.db.models import Count, Q, QuerySet, Sum

from .models import Document


def list_documents(*, search: Optional[str] = None) -> QuerySet[Document]:
    """Documents newest first, annotated with line count and total quantity."""

    qs = Document.objects.select_related("source_location", "dest_location").annotate(
        line_count=Count("lines"),
        total_qty=Sum("lines__qty"),
    )
    if search:
        qs = qs.filter(Q(doc_no__icontains=search) | Q(counterparty_name__icontains=search))
    return qs.order_by("-doc_date", "-id")


def get_document(doc_id) -> Optional[Document]:
    """Return a document with its lines, or None if not found."""

    try:
        return (
            Document.objects.select_related("source_location", "dest_location")
            .prefetch_related("lines")
            .get(id=doc_id)
        )
    except (Document.DoesNotExist, ValueError, TypeError):
        return None


# EOF
