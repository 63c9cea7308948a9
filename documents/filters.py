"""Query-string filters for the document list."""

import django_filters
from django.db.models import Q

from .models import Document


class DocumentFilter(django_filters.FilterSet):
    doc_type = django_filters.ChoiceFilter(choices=Document.TYPE_CHOICES)
    date_from = django_filters.DateFilter(field_name="doc_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="doc_date", lookup_expr="lte")
    location = django_filters.NumberFilter(method="filter_location")
    doc_no = django_filters.CharFilter(lookup_expr="icontains")

    class Meta:
        model = Document
        fields = ["doc_type", "date_from", "date_to", "location", "doc_no"]

    def filter_location(self, queryset, name, value):
        return queryset.filter(Q(source_location_id=value) | Q(dest_location_id=value))


# EOF
