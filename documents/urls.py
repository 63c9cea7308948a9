from django.urls import path

from .views import DocumentDetailView, DocumentListView

urlpatterns = [
    path("", DocumentListView.as_view(), name="document-list"),
    path("<int:doc_id>/", DocumentDetailView.as_view(), name="document-detail"),
]

# EOF
