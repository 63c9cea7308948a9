from django.urls import path

from .views import AvailabilityView, InventoryHealthView, InventoryListView, OutstandingListView

urlpatterns = [
    path("health/", InventoryHealthView.as_view(), name="inventory-health"),
    path("", InventoryListView.as_view(), name="inventory-list"),
    path("outstanding/", OutstandingListView.as_view(), name="outstanding-list"),
    path("availability/", AvailabilityView.as_view(), name="inventory-availability"),
]

# EOF
