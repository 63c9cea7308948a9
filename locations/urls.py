from django.urls import path

from .views import LocationAvailableItemsView, LocationDetailView, LocationListView

urlpatterns = [
    path("", LocationListView.as_view(), name="location-list"),
    path("<int:location_id>/", LocationDetailView.as_view(), name="location-detail"),
    path("<int:location_id>/available/", LocationAvailableItemsView.as_view(), name="location-available"),
]

# EOF
