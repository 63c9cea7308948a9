from django.urls import path

from .views import TicketDetailView, TicketListView

urlpatterns = [
    path("", TicketListView.as_view(), name="ticket-list"),
    path("<str:ticket_code>/", TicketDetailView.as_view(), name="ticket-detail"),
]

# EOF
