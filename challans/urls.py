from django.urls import path

from .views import ChallanImportView

urlpatterns = [
    path("import/", ChallanImportView.as_view(), name="challan-import"),
]

# EOF
