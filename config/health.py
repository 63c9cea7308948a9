from django.db import DatabaseError, connection
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response


@extend_schema(tags=["Health Endpoint"], summary="Health check (includes database reachability)")
@api_view(["GET"])
@throttle_classes([])
def health(request):
    try:
        connection.ensure_connection()
    except DatabaseError:
        return Response({"status": "degraded", "database": "unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response({"status": "ok", "database": "ok"})
