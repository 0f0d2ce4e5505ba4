"""Operational endpoints: health check and the authenticated ``me`` probe."""

import time
from typing import Any, Callable, Dict

import structlog
from django.conf import settings
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

logger = structlog.get_logger(__name__)

HEALTH_CACHE_KEY = "_health_check"


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set(HEALTH_CACHE_KEY, "ok", 10)
    if cache.get(HEALTH_CACHE_KEY) != "ok":
        raise ConnectionError("Cache read failed")


def _probe(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception as exc:
        logger.error("health_check.dependency_down", service=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health

    Probes the database and the cache.  The freight API is only reported
    as configured; it is never called from here.
    """
    services: Dict[str, Dict[str, Any]] = {
        "database": _probe("database", _check_database),
        "cache": _probe("cache", _check_cache),
    }
    overall_healthy = all(s["status"] == "up" for s in services.values())

    freight_conf = getattr(settings, "FRETE_API", {})
    services["freight_api"] = {
        "status": "configured" if freight_conf.get("BASE_URL") else "missing",
    }

    status_label = "healthy" if overall_healthy else "unhealthy"
    logger.info("health_check.completed", status=status_label)

    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if overall_healthy else 503,
    )


class ProtectedView(APIView):
    """Returns the caller's identity; requires a valid JWT.

    * No token  -> 401
    * Bad token -> 401
    * Valid JWT -> 200
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        user = request.user
        return Response(
            {
                "id": user.pk,
                "username": user.get_username(),
                "is_staff": user.is_staff,
            }
        )
