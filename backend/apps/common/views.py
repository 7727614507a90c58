from django.http import JsonResponse

from apps.carts import container

from .logger import get_logger

logger = get_logger(__name__).bind(component="common", layer="health")


def _upstream_check():
    path = container.upstream_client_path()
    try:
        service = container.get_cart_service()
    except (ImportError, TypeError, ValueError) as e:
        logger.warning("Upstream client could not be built", client=path, error=str(e))
        return {"status": "fail", "client": path, "error": str(e)}
    return {
        "status": "ok",
        "client": path,
        "tracked_contexts": len(service.contexts),
    }


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug("Liveness probe served")
    return JsonResponse({"status": "alive"})


def ready_health(request):
    """Readiness probe: the cart service and its upstream client can be constructed."""
    checks = {"upstream": _upstream_check()}
    failing = [name for name, r in checks.items() if r.get("status") == "fail"]
    overall_status = "ok" if not failing else "degraded"
    logger.info("Readiness probe evaluated", status=overall_status, failing_components=failing)
    return JsonResponse(
        {"status": overall_status, "checks": checks},
        status=200 if not failing else 503,
    )
