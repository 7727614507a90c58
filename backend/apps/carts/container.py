from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from apps.common import get_logger

from .protocols import UpstreamCartClientProtocol
from .services import CartService
from .stores import InMemoryContextStore

logger = get_logger(__name__).bind(component="carts", layer="container")


def upstream_client_path() -> str:
    return settings.CART_UPSTREAM_CLIENT


def build_upstream_client() -> UpstreamCartClientProtocol:
    path = upstream_client_path()
    client_cls = import_string(path)
    logger.info("Upstream cart client configured", client=path)
    return client_cls()


def build_cart_service() -> CartService:
    return CartService(
        upstream=build_upstream_client(),
        contexts=InMemoryContextStore(),
    )


@lru_cache(maxsize=1)
def get_cart_service() -> CartService:
    """Process-wide service; every view shares one context store and upstream client."""
    return build_cart_service()
