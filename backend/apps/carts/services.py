from __future__ import annotations

from apps.common import get_logger

from .dtos import CartSnapshotDTO, CreatedContextDTO
from .errors import ContextExpiredError, ContextNotFoundError
from .protocols import ContextStoreProtocol, UpstreamCartClientProtocol

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """
    Business rules for cart contexts.

    The local context store is authoritative for whether a context exists and
    whether it has expired; upstream is only asked for cart data once the store
    reports the context as known and unexpired.
    """

    def __init__(
        self,
        upstream: UpstreamCartClientProtocol,
        contexts: ContextStoreProtocol,
    ):
        self.upstream = upstream
        self.contexts = contexts
        self.logger = logger.bind(service="CartService")

    def create_context(self, market: str, channel: str) -> CreatedContextDTO:
        """
        Mint a context upstream, track its expiry locally and fetch its first cart.

        If the initial fetch fails the error propagates and the context stays
        registered; later get_cart calls retry the upstream fetch.
        """
        self.logger.debug("Creating cart context", market=market, channel=channel)
        context = self.upstream.create_context(market, channel)
        self.contexts.record(context.context_id, context.expires_at)
        self.logger.info(
            "Cart context created",
            context_id=context.context_id,
            expires_at=context.expires_at,
        )
        cart = self.upstream.get_cart(context.context_id)
        return CreatedContextDTO(context=context, cart=cart)

    def get_cart(self, context_id: str) -> CartSnapshotDTO:
        self.logger.debug("Fetching cart", context_id=context_id)
        record = self.contexts.lookup(context_id)
        if record is None:
            self.logger.info("Cart context not found", context_id=context_id)
            raise ContextNotFoundError(
                "Cart context not found", {"contextId": context_id}
            )
        if self.contexts.is_expired(context_id):
            self.logger.info(
                "Cart context expired",
                context_id=context_id,
                expires_at=record.expires_at,
            )
            raise ContextExpiredError(
                "Cart context has expired",
                {"contextId": context_id, "expiresAt": record.expires_at.isoformat()},
            )
        return self.upstream.get_cart(context_id)
