from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger

from .container import get_cart_service
from .serializers import (
    CartContextCreateSerializer,
    CartContextReadSerializer,
    CartReadSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")


class CartServiceMixin:
    """Looks up the process-wide CartService on each access, never at import."""

    @property
    def service(self):
        return get_cart_service()


class CartContextCreateView(CartServiceMixin, APIView):
    permission_classes = [AllowAny]
    log = logger.bind(view="CartContextCreateView")

    @extend_schema(
        summary="Create cart context",
        description=(
            "Creates a short-lived cart context with the upstream provider for the given market "
            "and channel, and returns the context together with its initial cart."
        ),
        request=CartContextCreateSerializer,
        responses={
            201: CartContextReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            503: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartContextCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        created = self.service.create_context(
            serializer.validated_data["market"],
            serializer.validated_data["channel"],
        )
        self.log.info(
            "Cart context created via API",
            context_id=created.context.context_id,
            market=serializer.validated_data["market"],
            channel=serializer.validated_data["channel"],
        )
        return Response(
            CartContextReadSerializer(created).data, status=status.HTTP_201_CREATED
        )


class CartDetailView(CartServiceMixin, APIView):
    permission_classes = [AllowAny]
    log = logger.bind(view="CartDetailView")

    @extend_schema(
        summary="Get cart",
        parameters=[OpenApiParameter("context_id", str, OpenApiParameter.PATH)],
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            410: OpenApiResponse(response=ErrorResponseSerializer),
            503: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, context_id: str):
        cart = self.service.get_cart(context_id)
        self.log.debug("Cart served", context_id=context_id, cart_id=cart.cart_id)
        return Response(CartReadSerializer(cart).data)
