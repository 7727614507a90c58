from rest_framework import serializers


class CartContextCreateSerializer(serializers.Serializer):
    market = serializers.CharField(max_length=64)
    channel = serializers.CharField(max_length=64)


class CartItemSerializer(serializers.Serializer):
    plan = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class CartTotalsSerializer(serializers.Serializer):
    currency = serializers.CharField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    tax = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)


class CartReadSerializer(serializers.Serializer):
    cartId = serializers.CharField(source="cart_id")
    expiresAt = serializers.DateTimeField(source="expires_at")
    items = CartItemSerializer(many=True)
    totals = CartTotalsSerializer()


class CartContextReadSerializer(serializers.Serializer):
    contextId = serializers.CharField(source="context.context_id")
    expiresAt = serializers.DateTimeField(source="context.expires_at")
    cart = CartReadSerializer()
