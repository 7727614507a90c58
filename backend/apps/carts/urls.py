from django.urls import re_path

from .views import CartContextCreateView, CartDetailView

urlpatterns = [
    re_path(r"^cart-contexts/?$", CartContextCreateView.as_view(), name="api-cart-contexts"),
    re_path(
        r"^carts/(?P<context_id>[^/]+)/?$",
        CartDetailView.as_view(),
        name="api-carts-detail",
    ),
]
