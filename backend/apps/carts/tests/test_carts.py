import re
from datetime import timedelta
from unittest.mock import patch

from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.test import APISimpleTestCase

from apps.carts.clients import InMemoryUpstreamCartClient
from apps.carts.services import CartService
from apps.carts.stores import InMemoryContextStore
from apps.carts.tests.fakes import FakeClock
from apps.carts.views import CartContextCreateView, CartDetailView

CREATE_URL = "/api/cart/cart-contexts"


def cart_url(context_id):
    return f"/api/cart/carts/{context_id}"


class CartContextFlowTests(APISimpleTestCase):
    """Requests through the URL conf, middleware and exception handler."""

    def setUp(self):
        self.clock = FakeClock()
        self.service = CartService(
            upstream=InMemoryUpstreamCartClient(clock=self.clock),
            contexts=InMemoryContextStore(clock=self.clock),
        )
        for view in (CartContextCreateView, CartDetailView):
            patcher = patch.object(view, "service", self.service)
            patcher.start()
            self.addCleanup(patcher.stop)

    def create(self, payload=None):
        return self.client.post(
            CREATE_URL,
            payload if payload is not None else {"market": "CA", "channel": "web"},
            format="json",
        )

    def test_create_context(self):
        res = self.create()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        body = res.json()
        self.assertRegex(body["contextId"], r"^ctx-\d+$")
        self.assertGreater(parse_datetime(body["expiresAt"]), self.clock.now)
        self.assertGreaterEqual(len(body["cart"]["items"]), 1)
        self.assertEqual(body["cart"]["totals"]["currency"], "CAD")
        self.assertEqual(body["cart"]["cartId"], f"cart-{body['contextId']}")
        self.assertEqual(body["cart"]["expiresAt"], body["expiresAt"])

    def test_repeated_fetches_are_identical(self):
        context_id = self.create().json()["contextId"]
        first = self.client.get(cart_url(context_id))
        second = self.client.get(cart_url(context_id))
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(first.content, second.content)
        self.assertEqual(set(first.json()), {"cartId", "expiresAt", "items", "totals"})

    def test_fetch_matches_cart_returned_on_create(self):
        created = self.create().json()
        fetched = self.client.get(cart_url(created["contextId"])).json()
        self.assertEqual(fetched, created["cart"])

    def test_trailing_slash_is_accepted(self):
        context_id = self.create().json()["contextId"]
        res = self.client.get(cart_url(context_id) + "/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_missing_channel(self):
        res = self.create({"market": "CA"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        error = res.json()["error"]
        self.assertEqual(error["code"], "VALIDATION_ERROR")
        self.assertIn("channel", error["message"])

    def test_empty_body(self):
        res = self.create({})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        error = res.json()["error"]
        self.assertEqual(error["code"], "VALIDATION_ERROR")
        self.assertIn("market", error["message"])
        self.assertIn("channel", error["message"])

    def test_unknown_context(self):
        res = self.client.get(cart_url("unknown-ctx"))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        error = res.json()["error"]
        self.assertEqual(error["code"], "CONTEXT_NOT_FOUND")
        self.assertEqual(error["details"]["contextId"], "unknown-ctx")

    def test_expired_context(self):
        created = self.create().json()
        self.clock.set(parse_datetime(created["expiresAt"]) + timedelta(milliseconds=1))
        res = self.client.get(cart_url(created["contextId"]))
        self.assertEqual(res.status_code, status.HTTP_410_GONE)
        error = res.json()["error"]
        self.assertEqual(error["code"], "CONTEXT_EXPIRED")
        self.assertEqual(error["details"]["contextId"], created["contextId"])

    def test_context_stays_expired(self):
        created = self.create().json()
        self.clock.advance(minutes=15)
        self.assertEqual(
            self.client.get(cart_url(created["contextId"])).status_code,
            status.HTTP_410_GONE,
        )
        self.clock.advance(days=1)
        self.assertEqual(
            self.client.get(cart_url(created["contextId"])).status_code,
            status.HTTP_410_GONE,
        )

    def test_contexts_are_independent(self):
        first = self.create().json()
        self.clock.advance(minutes=10)
        second = self.create().json()
        self.clock.advance(minutes=6)
        self.assertEqual(
            self.client.get(cart_url(first["contextId"])).status_code,
            status.HTTP_410_GONE,
        )
        self.assertEqual(
            self.client.get(cart_url(second["contextId"])).status_code,
            status.HTTP_200_OK,
        )
        self.assertTrue(re.match(r"^ctx-2$", second["contextId"]))
