import json

from django.test import RequestFactory, SimpleTestCase

from apps.api.handlers import server_error


class ErrorHandlerTests(SimpleTestCase):
    def test_unmatched_path_returns_error_envelope(self):
        response = self.client.get("/api/cart/carts/")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
        )

    def test_unknown_top_level_path_returns_error_envelope(self):
        response = self.client.get("/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")

    def test_server_error_handler_is_generic(self):
        response = server_error(RequestFactory().get("/"))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            json.loads(response.content),
            {
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )
