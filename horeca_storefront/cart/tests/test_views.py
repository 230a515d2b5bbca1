# cart/tests/test_views.py

import json
from unittest import mock

from django.core.cache import cache
from django.test import SimpleTestCase

from cart.services.cart_store import CartLine, CookieCart
from cart.services.cookies import decode_json_cookie, encode_json_cookie
from catalog.services.exceptions import NotFoundError

OVEN = {
    "id": 10,
    "slug": "combi-oven",
    "name_en": "Combi Oven",
    "price": "9000.00",
    "has_variants": True,
    "variant_type_en": "Capacity",
    "images": [],
}
VARIANTS = [
    {"id": 1, "value_en": "6 trays", "price": "9000", "is_active": True},
    {"id": 2, "value_en": "10 trays", "price": "12000", "is_active": True},
]


class CookieClientMixin:
    def setUp(self):
        super().setUp()
        cache.clear()
        patcher = mock.patch("catalog.services.server_api.get_client")
        self.backend = patcher.start().return_value
        self.addCleanup(patcher.stop)
        self.backend.get_categories.return_value = []

    def set_cart(self, lines):
        cart = CookieCart(lines)
        self.client.cookies["cart"] = encode_json_cookie(cart.to_data())

    def cart_cookie(self):
        return decode_json_cookie(self.client.cookies["cart"].value)

    def favorites_cookie(self):
        return decode_json_cookie(self.client.cookies["favorites"].value)


class CartApiTests(CookieClientMixin, SimpleTestCase):
    """
    JSON cart API.

    GUARANTEES:
    - Every mutation re-writes the cart cookie
    - Adds merge by (id, size, variants)
    - qty on add must be >= 1; qty on update clamps to 1
    """

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def test_empty_cart(self):
        response = self.client.get("/api/cart/")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["items"], [])
        self.assertEqual(body["item_count"], 0)
        self.assertEqual(body["total"], "0.00")
        self.assertEqual(body["currency"], "RON")

    def test_add_merges_and_computes_totals(self):
        item = {"id": "10", "name": "Combi Oven", "price": "100.00", "qty": 1}

        self._post("/api/cart/items/", item)
        response = self._post("/api/cart/items/", dict(item, qty=2))

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(len(body["items"]), 1)
        self.assertEqual(body["items"][0]["qty"], 3)
        self.assertEqual(body["subtotal"], "300.00")
        self.assertEqual(body["tax"], "63.00")
        self.assertEqual(body["total"], "363.00")
        self.assertEqual(self.cart_cookie()[0]["qty"], 3)

    def test_add_rejects_zero_qty(self):
        response = self._post(
            "/api/cart/items/", {"id": "10", "name": "Oven", "price": "1.00", "qty": 0}
        )
        self.assertEqual(response.status_code, 400)

    def test_variants_make_separate_lines(self):
        base = {"id": "10", "name": "Combi Oven", "price": "9000.00"}
        self._post("/api/cart/items/", base)
        response = self._post(
            "/api/cart/items/",
            dict(base, variants={"Capacity": {"name_en": "Capacity", "value_en": "6 trays", "price": 9000}}),
        )

        self.assertEqual(len(response.json()["items"]), 2)

    def test_patch_clamps_qty(self):
        self.set_cart([CartLine(id="10", name="Oven", price="5.00", qty=3)])

        response = self.client.patch(
            "/api/cart/items/",
            data=json.dumps({"id": "10", "qty": -2}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["items"][0]["qty"], 1)

    def test_patch_unknown_line(self):
        response = self.client.patch(
            "/api/cart/items/",
            data=json.dumps({"id": "99", "qty": 2}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["code"], "LINE_NOT_FOUND")

    def test_delete_line_and_clear(self):
        self.set_cart(
            [
                CartLine(id="10", name="Oven", price="5.00"),
                CartLine(id="11", name="Fryer", price="7.00", size="L"),
            ]
        )

        response = self.client.delete(
            "/api/cart/items/",
            data=json.dumps({"id": "11", "size": "L"}),
            content_type="application/json",
        )
        self.assertEqual([i["id"] for i in response.json()["items"]], ["10"])

        response = self.client.post("/api/cart/clear/")
        self.assertEqual(response.json()["items"], [])
        self.assertEqual(self.cart_cookie(), [])

    def test_favorites_toggle(self):
        payload = {"id": "combi-oven", "name": "Combi Oven", "price": "9000.00"}

        first = self._post("/api/favorites/toggle/", payload)
        self.assertTrue(first.json()["is_favorite"])
        self.assertEqual(first.json()["count"], 1)

        second = self._post("/api/favorites/toggle/", payload)
        self.assertFalse(second.json()["is_favorite"])
        self.assertEqual(self.favorites_cookie(), [])


class CartPageTests(CookieClientMixin, SimpleTestCase):
    """
    HTML cart + favorites.

    GUARANTEES:
    - Add-to-cart prices lines from the backend product, not the form
    - Lines are addressed by their opaque token
    """

    def test_cart_page_lists_lines(self):
        self.set_cart([CartLine(id="10", name="Combi Oven", price="100.00", qty=2)])

        response = self.client.get("/cart/")

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Combi Oven")
        self.assertEqual(response.context["totals"].total, 242)
        self.assertEqual(response.context["cart_count"], 2)

    def test_add_uses_variant_price(self):
        self.backend.get_product_by_slug.return_value = OVEN
        self.backend.get_product_variants.return_value = VARIANTS

        response = self.client.post(
            "/cart/add/",
            {"slug": "combi-oven", "variant_id": "2", "qty": "2", "next": "/product/combi-oven/"},
        )

        self.assertRedirects(response, "/product/combi-oven/", fetch_redirect_response=False)
        lines = self.cart_cookie()
        self.assertEqual(lines[0]["price"], 12000.0)
        self.assertEqual(lines[0]["qty"], 2)
        self.assertEqual(lines[0]["variants"]["Capacity"]["value_en"], "10 trays")

    def test_add_rejects_unknown_variant(self):
        self.backend.get_product_by_slug.return_value = OVEN
        self.backend.get_product_variants.return_value = VARIANTS

        self.client.post("/cart/add/", {"slug": "combi-oven", "variant_id": "99"})

        self.assertNotIn("cart", self.client.cookies)

    def test_add_unknown_product(self):
        self.backend.get_product_by_slug.side_effect = NotFoundError("nope", status_code=404)

        response = self.client.post("/cart/add/", {"slug": "ghost"})

        self.assertRedirects(response, "/cart/", fetch_redirect_response=False)
        self.assertNotIn("cart", self.client.cookies)

    def test_update_and_remove_by_token(self):
        oven = CartLine(id="10", name="Oven", price="5.00", qty=1)
        self.set_cart([oven])

        self.client.post("/cart/update/", {"token": oven.token, "qty": "4"})
        self.assertEqual(self.cart_cookie()[0]["qty"], 4)

        self.client.post("/cart/remove/", {"token": oven.token})
        self.assertEqual(self.cart_cookie(), [])

    def test_toggle_favorite_from_product_page(self):
        self.backend.get_product_by_slug.return_value = OVEN

        self.client.post("/favorites/toggle/", {"slug": "combi-oven"})
        self.assertEqual(self.favorites_cookie()[0]["id"], "combi-oven")

        response = self.client.get("/favorites/")
        self.assertContains(response, "Combi Oven")

        self.client.post("/favorites/toggle/", {"slug": "combi-oven"})
        self.assertEqual(self.favorites_cookie(), [])
