# cart/tests/test_cart_store.py

from decimal import Decimal
from urllib.parse import quote

from django.http import HttpResponse
from django.test import SimpleTestCase

from cart.services.cart_store import CartLine, CookieCart, compute_totals, merge_key
from cart.services.cookies import decode_json_cookie, encode_json_cookie
from cart.services.favorites_store import CookieFavorites, FavoriteItem
from cart.services.product_lines import (
    UnknownVariantError,
    favorite_from_product,
    line_from_product,
)

SIX_TRAYS = {"name_en": "Capacity", "value_en": "6 trays", "price": 9000}


def line(**overrides):
    data = {"id": "10", "name": "Combi Oven", "price": "100.00", "qty": 1}
    data.update(overrides)
    return CartLine(**data)


class CookieCartTests(SimpleTestCase):
    """
    Cookie cart.

    GUARANTEES:
    - Lines merge on (id, size, variants), variants compared by content
    - Quantities never drop below 1
    - Malformed cookies / lines never break the cart
    """

    def test_same_key_merges_quantities(self):
        cart = CookieCart()
        cart.add(line(qty=2))
        cart.add(line(qty=3))

        self.assertEqual(len(cart), 1)
        self.assertEqual(cart.lines[0].qty, 5)
        self.assertEqual(cart.item_count, 5)

    def test_size_and_variants_split_lines(self):
        cart = CookieCart()
        cart.add(line())
        cart.add(line(size="XL"))
        cart.add(line(variants={"Capacity": SIX_TRAYS}))

        self.assertEqual(len(cart), 3)

    def test_variant_key_order_does_not_matter(self):
        a = {"Capacity": SIX_TRAYS, "Color": {"name_en": "Color", "value_en": "Black", "price": 0}}
        b = {"Color": {"price": 0, "value_en": "Black", "name_en": "Color"}, "Capacity": SIX_TRAYS}

        self.assertEqual(merge_key("10", None, a), merge_key("10", None, b))

    def test_blank_size_equals_no_size(self):
        self.assertEqual(merge_key("10", "", None), merge_key(10, None, {}))

    def test_update_qty_clamps_to_one(self):
        cart = CookieCart([line(qty=4)])

        updated = cart.update_qty("10", None, 0)

        self.assertEqual(updated.qty, 1)
        self.assertTrue(cart.changed)

    def test_update_missing_line_returns_none(self):
        cart = CookieCart([line()])
        self.assertIsNone(cart.update_qty("99", None, 3))
        self.assertFalse(cart.changed)

    def test_line_qty_below_one_is_clamped(self):
        self.assertEqual(line(qty=-3).qty, 1)

    def test_remove_and_clear(self):
        cart = CookieCart([line(), line(id="11")])

        self.assertTrue(cart.remove("10"))
        self.assertFalse(cart.remove("10"))
        self.assertEqual([l.id for l in cart.lines], ["11"])

        cart.clear()
        self.assertTrue(cart.is_empty)

    def test_totals_use_vat_rate(self):
        totals = compute_totals([line(price="100.00", qty=2), line(id="11", price="10.50")], Decimal("0.21"))

        self.assertEqual(totals.subtotal, Decimal("210.50"))
        self.assertEqual(totals.tax, Decimal("44.21"))
        self.assertEqual(totals.total, Decimal("254.71"))

    def test_from_data_drops_malformed_lines_and_folds_duplicates(self):
        cart = CookieCart.from_data(
            [
                {"id": "10", "name": "Oven", "price": 100, "qty": 1},
                {"name": "no id"},
                "garbage",
                {"id": "10", "name": "Oven", "price": 100, "qty": 2},
            ]
        )

        self.assertEqual(len(cart), 1)
        self.assertEqual(cart.lines[0].qty, 3)

    def test_non_list_cookie_is_empty_cart(self):
        self.assertTrue(CookieCart.from_data({"id": 1}).is_empty)
        self.assertTrue(CookieCart.from_data(None).is_empty)

    def test_persist_writes_cookie_only_when_changed(self):
        response = HttpResponse()
        CookieCart([line()]).persist(response)
        self.assertNotIn("cart", response.cookies)

        cart = CookieCart()
        cart.add(line())
        cart.persist(response)

        cookie = response.cookies["cart"]
        self.assertEqual(cookie["max-age"], 7 * 24 * 60 * 60)
        self.assertEqual(cookie["path"], "/")
        self.assertEqual(decode_json_cookie(cookie.value)[0]["id"], "10")


class JsonCookieCodecTests(SimpleTestCase):
    def test_reads_browser_encoded_cookie(self):
        raw = quote('[{"id":"10","name":"Cuptor ă","price":5,"qty":1}]', safe="")
        self.assertEqual(decode_json_cookie(raw)[0]["name"], "Cuptor ă")

    def test_encoded_value_is_cookie_safe(self):
        encoded = encode_json_cookie([{"name": "a b;c"}])
        self.assertNotIn(";", encoded)
        self.assertNotIn(" ", encoded)

    def test_malformed_cookie_is_none(self):
        self.assertIsNone(decode_json_cookie("%7Bnot-json"))
        self.assertIsNone(decode_json_cookie(""))


class CookieFavoritesTests(SimpleTestCase):
    def test_toggle_adds_then_removes(self):
        favorites = CookieFavorites()
        item = FavoriteItem(id="combi-oven", name="Combi Oven", price="9000")

        self.assertTrue(favorites.toggle(item))
        self.assertTrue(favorites.is_favorite("combi-oven"))
        self.assertFalse(favorites.toggle(item))
        self.assertEqual(len(favorites), 0)

    def test_no_duplicate_ids(self):
        favorites = CookieFavorites()
        item = FavoriteItem(id="combi-oven", name="Combi Oven", price="9000")

        favorites.add(item)
        self.assertFalse(favorites.add(item))
        self.assertEqual(len(favorites), 1)

    def test_persist_uses_year_long_cookie(self):
        favorites = CookieFavorites()
        favorites.add(FavoriteItem(id="fryer", name="Fryer", price="10"))
        response = HttpResponse()

        favorites.persist(response)

        self.assertEqual(response.cookies["favorites"]["max-age"], 365 * 24 * 60 * 60)


class ProductLinesTests(SimpleTestCase):
    PRODUCT = {
        "id": 10,
        "slug": "combi-oven",
        "name_en": "Combi Oven",
        "price": "9000",
        "sale_price": "8500",
        "variant_type_en": "Capacity",
        "images": ["https://cdn.test/oven.jpg"],
    }
    VARIANTS = [
        {"id": 1, "value_en": "6 trays", "price": "0"},
        {"id": 2, "value_en": "10 trays", "price": "12000"},
    ]

    def test_no_selection_uses_display_price(self):
        cart_line = line_from_product(self.PRODUCT, variants=self.VARIANTS)

        self.assertEqual(cart_line.price, Decimal("8500.00"))
        self.assertEqual(cart_line.variants, {})
        self.assertEqual(cart_line.image, "https://cdn.test/oven.jpg")

    def test_selected_variant_price_wins(self):
        cart_line = line_from_product(
            self.PRODUCT, variants=self.VARIANTS, selected_variant_ids=["2"], qty=2
        )

        self.assertEqual(cart_line.price, Decimal("12000.00"))
        self.assertEqual(cart_line.qty, 2)
        self.assertEqual(cart_line.variants["Capacity"].value_en, "10 trays")

    def test_zero_priced_variant_falls_back_to_product_price(self):
        cart_line = line_from_product(
            self.PRODUCT, variants=self.VARIANTS, selected_variant_ids=["1"]
        )
        self.assertEqual(cart_line.price, Decimal("8500.00"))

    def test_unknown_variant_is_rejected(self):
        with self.assertRaises(UnknownVariantError):
            line_from_product(self.PRODUCT, variants=self.VARIANTS, selected_variant_ids=["7"])

    def test_favorite_is_keyed_by_slug(self):
        item = favorite_from_product(self.PRODUCT)
        self.assertEqual(item.id, "combi-oven")
        self.assertEqual(item.price, Decimal("9000.00"))
