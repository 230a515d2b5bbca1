# catalog/tests/test_presentation.py

from decimal import Decimal

from django.test import SimpleTestCase

from catalog.services.presentation import (
    SORT_ASC,
    SORT_DESC,
    display_price,
    exclude_product,
    filter_and_sort_products,
    localized,
    parse_price,
    title_from_slug,
)


class PresentationTests(SimpleTestCase):
    PRODUCTS = [
        {"id": 1, "price": "120.00"},
        {"id": 2, "price": "45.50"},
        {"id": 3, "price": "980"},
    ]

    def test_localized_falls_back_to_english(self):
        product = {"name_en": "Combi oven", "name_ro": "Cuptor combi", "description_en": "Steam"}

        self.assertEqual(localized(product, "name", "ro"), "Cuptor combi")
        self.assertEqual(localized(product, "description", "ro"), "Steam")
        self.assertEqual(localized(product, "name", "en-us"), "Combi oven")
        self.assertEqual(localized(None, "name", "en"), "")

    def test_display_price_prefers_positive_sale_price(self):
        self.assertEqual(display_price({"price": 100, "sale_price": 80}), Decimal("80.00"))
        self.assertEqual(display_price({"price": 100, "sale_price": 0}), Decimal("100.00"))
        self.assertEqual(display_price({"price": 100}), Decimal("100.00"))

    def test_parse_price(self):
        self.assertEqual(parse_price("12,5"), Decimal("12.5"))
        self.assertIsNone(parse_price(""))
        self.assertIsNone(parse_price("abc"))
        self.assertIsNone(parse_price("NaN"))

    def test_filter_bounds_are_inclusive(self):
        result = filter_and_sort_products(
            self.PRODUCTS, min_price=Decimal("45.50"), max_price=Decimal("120")
        )
        self.assertEqual([p["id"] for p in result], [1, 2])

    def test_sorting(self):
        asc = filter_and_sort_products(self.PRODUCTS, price_sort=SORT_ASC)
        desc = filter_and_sort_products(self.PRODUCTS, price_sort=SORT_DESC)

        self.assertEqual([p["id"] for p in asc], [2, 1, 3])
        self.assertEqual([p["id"] for p in desc], [3, 1, 2])

    def test_exclude_product(self):
        self.assertEqual([p["id"] for p in exclude_product(self.PRODUCTS, 1)], [2, 3])

    def test_title_from_slug(self):
        self.assertEqual(title_from_slug("bar-equipment"), "Bar Equipment")
