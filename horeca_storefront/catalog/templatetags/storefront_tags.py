"""Template filters for rendering backend entities."""

from django import template
from django.utils.translation import get_language

from catalog.services.presentation import display_price, first_image, localized, money

register = template.Library()


@register.filter
def localize(entity, field):
    """{{ product|localize:"name" }} -> name_<active language>, falling back to English."""
    return localized(entity, field, get_language())


@register.filter
def shown_price(product):
    return display_price(product)


@register.filter
def as_money(value):
    return f"{money(value):.2f}"


@register.filter
def main_image(product):
    return first_image(product) or ""
