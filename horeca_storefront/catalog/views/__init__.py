from .category import CategoryView
from .health import health_check
from .home import HomeView
from .product import ProductView
from .search import SearchView

__all__ = [
    "CategoryView",
    "HomeView",
    "ProductView",
    "SearchView",
    "health_check",
]
