# catalog/urls.py
"""
CATALOG URLS

- /                      home (featured + top products)
- /category/<slug>/      category listing (price filters)
- /product/<slug>/       product detail (variants, related)
- /search/?q=            product search
"""

from __future__ import annotations

from django.urls import path

from catalog.views import CategoryView, HomeView, ProductView, SearchView

app_name = "catalog"

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("category/<slug:slug>/", CategoryView.as_view(), name="category"),
    path("product/<slug:slug>/", ProductView.as_view(), name="product"),
    path("search/", SearchView.as_view(), name="search"),
]
