"""
Storefront Catalog

In-memory product catalog, session carts and product reviews served over a
JSON REST API.
"""

__version__ = "1.0.0"
