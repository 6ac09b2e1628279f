"""
Shop Admin Module
=================

Product management for the studio shop.

Provides:
- Product creation and editing (price, stock, variants)
- Stock status workflow (active, low-stock, out-of-stock, inactive)
- Lookup by slug
"""

from flask import Blueprint

shop_bp = Blueprint(
    'shop_admin',
    __name__,
    url_prefix='/api/products'
)

from . import routes
from .models import Product, ProductSchema

__all__ = ['shop_bp', 'Product', 'ProductSchema']
