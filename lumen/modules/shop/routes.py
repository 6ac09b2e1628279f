"""
Shop Admin Routes
=================

CRUD for products plus lookup by slug.
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import AdminError
from ...core.resource import ResourceController, register_resource_routes, store_failure
from ..auth.gate import api_admin_required
from . import shop_bp
from .models import Product, ProductSchema

products = ResourceController(Product, ProductSchema())

register_resource_routes(shop_bp, products)


@shop_bp.route('/slug/<slug>', methods=['GET'])
@api_admin_required
def get_product_by_slug(slug):
    """Get single product details by slug"""
    try:
        return jsonify(products.find_by(slug=slug).to_dict())
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return store_failure('products', e)
