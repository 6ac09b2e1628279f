"""
Blog Admin Routes
=================

CRUD for blog posts plus lookup by slug.
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import AdminError
from ...core.resource import ResourceController, register_resource_routes, store_failure
from ..auth.gate import api_admin_required
from . import blog_bp
from .models import BlogPost, BlogPostSchema

posts = ResourceController(BlogPost, BlogPostSchema())

register_resource_routes(blog_bp, posts)


@blog_bp.route('/slug/<slug>', methods=['GET'])
@api_admin_required
def get_post_by_slug(slug):
    """Get a single post by its slug"""
    try:
        return jsonify(posts.find_by(slug=slug).to_dict())
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return store_failure('blog', e)
