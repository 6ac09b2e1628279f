"""
Blog Admin Module
=================

Admin API for blog post management.

Provides:
- Post creation and editing
- Draft/publish/schedule/archive workflow
- Derived slug and read time
- SEO metadata per post
"""

from flask import Blueprint

blog_bp = Blueprint(
    'blog_admin',
    __name__,
    url_prefix='/api/blog'
)

from . import routes
from .models import BlogPost, BlogPostSchema

__all__ = ['blog_bp', 'BlogPost', 'BlogPostSchema']
