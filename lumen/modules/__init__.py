"""
Lumen Modules
=============

Flask blueprint modules for the studio admin. Each resource module
(blog, classes, coaches, events, shop) owns its model, schema and routes.
"""

__all__ = ['auth', 'blog', 'classes', 'coaches', 'dashboard', 'events', 'ops', 'shop']
