"""
Events Admin Module
===================

Admin API for studio events (workshops, socials, showcases).
"""

from flask import Blueprint

events_bp = Blueprint(
    'events_admin',
    __name__,
    url_prefix='/api/events'
)

from . import routes
from .models import Event, EventSchema

__all__ = ['events_bp', 'Event', 'EventSchema']
