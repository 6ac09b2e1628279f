"""
Events Admin Routes
===================

CRUD for events plus lookup by slug.
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import AdminError
from ...core.resource import ResourceController, register_resource_routes, store_failure
from ..auth.gate import api_admin_required
from . import events_bp
from .models import Event, EventSchema

events = ResourceController(Event, EventSchema())

register_resource_routes(events_bp, events)


@events_bp.route('/slug/<slug>', methods=['GET'])
@api_admin_required
def get_event_by_slug(slug):
    try:
        return jsonify(events.find_by(slug=slug).to_dict())
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return store_failure('events', e)
