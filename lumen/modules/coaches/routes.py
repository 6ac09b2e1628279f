from ...core.resource import ResourceController, register_resource_routes
from . import coaches_bp
from .models import Coach, CoachSchema

coaches = ResourceController(Coach, CoachSchema())

register_resource_routes(coaches_bp, coaches)
