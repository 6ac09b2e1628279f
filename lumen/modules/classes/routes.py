from ...core.resource import ResourceController, register_resource_routes
from . import classes_bp
from .models import DanceClass, DanceClassSchema

classes = ResourceController(DanceClass, DanceClassSchema())

register_resource_routes(classes_bp, classes)
