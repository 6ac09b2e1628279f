"""
Classes Admin Module
====================

Admin API for the dance class timetable: instructors, schedule,
capacity, pricing and level per class.
"""

from flask import Blueprint

classes_bp = Blueprint(
    'classes_admin',
    __name__,
    url_prefix='/api/classes'
)

from . import routes
from .models import DanceClass, DanceClassSchema

__all__ = ['classes_bp', 'DanceClass', 'DanceClassSchema']
