"""
Coaches Admin Module
====================

Admin API for coach profiles: contact details, specialties,
certifications and social links.
"""

from flask import Blueprint

coaches_bp = Blueprint(
    'coaches_admin',
    __name__,
    url_prefix='/api/coaches'
)

from . import routes
from .models import Coach, CoachSchema

__all__ = ['coaches_bp', 'Coach', 'CoachSchema']
