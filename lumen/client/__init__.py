"""
Lumen Client
============

Python side of the admin screens: an HTTP client for the JSON API and a
per-screen record store with local filtering and notifications.
"""

from .api import AdminApiClient, RESOURCES
from .filters import filter_records
from .store import RecordStore

__all__ = ['AdminApiClient', 'RESOURCES', 'RecordStore', 'filter_records']
