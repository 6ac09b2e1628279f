"""
Record Store
============

Per-screen cache of one resource's records, kept in step with the server
without re-listing: create prepends, update and status changes replace by
id, delete removes by id. Every outcome queues a notification for the UI.

    store = RecordStore(AdminApiClient('http://localhost:5000'), 'coaches')
    store.load()
    store.create({'name': 'Jane Doe', 'email': 'jane@example.com'})
    visible = store.filtered(search='jane', facet='active')
"""

import itertools
import logging

from ..core.errors import AdminError
from .filters import ALL, filter_records

logger = logging.getLogger(__name__)

IDLE = 'idle'
LOADING = 'loading'
READY = 'ready'
ERROR = 'error'

LABELS = {
    'blog': 'Post',
    'classes': 'Class',
    'coaches': 'Coach',
    'events': 'Event',
    'products': 'Product',
}


class RecordStore:
    def __init__(self, client, resource):
        self.client = client
        self.resource = resource
        self.records = []
        self.state = IDLE
        self.error = None
        self.notifications = []
        self._ids = itertools.count(1)

    @property
    def label(self):
        return LABELS.get(self.resource, 'Record')

    # ===== Notifications =====

    def notify(self, title, message, kind='success'):
        notification = {'id': next(self._ids), 'kind': kind, 'title': title, 'message': message}
        self.notifications.append(notification)
        return notification

    def dismiss(self, notification_id):
        self.notifications = [n for n in self.notifications if n['id'] != notification_id]

    def _fail(self, action, error):
        logger.warning(f"{self.resource}: {action} failed: {error.message}")
        self.notify('Error', error.message, kind='destructive')

    # ===== Reads =====

    def load(self):
        """Replace local state with the server's list"""
        self.state = LOADING
        try:
            records = self.client.list(self.resource)
        except AdminError as e:
            self.state = ERROR
            self.error = e.message
            self._fail('load', e)
            return False

        self.records = list(records)
        self.state = READY
        self.error = None
        return True

    def filtered(self, search='', facet=ALL):
        return filter_records(self.resource, self.records, search, facet)

    def find(self, record_id):
        for record in self.records:
            if record['id'] == record_id:
                return record
        return None

    # ===== Mutations =====

    def _replace(self, record):
        self.records = [record if r['id'] == record['id'] else r for r in self.records]

    def create(self, payload):
        try:
            record = self.client.create(self.resource, payload)
        except AdminError as e:
            self._fail('create', e)
            return None
        self.records = [record] + self.records
        self.notify('Success', f"{self.label} created successfully")
        return record

    def update(self, record_id, payload):
        try:
            record = self.client.update(self.resource, record_id, payload)
        except AdminError as e:
            self._fail('update', e)
            return None
        self._replace(record)
        self.notify('Success', f"{self.label} updated successfully")
        return record

    def patch_status(self, record_id, status):
        try:
            record = self.client.patch_status(self.resource, record_id, status)
        except AdminError as e:
            self._fail('status change', e)
            return None
        self._replace(record)
        self.notify('Success', f"{self.label} status updated to {record.get('status')}")
        return record

    def delete(self, record_id):
        try:
            self.client.delete(self.resource, record_id)
        except AdminError as e:
            self._fail('delete', e)
            return False
        self.records = [r for r in self.records if r['id'] != record_id]
        self.notify('Success', f"{self.label} deleted successfully")
        return True
