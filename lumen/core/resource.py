"""
Resource Controller
===================

The CRUD protocol shared by every admin resource (blog posts, classes,
coaches, events, products). A module supplies a SQLAlchemy model and a
ResourceSchema; the controller and the route binder do the rest.

Routes registered per resource (all admin-only):
- GET    /            list, newest first
- POST   /            create -> 201
- GET    /<id>        read
- PUT    /<id>        full update
- PATCH  /<id>        status-only update
- DELETE /<id>        delete
"""

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from .database import db, utcnow
from .errors import AdminError, NotFound, StoreUnavailable, ValidationError
from .fields import MAX_INT, clean_text, slugify, read_time
from .logging_service import LoggingService
from ..modules.auth.gate import api_admin_required


class ResourceSchema:
    """
    Field set, status enumeration and derivation rules for one resource.

    Subclasses implement `clean()`, which validates required fields in a
    fixed order and returns column values for every client-owned field.
    """
    resource = None
    label = 'Record'
    title_field = 'title'
    statuses = ()
    initial_status = None
    has_slug = False
    has_read_time = False

    def clean(self, data):
        raise NotImplementedError

    def defaults(self):
        """Server-owned columns set once at creation"""
        return {}

    def before_save(self, record):
        """Hook run after create or full update has set every column"""

    def clean_status(self, data, required=False):
        """Status must be one of the enumerated values whenever it is written"""
        status = clean_text(data.get('status'))
        if status is None:
            if required:
                raise ValidationError('status', 'status is required')
            return None
        if status not in self.statuses:
            raise ValidationError(
                'status',
                f"Invalid status '{status}'. Expected one of: {', '.join(self.statuses)}"
            )
        return status

    def derive(self, values, record=None):
        """Compute slug / read time from cleaned values"""
        derived = {}
        if self.has_slug:
            title = values[self.title_field]
            if record is None or getattr(record, self.title_field) != title:
                derived['slug'] = slugify(title)
        if self.has_read_time:
            derived['read_time'] = read_time(values.get('content'))
        return derived


class ResourceController:
    """List / create / read / update / patch / delete for one model"""

    def __init__(self, model, schema):
        self.model = model
        self.schema = schema

    @property
    def source(self):
        return self.schema.resource

    def list(self):
        return (self.model.query
                .order_by(self.model.created_at.desc(), self.model.id.desc())
                .all())

    def get(self, record_id):
        record = db.session.get(self.model, record_id) if record_id <= MAX_INT else None
        if record is None:
            raise NotFound(f"{self.schema.label} not found")
        return record

    def find_by(self, **filters):
        record = self.model.query.filter_by(**filters).first()
        if record is None:
            raise NotFound(f"{self.schema.label} not found")
        return record

    def create(self, data):
        values = self.schema.clean(data)
        status = self.schema.clean_status(data) or self.schema.initial_status
        values.update(self.schema.derive(values))

        now = utcnow()
        record = self.model(**self.schema.defaults())
        for key, value in values.items():
            setattr(record, key, value)
        record.status = status
        record.created_at = now
        record.updated_at = now
        self.schema.before_save(record)

        db.session.add(record)
        db.session.commit()
        return record

    def update(self, record_id, data):
        record = self.get(record_id)
        values = self.schema.clean(data)
        status = self.schema.clean_status(data)
        values.update(self.schema.derive(values, record))

        for key, value in values.items():
            setattr(record, key, value)
        if status is not None:
            record.status = status
        record.updated_at = utcnow()
        self.schema.before_save(record)

        db.session.commit()
        return record

    def patch_status(self, record_id, data):
        record = self.get(record_id)
        record.status = self.schema.clean_status(data, required=True)
        db.session.commit()
        return record

    def delete(self, record_id):
        record = self.get(record_id)
        db.session.delete(record)
        db.session.commit()


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('body', 'Request body must be a JSON object')
    return data


def store_failure(source, error):
    """Roll back and hide internal details behind StoreUnavailable"""
    db.session.rollback()
    LoggingService.log_error_with_traceback(source, error)
    return StoreUnavailable().to_response()


def register_resource_routes(blueprint, controller):
    """Attach the uniform CRUD routes for `controller` to `blueprint`"""
    label = controller.schema.label
    source = controller.source

    @blueprint.route('', methods=['GET'])
    @api_admin_required
    def list_records():
        """All records, newest first"""
        try:
            return jsonify([record.to_dict() for record in controller.list()])
        except SQLAlchemyError as e:
            return store_failure(source, e)

    @blueprint.route('', methods=['POST'])
    @api_admin_required
    def create_record():
        """Create a record from client-owned fields"""
        try:
            record = controller.create(json_body())
            LoggingService.log_user_action(source, f"Created {label} {record.id}")
            return jsonify(record.to_dict()), 201
        except AdminError as e:
            db.session.rollback()
            return e.to_response()
        except SQLAlchemyError as e:
            return store_failure(source, e)

    @blueprint.route('/<int:record_id>', methods=['GET'])
    @api_admin_required
    def get_record(record_id):
        try:
            return jsonify(controller.get(record_id).to_dict())
        except AdminError as e:
            return e.to_response()
        except SQLAlchemyError as e:
            return store_failure(source, e)

    @blueprint.route('/<int:record_id>', methods=['PUT'])
    @api_admin_required
    def update_record(record_id):
        """Replace every client-owned field"""
        try:
            record = controller.update(record_id, json_body())
            LoggingService.log_user_action(source, f"Updated {label} {record_id}")
            return jsonify(record.to_dict())
        except AdminError as e:
            db.session.rollback()
            return e.to_response()
        except SQLAlchemyError as e:
            return store_failure(source, e)

    @blueprint.route('/<int:record_id>', methods=['PATCH'])
    @api_admin_required
    def patch_record(record_id):
        """Status-only update"""
        try:
            record = controller.patch_status(record_id, json_body())
            LoggingService.log_user_action(
                source, f"{label} {record_id} status changed to {record.status}"
            )
            return jsonify(record.to_dict())
        except AdminError as e:
            db.session.rollback()
            return e.to_response()
        except SQLAlchemyError as e:
            return store_failure(source, e)

    @blueprint.route('/<int:record_id>', methods=['DELETE'])
    @api_admin_required
    def delete_record(record_id):
        try:
            controller.delete(record_id)
            LoggingService.log_user_action(source, f"Deleted {label} {record_id}")
            return jsonify({'success': True, 'message': f"{label} deleted"})
        except AdminError as e:
            db.session.rollback()
            return e.to_response()
        except SQLAlchemyError as e:
            return store_failure(source, e)

    return blueprint
