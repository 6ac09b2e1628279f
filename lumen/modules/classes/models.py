from ...core.database import DecimalText, db, utcnow, isoformat
from ...core.fields import (
    clean_text, price_display, price_to_json, require_non_negative_int,
    require_positive_id, require_price, require_text,
)
from ...core.resource import ResourceSchema

CLASS_STATUSES = ('active', 'full', 'inactive')


class DanceClass(db.Model):
    __tablename__ = 'dance_classes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    instructor = db.Column(db.String(120), nullable=False)
    instructor_id = db.Column(db.Integer)
    schedule = db.Column(db.String(255))
    duration = db.Column(db.Integer)
    capacity = db.Column(db.Integer)
    enrolled = db.Column(db.Integer, nullable=False, default=0)
    price = db.Column(DecimalText())
    status = db.Column(db.String(20), nullable=False, default='active')
    level = db.Column(db.String(50))
    image = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'instructor': self.instructor,
            'instructorId': self.instructor_id,
            'schedule': self.schedule,
            'duration': self.duration,
            'capacity': self.capacity,
            'enrolled': self.enrolled,
            'price': price_to_json(self.price),
            'priceDisplay': price_display(self.price),
            'status': self.status,
            'level': self.level,
            'image': self.image,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class DanceClassSchema(ResourceSchema):
    resource = 'classes'
    label = 'Class'
    title_field = 'name'
    statuses = CLASS_STATUSES
    initial_status = 'active'

    def clean(self, data):
        return {
            'name': require_text(data, 'name'),
            'instructor': require_text(data, 'instructor'),
            'instructor_id': require_positive_id(data, 'instructorId'),
            'duration': require_non_negative_int(data, 'duration'),
            'capacity': require_non_negative_int(data, 'capacity'),
            'price': require_price(data, 'price'),
            'description': clean_text(data.get('description')),
            'schedule': clean_text(data.get('schedule')),
            'level': clean_text(data.get('level')),
            'image': clean_text(data.get('image')),
        }

    def defaults(self):
        return {'enrolled': 0}
