from ...core.database import DecimalText, db, utcnow, isoformat
from ...core.fields import (
    clean_text, parse_bool, parse_list, price_display, price_to_json,
    require_date, require_non_negative_int, require_price, require_text,
)
from ...core.resource import ResourceSchema

EVENT_STATUSES = ('upcoming', 'completed', 'cancelled')


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False)
    time = db.Column(db.String(20))
    end_time = db.Column(db.String(20))
    location = db.Column(db.String(255))
    address = db.Column(db.Text)
    type = db.Column(db.String(80))
    capacity = db.Column(db.Integer)
    registered = db.Column(db.Integer, nullable=False, default=0)
    price = db.Column(DecimalText())
    status = db.Column(db.String(20), nullable=False, default='upcoming')
    featured = db.Column(db.Boolean, nullable=False, default=False)
    description = db.Column(db.Text)
    image = db.Column(db.Text)
    instructors = db.Column(db.JSON)
    tags = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'date': self.date,
            'time': self.time,
            'endTime': self.end_time,
            'location': self.location,
            'address': self.address,
            'type': self.type,
            'capacity': self.capacity,
            'registered': self.registered,
            'price': price_to_json(self.price),
            'priceDisplay': price_display(self.price),
            'status': self.status,
            'featured': self.featured,
            'description': self.description,
            'image': self.image,
            'instructors': self.instructors,
            'tags': self.tags,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class EventSchema(ResourceSchema):
    resource = 'events'
    label = 'Event'
    title_field = 'title'
    statuses = EVENT_STATUSES
    initial_status = 'upcoming'
    has_slug = True

    def clean(self, data):
        return {
            'title': require_text(data, 'title'),
            'date': require_date(data, 'date'),
            'time': clean_text(data.get('time')),
            'end_time': clean_text(data.get('endTime')),
            'location': clean_text(data.get('location')),
            'address': clean_text(data.get('address')),
            'type': clean_text(data.get('type')),
            'capacity': require_non_negative_int(data, 'capacity'),
            'price': require_price(data, 'price'),
            'featured': parse_bool(data.get('featured')),
            'description': clean_text(data.get('description')),
            'image': clean_text(data.get('image')),
            'instructors': parse_list(data.get('instructors')),
            'tags': parse_list(data.get('tags')),
        }

    def defaults(self):
        return {'registered': 0}
