from ...core.database import DecimalText, db, utcnow, isoformat
from ...core.fields import (
    clean_text, parse_bool, parse_list, price_display, price_to_json,
    require_non_negative_int, require_price, require_text,
)
from ...core.resource import ResourceSchema

PRODUCT_STATUSES = ('active', 'low-stock', 'out-of-stock', 'inactive')


class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, index=True)
    category = db.Column(db.String(80))
    price = db.Column(DecimalText(), nullable=False)
    original_price = db.Column(DecimalText())
    stock = db.Column(db.Integer, nullable=False, default=0)
    sold = db.Column(db.Integer, nullable=False, default=0)
    rating = db.Column(db.Float)
    review_count = db.Column(db.Integer)
    status = db.Column(db.String(20), nullable=False, default='active')
    featured = db.Column(db.Boolean, nullable=False, default=False)
    badge = db.Column(db.String(40))
    image = db.Column(db.Text)
    images = db.Column(db.JSON)
    description = db.Column(db.Text)
    features = db.Column(db.JSON)
    sizes = db.Column(db.JSON)
    colors = db.Column(db.JSON)
    tags = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'category': self.category,
            'price': price_to_json(self.price),
            'priceDisplay': price_display(self.price),
            'originalPrice': price_to_json(self.original_price),
            'stock': self.stock,
            'sold': self.sold,
            'rating': self.rating,
            'reviewCount': self.review_count,
            'status': self.status,
            'featured': self.featured,
            'badge': self.badge,
            'image': self.image,
            'images': self.images,
            'description': self.description,
            'features': self.features,
            'sizes': self.sizes,
            'colors': self.colors,
            'tags': self.tags,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class ProductSchema(ResourceSchema):
    resource = 'products'
    label = 'Product'
    title_field = 'name'
    statuses = PRODUCT_STATUSES
    initial_status = 'active'
    has_slug = True

    def clean(self, data):
        return {
            'name': require_text(data, 'name'),
            'price': require_price(data, 'price', required=True),
            'stock': require_non_negative_int(data, 'stock', required=True),
            'original_price': require_price(data, 'originalPrice'),
            'category': clean_text(data.get('category')),
            'badge': clean_text(data.get('badge')),
            'featured': parse_bool(data.get('featured')),
            'description': clean_text(data.get('description')),
            'image': clean_text(data.get('image')),
            'features': parse_list(data.get('features')),
            'sizes': parse_list(data.get('sizes')),
            'colors': parse_list(data.get('colors')),
            'tags': parse_list(data.get('tags')),
        }

    def defaults(self):
        return {'sold': 0, 'rating': None, 'review_count': None, 'images': None}
