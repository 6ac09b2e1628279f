from ...core.database import db, utcnow, isoformat
from ...core.fields import (
    clean_text, parse_bool, parse_datetime, parse_list,
    require_positive_id, require_text,
)
from ...core.resource import ResourceSchema

POST_STATUSES = ('draft', 'published', 'scheduled', 'archived')


class BlogPost(db.Model):
    __tablename__ = 'blog_posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, index=True)
    excerpt = db.Column(db.Text)
    content = db.Column(db.Text)
    author = db.Column(db.String(120), nullable=False)
    author_id = db.Column(db.Integer, nullable=False)
    published_at = db.Column(db.DateTime)
    status = db.Column(db.String(20), nullable=False, default='draft')
    category = db.Column(db.String(80))
    tags = db.Column(db.JSON)
    read_time = db.Column(db.String(20))
    views = db.Column(db.Integer, nullable=False, default=0)
    featured = db.Column(db.Boolean, nullable=False, default=False)
    image = db.Column(db.Text)
    meta_title = db.Column(db.String(255))
    meta_description = db.Column(db.Text)
    seo_keywords = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def seo(self):
        if self.meta_title is None and self.meta_description is None and self.seo_keywords is None:
            return None
        return {
            'metaTitle': self.meta_title,
            'metaDescription': self.meta_description,
            'keywords': self.seo_keywords,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'excerpt': self.excerpt,
            'content': self.content,
            'author': self.author,
            'authorId': self.author_id,
            'publishedAt': isoformat(self.published_at),
            'status': self.status,
            'category': self.category,
            'tags': self.tags,
            'readTime': self.read_time,
            'views': self.views,
            'featured': self.featured,
            'image': self.image,
            'seo': self.seo,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class BlogPostSchema(ResourceSchema):
    resource = 'blog'
    label = 'Blog post'
    title_field = 'title'
    statuses = POST_STATUSES
    initial_status = 'draft'
    has_slug = True
    has_read_time = True

    def clean(self, data):
        values = {
            'title': require_text(data, 'title'),
            'author': require_text(data, 'author'),
            'author_id': require_positive_id(data, 'authorId', required=True),
            'excerpt': clean_text(data.get('excerpt')),
            'content': clean_text(data.get('content')),
            'category': clean_text(data.get('category')),
            'tags': parse_list(data.get('tags')),
            'featured': parse_bool(data.get('featured')),
            'image': clean_text(data.get('image')),
        }
        values.update(self.clean_seo(data.get('seo')))

        # Older editor screens post publishDate
        published_field = 'publishedAt' if data.get('publishedAt') is not None else 'publishDate'
        published_at = parse_datetime(data, published_field)
        if published_at is not None:
            values['published_at'] = published_at
        return values

    @staticmethod
    def clean_seo(seo):
        if not isinstance(seo, dict):
            return {'meta_title': None, 'meta_description': None, 'seo_keywords': None}
        return {
            'meta_title': clean_text(seo.get('metaTitle')),
            'meta_description': clean_text(seo.get('metaDescription')),
            'seo_keywords': parse_list(seo.get('keywords')),
        }

    def defaults(self):
        return {'views': 0}

    def before_save(self, post):
        # Drafts carry no publish date until one is given or they go live
        if post.status == 'published' and post.published_at is None:
            post.published_at = utcnow()
