from ...core.database import db, utcnow, isoformat
from ...core.fields import clean_text, parse_list, require_email, require_text
from ...core.resource import ResourceSchema

COACH_STATUSES = ('active', 'inactive', 'on-leave')
SOCIAL_NETWORKS = ('instagram', 'facebook', 'youtube')


class Coach(db.Model):
    __tablename__ = 'coaches'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40))
    specialties = db.Column(db.JSON)
    experience = db.Column(db.String(120))
    rating = db.Column(db.Float)
    students = db.Column(db.Integer)
    status = db.Column(db.String(20), nullable=False, default='active')
    avatar = db.Column(db.Text)
    bio = db.Column(db.Text)
    certifications = db.Column(db.JSON)
    instagram = db.Column(db.String(255))
    facebook = db.Column(db.String(255))
    youtube = db.Column(db.String(255))
    joined_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def social_media(self):
        links = {network: getattr(self, network) for network in SOCIAL_NETWORKS}
        if all(link is None for link in links.values()):
            return None
        return links

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'specialties': self.specialties,
            'experience': self.experience,
            'rating': self.rating,
            'students': self.students,
            'status': self.status,
            'avatar': self.avatar,
            'bio': self.bio,
            'certifications': self.certifications,
            'socialMedia': self.social_media,
            'joinedAt': isoformat(self.joined_at),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }


class CoachSchema(ResourceSchema):
    resource = 'coaches'
    label = 'Coach'
    title_field = 'name'
    statuses = COACH_STATUSES
    initial_status = 'active'

    def clean(self, data):
        values = {
            'name': require_text(data, 'name'),
            'email': require_email(data),
            'phone': clean_text(data.get('phone')),
            'specialties': parse_list(data.get('specialties')),
            'experience': clean_text(data.get('experience')),
            'bio': clean_text(data.get('bio')),
            'certifications': parse_list(data.get('certifications')),
            'avatar': clean_text(data.get('avatar')),
        }
        values.update(self.clean_social_media(data))
        return values

    @staticmethod
    def clean_social_media(data):
        """Nested socialMedia object, or the flat instagram/facebook/youtube form keys"""
        social = data.get('socialMedia')
        if not isinstance(social, dict):
            social = data
        return {network: clean_text(social.get(network)) for network in SOCIAL_NETWORKS}

    def defaults(self):
        return {'joined_at': utcnow(), 'rating': None, 'students': None}
