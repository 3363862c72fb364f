# synccircle/models/space.py
from synccircle import db
from datetime import datetime, timezone
import secrets
import string

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 6

def generate_invite_code() -> str:
    return ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))

class Space(db.Model):
    __tablename__ = 'spaces'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    invite_code = db.Column(db.String(16), nullable=False, unique=True, default=generate_invite_code)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    owner = db.relationship('User')
    members = db.relationship('SpaceMember', back_populates='space', cascade='all, delete-orphan')
    forms = db.relationship('Form', back_populates='space', cascade='all, delete-orphan',
                            order_by='Form.created_at.desc()')

    def __repr__(self):
        return f'<Space {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'inviteCode': self.invite_code,
            'ownerId': self.owner_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
