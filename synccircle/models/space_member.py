# synccircle/models/space_member.py
from synccircle import db
from datetime import datetime, timezone

class SpaceRole:
    """Space role constants"""
    ADMIN = "admin"
    PARTICIPANT = "participant"

    ALL = (ADMIN, PARTICIPANT)

class SpaceMember(db.Model):
    __tablename__ = 'space_members'

    id = db.Column(db.Integer, primary_key=True)
    space_id = db.Column(db.Integer, db.ForeignKey('spaces.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=SpaceRole.PARTICIPANT)
    joined_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.UniqueConstraint('space_id', 'user_id', name='uq_space_member'),
    )

    # Relationships
    space = db.relationship('Space', back_populates='members')
    user = db.relationship('User', back_populates='memberships')

    @property
    def is_admin(self) -> bool:
        return self.role == SpaceRole.ADMIN

    def __repr__(self):
        return f'<SpaceMember space={self.space_id} user={self.user_id} role={self.role}>'

    def to_dict(self):
        return {
            'id': self.id,
            'spaceId': self.space_id,
            'userId': self.user_id,
            'role': self.role,
            'joinedAt': self.joined_at.isoformat() if self.joined_at else None,
        }
