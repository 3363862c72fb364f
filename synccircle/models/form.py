# synccircle/models/form.py

from synccircle import db
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

class Frequency:
    """Recurrence schedule constants"""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    ALL = (WEEKLY, BIWEEKLY, MONTHLY)

class Form(db.Model):
    __tablename__ = 'forms'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    space_id = db.Column(db.Integer, db.ForeignKey('spaces.id'), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    # Ordered list of question definitions
    questions = db.Column(db.JSON, nullable=False, default=list)
    frequency = db.Column(db.String(20), nullable=False, default=Frequency.WEEKLY)
    send_time = db.Column(db.String(5), nullable=False, default="09:00")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    space = db.relationship('Space', back_populates='forms')
    creator = db.relationship('User')
    responses = db.relationship('Response', back_populates='form', cascade='all, delete-orphan')

    def __repr__(self) -> str:
        return f'<Form {self.title}>'

    def get_question(self, question_id: str) -> Optional[Dict[str, Any]]:
        """Look up a question definition by its id."""
        for question in self.questions or []:
            if question.get('id') == question_id:
                return question
        return None

    def required_questions(self) -> List[Dict[str, Any]]:
        return [q for q in (self.questions or []) if q.get('required')]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'spaceId': self.space_id,
            'createdBy': self.created_by,
            'questions': self.questions or [],
            'frequency': self.frequency,
            'sendTime': self.send_time,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
