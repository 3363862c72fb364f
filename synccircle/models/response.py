# synccircle/models/response.py
from typing import Any, Dict, Optional
from synccircle import db
from datetime import datetime, timezone

class Response(db.Model):
    """One user's answers to a form, either a draft or a final submission.

    Several rows may exist per (form, user) pair. The most recent one by
    ``submitted_at`` (then ``id``) is the current row; while a row is a
    draft ``submitted_at`` records when it was last saved.
    """
    __tablename__ = 'responses'

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.Integer, db.ForeignKey('forms.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    # Question id -> answer value
    answers = db.Column(db.JSON, nullable=False, default=dict)
    is_draft = db.Column(db.Boolean, nullable=False, default=False)
    submitted_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.Index('idx_responses_form_user', 'form_id', 'user_id'),
    )

    # Relationships
    form = db.relationship('Form', back_populates='responses')
    user = db.relationship('User', back_populates='responses')

    def __repr__(self):
        state = 'draft' if self.is_draft else 'submitted'
        return f'<Response {self.id} form={self.form_id} user={self.user_id} {state}>'

    def _format_timestamp(self, timestamp) -> Optional[str]:
        """Format timestamp to ISO format."""
        return timestamp.isoformat() if timestamp else None

    def to_dict(self, include_user: bool = False) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'formId': self.form_id,
            'userId': self.user_id,
            'answers': self.answers or {},
            'isDraft': self.is_draft,
            'submittedAt': self._format_timestamp(self.submitted_at),
        }
        if include_user:
            data['user'] = self.user.to_dict() if self.user else None
        return data
