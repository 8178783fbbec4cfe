import uuid

from pregnancy_tracker.extensions import db
from .base import TimestampMixin


class Patient(db.Model, TimestampMixin):
    __tablename__ = 'patients'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    clinician_id = db.Column(db.Integer, db.ForeignKey('clinicians.id'), nullable=False, index=True)

    name = db.Column(db.String(200), nullable=False)
    last_menstrual_period = db.Column(db.Date, nullable=False)
    notes = db.Column(db.Text)

    # Soft delete (no hard deletion of medical data)
    deleted_at = db.Column(db.DateTime, nullable=True, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'last_menstrual_period': self.last_menstrual_period.isoformat() if self.last_menstrual_period else None,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Patient {self.name} ({self.id})>"
