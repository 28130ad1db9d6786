# models/batch.py
from sqlalchemy import Index, CheckConstraint
from sqlalchemy.orm import validates

from academy.extensions import db
from .base import BaseModel


class BatchMode:
    """Batch delivery mode constants."""
    ONLINE = 'online'
    OFFLINE = 'offline'
    HYBRID = 'hybrid'


class BatchStatus:
    """Batch lifecycle constants."""
    UPCOMING = 'upcoming'
    ONGOING = 'ongoing'
    ENDED = 'ended'
    CANCELLED = 'cancelled'


class Batch(BaseModel):
    __tablename__ = 'batch'

    title = db.Column(db.String(150), nullable=False)
    # Comma-separated software names, e.g. "Photoshop, Illustrator"
    software = db.Column(db.String(255), nullable=True)
    mode = db.Column(db.String(20), nullable=False, default=BatchMode.OFFLINE)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    max_capacity = db.Column(db.Integer, nullable=False, default=30)
    schedule = db.Column(db.JSON, nullable=True)
    status = db.Column(db.String(20), nullable=True)

    enrollments = db.relationship('Enrollment', back_populates='batch', lazy='dynamic')
    sessions = db.relationship('Session', back_populates='batch', lazy='dynamic')

    __table_args__ = (
        CheckConstraint('start_date < end_date', name='ck_batch_date_range'),
        Index('idx_batch_status', 'status'),
        Index('idx_batch_dates', 'start_date', 'end_date'),
    )

    @validates('start_date', 'end_date')
    def validate_date_range(self, key, value):
        start = value if key == 'start_date' else self.start_date
        end = value if key == 'end_date' else self.end_date
        if start and end and start >= end:
            raise ValueError("Start date must be before end date")
        return value

    def __repr__(self):
        return f'<Batch {self.title}>'


class SessionStatus:
    """Class session constants."""
    SCHEDULED = 'scheduled'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'


class Session(BaseModel):
    """A single scheduled class day of a batch."""

    __tablename__ = 'session'

    batch_id = db.Column(db.Integer, db.ForeignKey('batch.id'), nullable=False)
    faculty_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.String(10), nullable=True)
    end_time = db.Column(db.String(10), nullable=True)
    topic = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=SessionStatus.SCHEDULED)

    batch = db.relationship('Batch', back_populates='sessions')

    __table_args__ = (
        Index('idx_session_batch_date', 'batch_id', 'date'),
        Index('idx_session_date', 'date'),
    )

    def __repr__(self):
        return f'<Session batch={self.batch_id} {self.date}>'
