# models/enrollment.py
from datetime import datetime
from sqlalchemy import Index

from academy.extensions import db
from .base import BaseModel


class EnrollmentStatus:
    """Enrollment status constants."""
    ACTIVE = 'active'
    COMPLETED = 'completed'
    DROPPED = 'dropped'
    ON_HOLD = 'on_hold'


class Enrollment(BaseModel):
    __tablename__ = 'enrollment'

    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    batch_id = db.Column(db.Integer, db.ForeignKey('batch.id'), nullable=False)
    enrollment_date = db.Column(db.DateTime, default=datetime.now, nullable=False)
    status = db.Column(db.String(20), nullable=True, default=EnrollmentStatus.ACTIVE)

    student = db.relationship('User', back_populates='enrollments')
    batch = db.relationship('Batch', back_populates='enrollments')

    __table_args__ = (
        Index('uq_enrollment_student_batch', 'student_id', 'batch_id', unique=True),
        Index('idx_enrollment_batch', 'batch_id'),
    )

    def __repr__(self):
        return f'<Enrollment student={self.student_id} batch={self.batch_id}>'
