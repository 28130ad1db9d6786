# models/orientation.py
from sqlalchemy import Index

from academy.extensions import db
from .base import BaseModel


class OrientationLanguage:
    """Languages the orientation is delivered in."""
    ENGLISH = 'english'
    GUJARATI = 'gujarati'

    ALL = (ENGLISH, GUJARATI)


class StudentOrientation(BaseModel):
    __tablename__ = 'student_orientation'

    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    language = db.Column(db.String(20), nullable=False)
    accepted = db.Column(db.Boolean, default=False, nullable=False)
    accepted_at = db.Column(db.DateTime, nullable=True)

    student = db.relationship('User', back_populates='orientations')

    __table_args__ = (
        Index('uq_orientation_student_language', 'student_id', 'language', unique=True),
    )

    def __repr__(self):
        return f'<StudentOrientation student={self.student_id} {self.language}>'
