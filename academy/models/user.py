# models/user.py
from sqlalchemy import Index

from academy.extensions import db
from .base import BaseModel


class UserRole:
    """User role constants."""
    STUDENT = 'student'
    FACULTY = 'faculty'
    EMPLOYEE = 'employee'
    ADMIN = 'admin'
    SUPERADMIN = 'superadmin'


class User(BaseModel):
    __tablename__ = 'user'

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=UserRole.STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    student_profile = db.relationship('StudentProfile', back_populates='user', uselist=False)
    enrollments = db.relationship('Enrollment', back_populates='student', lazy='dynamic')
    orientations = db.relationship('StudentOrientation', back_populates='student', lazy='dynamic')

    __table_args__ = (
        Index('idx_user_role_active', 'role', 'is_active'),
    )

    @property
    def is_student(self):
        return self.role == UserRole.STUDENT

    def __repr__(self):
        return f'<User {self.email}>'


class StudentProfile(BaseModel):
    __tablename__ = 'student_profile'

    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)

    # Free-text software names chosen on the student profile
    software_list = db.Column(db.JSON, nullable=True)
    # Software of the batches the student is waiting to join; supersedes software_list
    pending_batch_software = db.Column(db.JSON, nullable=True)

    status = db.Column(db.String(30), nullable=True)

    user = db.relationship('User', back_populates='student_profile')

    def __repr__(self):
        return f'<StudentProfile user={self.user_id}>'
