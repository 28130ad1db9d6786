# models/payment.py
from decimal import Decimal
from sqlalchemy import Index

from academy.extensions import db
from .base import BaseModel


class PaymentStatus:
    """Payment status constants."""
    PENDING = 'pending'
    PARTIAL = 'partial'
    PAID = 'paid'
    OVERDUE = 'overdue'


class PaymentTransaction(BaseModel):
    """A scheduled fee installment owed by a student."""

    __tablename__ = 'payment_transaction'

    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    enrollment_id = db.Column(db.Integer, db.ForeignKey('enrollment.id'), nullable=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    paid_amount = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))
    due_date = db.Column(db.Date, nullable=False)
    paid_at = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=PaymentStatus.PENDING)

    __table_args__ = (
        Index('idx_payment_student_status', 'student_id', 'status'),
        Index('idx_payment_due_date', 'due_date'),
    )

    def __repr__(self):
        return f'<PaymentTransaction student={self.student_id} {self.amount} {self.status}>'
