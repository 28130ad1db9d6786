"""
Read-only queries used by the candidate suggestion flow.
Every method returns plain records (see candidate_records) in a stable order.
"""

import logging
from decimal import Decimal

from flask import current_app
from sqlalchemy import or_

from academy.extensions import db
from academy.models import (
    User, UserRole, StudentProfile, Batch, Session, Enrollment,
    PaymentTransaction, StudentOrientation
)
from academy.services.candidate_records import (
    StudentRecord, BatchSoftware, OrientationRecord, PaymentObligation,
    EnrollmentRecord, SessionRecord
)

# Keeps IN (...) lists under the bound-parameter limits of SQLite and MySQL
IN_CLAUSE_CHUNK_SIZE = 500


def _chunked(ids, size=IN_CLAUSE_CHUNK_SIZE):
    ids = sorted(set(ids))
    for start in range(0, len(ids), size):
        yield ids[start:start + size]


def _status_filter(column, statuses):
    """Build a filter matching any of ``statuses``, where None means NULL."""
    named = [status for status in statuses if status is not None]
    clauses = [column.in_(named)] if named else []
    if None in statuses:
        clauses.append(column.is_(None))
    return or_(*clauses)


class CandidateRepository:
    """Query layer for the candidate suggestion service."""

    @staticmethod
    def get_batch(batch_id):
        return db.session.get(Batch, batch_id)

    @staticmethod
    def get_active_students():
        """All active students with their software preferences, ordered by ID."""
        rows = (
            db.session.query(User, StudentProfile)
            .outerjoin(StudentProfile, StudentProfile.user_id == User.id)
            .filter(User.role == UserRole.STUDENT, User.is_active.is_(True))
            .order_by(User.id)
            .all()
        )

        return [
            StudentRecord(
                id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                is_active=user.is_active,
                profile_software_list=profile.software_list if profile else None,
                pending_batch_software=profile.pending_batch_software if profile else None,
            )
            for user, profile in rows
        ]

    @staticmethod
    def get_other_batches_with_software(exclude_batch_id):
        """Batches other than the target that still run and teach some software."""
        inactive = current_app.config.get('INACTIVE_BATCH_STATUSES', ('ended', 'cancelled'))

        rows = (
            db.session.query(Batch.id, Batch.software)
            .filter(
                Batch.id != exclude_batch_id,
                Batch.software.isnot(None),
                or_(Batch.status.is_(None), Batch.status.notin_(inactive))
            )
            .order_by(Batch.id)
            .all()
        )

        return [BatchSoftware(batch_id=batch_id, software=software) for batch_id, software in rows]

    @staticmethod
    def get_active_enrollment_student_ids(batch_ids):
        """IDs of students currently studying in any of ``batch_ids``."""
        if not batch_ids:
            return set()

        statuses = current_app.config.get('ACTIVE_ENROLLMENT_STATUSES', ('active', None))
        student_ids = set()

        for chunk in _chunked(batch_ids):
            rows = (
                db.session.query(Enrollment.student_id)
                .filter(Enrollment.batch_id.in_(chunk), _status_filter(Enrollment.status, statuses))
                .distinct()
                .all()
            )
            student_ids.update(student_id for (student_id,) in rows)

        return student_ids

    @staticmethod
    def get_orientations(student_ids):
        records = []
        for chunk in _chunked(student_ids):
            rows = (
                db.session.query(StudentOrientation.student_id, StudentOrientation.accepted)
                .filter(StudentOrientation.student_id.in_(chunk))
                .order_by(StudentOrientation.student_id, StudentOrientation.id)
                .all()
            )
            records.extend(OrientationRecord(student_id=sid, accepted=bool(accepted)) for sid, accepted in rows)
        return records

    @staticmethod
    def get_payment_obligations(student_ids):
        """Installments that still hold money owed by any of ``student_ids``."""
        statuses = current_app.config.get('OUTSTANDING_PAYMENT_STATUSES', ('pending', 'partial', 'overdue'))

        records = []
        for chunk in _chunked(student_ids):
            rows = (
                db.session.query(PaymentTransaction)
                .filter(PaymentTransaction.student_id.in_(chunk), PaymentTransaction.status.in_(statuses))
                .order_by(PaymentTransaction.student_id, PaymentTransaction.due_date, PaymentTransaction.id)
                .all()
            )
            records.extend(
                PaymentObligation(
                    student_id=payment.student_id,
                    due_date=payment.due_date,
                    amount=Decimal(payment.amount or 0),
                    paid_amount=Decimal(payment.paid_amount or 0),
                    status=payment.status,
                )
                for payment in rows
            )
        return records

    @staticmethod
    def get_enrollments_with_batches(student_ids):
        records = []
        for chunk in _chunked(student_ids):
            rows = (
                db.session.query(
                    Enrollment.student_id, Batch.id, Batch.title,
                    Batch.start_date, Batch.end_date, Batch.status
                )
                .join(Batch, Batch.id == Enrollment.batch_id)
                .filter(Enrollment.student_id.in_(chunk))
                .order_by(Enrollment.student_id, Batch.start_date, Batch.id)
                .all()
            )
            records.extend(
                EnrollmentRecord(
                    student_id=student_id,
                    batch_id=batch_id,
                    batch_title=title,
                    start_date=start_date,
                    end_date=end_date,
                    batch_status=status,
                )
                for student_id, batch_id, title, start_date, end_date, status in rows
            )
        return records

    @staticmethod
    def get_sessions_in_range(start_date, end_date, student_ids, exclude_batch_id=None):
        """Sessions dated inside ``[start_date, end_date]`` of batches the students are enrolled in."""
        records = []
        for chunk in _chunked(student_ids):
            query = (
                db.session.query(Enrollment.student_id, Session.batch_id, Batch.title, Session.date)
                .join(Enrollment, Enrollment.batch_id == Session.batch_id)
                .join(Batch, Batch.id == Session.batch_id)
                .filter(
                    Session.date >= start_date,
                    Session.date <= end_date,
                    Enrollment.student_id.in_(chunk)
                )
            )
            if exclude_batch_id is not None:
                query = query.filter(Session.batch_id != exclude_batch_id)

            rows = query.order_by(Enrollment.student_id, Session.date, Session.id).all()
            records.extend(
                SessionRecord(student_id=student_id, batch_id=batch_id, batch_title=title, date=session_date)
                for student_id, batch_id, title, session_date in rows
            )

        logging.getLogger('candidate_repository').debug(
            f"Loaded {len(records)} sessions between {start_date} and {end_date}"
        )
        return records
