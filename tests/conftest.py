from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from academy import create_app
from academy.extensions import db as _db
from academy.models import (
    User, UserRole, StudentProfile, Batch, Session, Enrollment,
    PaymentTransaction, StudentOrientation, OrientationLanguage
)
from academy.services.candidate_records import StudentRecord

TODAY = date(2025, 1, 15)


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


class Factory:
    """Small helpers to build academy records in the test database."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _save(self, obj):
        self.db.session.add(obj)
        self.db.session.commit()
        return obj

    def student(self, name=None, software=None, pending=None, active=True, phone='9999999999',
                role=UserRole.STUDENT, with_profile=True):
        self._counter += 1
        name = name or f"Student {self._counter}"
        user = self._save(User(
            name=name,
            email=f"student{self._counter}@example.com",
            phone=phone,
            role=role,
            is_active=active,
        ))
        if with_profile:
            self._save(StudentProfile(user_id=user.id, software_list=software, pending_batch_software=pending))
        return user

    def batch(self, title='Batch', software='Photoshop', start=date(2025, 2, 1), end=date(2025, 4, 1),
              status=None, schedule=None):
        return self._save(Batch(
            title=title,
            software=software,
            start_date=start,
            end_date=end,
            status=status,
            schedule=schedule,
        ))

    def enroll(self, student, batch, status='active'):
        return self._save(Enrollment(student_id=student.id, batch_id=batch.id, status=status))

    def orient(self, student, accepted=True, language=OrientationLanguage.ENGLISH):
        return self._save(StudentOrientation(student_id=student.id, language=language, accepted=accepted))

    def payment(self, student, amount, due, status='pending', paid='0'):
        return self._save(PaymentTransaction(
            student_id=student.id,
            amount=Decimal(str(amount)),
            paid_amount=Decimal(str(paid)),
            due_date=due,
            status=status,
        ))

    def session(self, batch, on):
        return self._save(Session(batch_id=batch.id, date=on))


@pytest.fixture
def factory(db):
    return Factory(db)


def make_student_record(student_id, software=None, pending=None, active=True, name=None):
    return StudentRecord(
        id=student_id,
        name=name or f"Student {student_id}",
        email=f"student{student_id}@example.com",
        phone=None,
        is_active=active,
        profile_software_list=software,
        pending_batch_software=pending,
    )


def make_batch(batch_id=1, software='Photoshop', start=date(2025, 2, 1), end=date(2025, 4, 1), title='Target',
               schedule=None):
    return SimpleNamespace(id=batch_id, software=software, start_date=start, end_date=end, title=title,
                           schedule=schedule)


class FakeRepository:
    """In-memory stand-in for CandidateRepository."""

    def __init__(self, batch=None, students=(), other_batches=(), history=None, orientations=(),
                 payments=(), enrollments=(), sessions=(), failures=()):
        self.batch = batch
        self.students = list(students)
        self.other_batches = list(other_batches)
        self.history = history or {}
        self.orientations = list(orientations)
        self.payments = list(payments)
        self.enrollments = list(enrollments)
        self.sessions = list(sessions)
        self.failures = set(failures)
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.failures:
            raise self.failures_error(name)

    @staticmethod
    def failures_error(name):
        from sqlalchemy.exc import OperationalError
        return OperationalError(f"SELECT {name}", {}, Exception("connection lost"))

    def get_batch(self, batch_id):
        self._maybe_fail('batch')
        return self.batch if self.batch and self.batch.id == batch_id else None

    def get_active_students(self):
        self._maybe_fail('students')
        return [student for student in self.students if student.is_active]

    def get_other_batches_with_software(self, exclude_batch_id):
        self._maybe_fail('other_batches')
        return [b for b in self.other_batches if b.batch_id != exclude_batch_id]

    def get_active_enrollment_student_ids(self, batch_ids):
        self._maybe_fail('history')
        ids = set()
        for batch_id in batch_ids:
            ids.update(self.history.get(batch_id, ()))
        return ids

    def get_orientations(self, student_ids):
        self._maybe_fail('orientation')
        return [r for r in self.orientations if r.student_id in student_ids]

    def get_payment_obligations(self, student_ids):
        self._maybe_fail('fees')
        return [r for r in self.payments if r.student_id in student_ids]

    def get_enrollments_with_batches(self, student_ids):
        self._maybe_fail('enrollments')
        return [r for r in self.enrollments if r.student_id in student_ids]

    def get_sessions_in_range(self, start_date, end_date, student_ids, exclude_batch_id=None):
        self._maybe_fail('sessions')
        return [
            r for r in self.sessions
            if r.student_id in student_ids and start_date <= r.date <= end_date and r.batch_id != exclude_batch_id
        ]
