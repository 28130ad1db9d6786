"""
Plain records passed between the candidate suggestion stages.

The repository turns ORM rows into these so the matching, annotation,
classification and ranking steps never touch the database session.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Tuple

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class StudentRecord:
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    is_active: bool = True
    profile_software_list: Optional[List[Any]] = None
    pending_batch_software: Optional[List[Any]] = None


@dataclass(frozen=True)
class BatchSoftware:
    """Another batch and the software it teaches."""
    batch_id: int
    software: str


@dataclass(frozen=True)
class OrientationRecord:
    student_id: int
    accepted: bool


@dataclass(frozen=True)
class PaymentObligation:
    student_id: int
    due_date: date
    amount: Decimal
    paid_amount: Decimal
    status: str


@dataclass(frozen=True)
class EnrollmentRecord:
    """An enrollment of a candidate together with the dates of its batch."""
    student_id: int
    batch_id: int
    batch_title: str
    start_date: date
    end_date: date
    batch_status: Optional[str] = None


@dataclass(frozen=True)
class SessionRecord:
    """A scheduled class day of a batch a candidate is enrolled in."""
    student_id: int
    batch_id: int
    batch_title: str
    date: date


@dataclass(frozen=True)
class LookupOutcome:
    """
    Result of computing one signal for one candidate.

    A failed lookup still carries a value: the "no signal found" default,
    so consumers can read ``value`` without checking ``ok`` first.
    """
    value: Any
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def defaulted(cls, default, error):
        return cls(value=default, error=str(error) or error.__class__.__name__)


@dataclass(frozen=True)
class FeeFacts:
    has_overdue_fees: bool = False
    has_pending_fees: bool = False
    total_overdue_amount: Decimal = ZERO
    total_pending_amount: Decimal = ZERO


@dataclass(frozen=True)
class ConflictFacts:
    conflicting_batches: Tuple[str, ...] = ()
    conflicting_sessions: Tuple[str, ...] = ()

    @property
    def is_busy(self):
        return bool(self.conflicting_batches or self.conflicting_sessions)


@dataclass(frozen=True)
class CandidateFacts:
    """Every signal known about a candidate before a status is chosen."""
    student: StudentRecord
    orientation: LookupOutcome = LookupOutcome(False)
    fees: LookupOutcome = LookupOutcome(FeeFacts())
    conflicts: LookupOutcome = LookupOutcome(ConflictFacts())

    @property
    def has_orientation(self):
        return bool(self.orientation.value)

    @property
    def fee_facts(self):
        return self.fees.value

    @property
    def conflict_facts(self):
        return self.conflicts.value

    @property
    def has_overdue_fees(self):
        return self.fee_facts.has_overdue_fees

    @property
    def has_pending_fees(self):
        return self.fee_facts.has_pending_fees

    @property
    def is_busy(self):
        return self.conflict_facts.is_busy

    @property
    def failed_signals(self):
        outcomes = (('orientation', self.orientation), ('fees', self.fees), ('conflicts', self.conflicts))
        return [name for name, outcome in outcomes if not outcome.ok]


@dataclass
class CandidateResult:
    student_id: int
    name: str
    email: str
    phone: str
    status: str
    status_message: str
    has_overdue_fees: bool = False
    has_pending_fees: bool = False
    total_overdue_amount: Decimal = ZERO
    total_pending_amount: Decimal = ZERO
    conflicting_batches: List[str] = field(default_factory=list)
    conflicting_sessions: List[str] = field(default_factory=list)

    @property
    def conflicting_sessions_count(self):
        return len(self.conflicting_sessions)

    def to_dict(self):
        """Serialize with the camelCase keys the admin frontend expects."""
        return {
            'studentId': self.student_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'status': self.status,
            'statusMessage': self.status_message,
            'hasOverdueFees': self.has_overdue_fees,
            'hasPendingFees': self.has_pending_fees,
            'totalOverdueAmount': float(self.total_overdue_amount),
            'totalPendingAmount': float(self.total_pending_amount),
            'conflictingBatches': list(self.conflicting_batches),
            'conflictingSessions': list(self.conflicting_sessions),
            'conflictingSessionsCount': self.conflicting_sessions_count,
        }
