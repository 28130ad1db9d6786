"""
Status annotation for batch candidates.

Attaches orientation, fee and schedule-conflict facts to every candidate.
Each signal is loaded with one bulk query for the whole candidate set; the
queries are independent and run on a small thread pool when configured.
A failing query or a broken record only blanks that signal for the affected
candidates: the failure is logged and the "no signal found" default is used.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from flask import current_app

from academy.services.candidate_records import (
    ZERO, LookupOutcome, FeeFacts, ConflictFacts, CandidateFacts
)

CENTS = Decimal('0.01')


def compute_orientation_fact(records):
    """A student is oriented once any orientation, in any language, is accepted."""
    return any(record.accepted for record in records)


def compute_fee_facts(obligations, today):
    """
    Summarise outstanding installments.

    Args:
        obligations: PaymentObligation records of one student, already
            limited to outstanding statuses
        today: Reference date; installments due strictly before it are overdue

    Returns:
        FeeFacts
    """
    if not obligations:
        return FeeFacts()

    overdue = [obligation for obligation in obligations if obligation.due_date < today]

    total_overdue = sum((Decimal(o.amount) for o in overdue), ZERO)
    total_pending = sum((Decimal(o.amount) - Decimal(o.paid_amount or 0) for o in obligations), ZERO)

    return FeeFacts(
        has_overdue_fees=bool(overdue),
        has_pending_fees=True,
        total_overdue_amount=max(total_overdue, ZERO).quantize(CENTS),
        total_pending_amount=max(total_pending, ZERO).quantize(CENTS),
    )


def dates_overlap(start_a, end_a, start_b, end_b):
    """Inclusive interval overlap."""
    return start_a <= end_b and end_a >= start_b


def compute_conflict_facts(batch, enrollments, sessions, inactive_statuses):
    """
    Find schedule clashes between the target batch and a student's other batches.

    Batch-level conflicts are other running batches whose dates overlap the
    target's; session-level conflicts are the class days of the student's
    batches that fall inside the target's range. Both are reported.
    """
    conflicting_batches = []
    for enrollment in enrollments:
        if enrollment.batch_id == batch.id:
            continue
        if enrollment.batch_status in inactive_statuses:
            continue
        if dates_overlap(batch.start_date, batch.end_date, enrollment.start_date, enrollment.end_date):
            if enrollment.batch_title not in conflicting_batches:
                conflicting_batches.append(enrollment.batch_title)

    conflicting_sessions = [
        f"{session.batch_title} ({session.date.isoformat()})"
        for session in sessions
        if session.batch_id != batch.id and batch.start_date <= session.date <= batch.end_date
    ]

    return ConflictFacts(
        conflicting_batches=tuple(conflicting_batches),
        conflicting_sessions=tuple(conflicting_sessions),
    )


def _group_by_student(records):
    grouped = defaultdict(list)
    for record in records:
        grouped[record.student_id].append(record)
    return grouped


class StatusAnnotator:
    """Computes the eligibility facts for a list of candidates."""

    def __init__(self, repository, workers=None, inactive_batch_statuses=None):
        self.repository = repository
        self.workers = workers if workers is not None else current_app.config.get('CANDIDATE_LOOKUP_WORKERS', 4)
        self.inactive_batch_statuses = tuple(
            inactive_batch_statuses if inactive_batch_statuses is not None
            else current_app.config.get('INACTIVE_BATCH_STATUSES', ('ended', 'cancelled'))
        )
        self.logger = logging.getLogger('status_annotator')

    def annotate(self, batch, candidates, today):
        """
        Attach facts to every candidate.

        Args:
            batch: Target Batch
            candidates: StudentRecord list from the software matcher
            today: Reference date for overdue checks, fixed for the request

        Returns:
            list: CandidateFacts in the same order as ``candidates``
        """
        if not candidates:
            return []

        student_ids = [candidate.id for candidate in candidates]
        # Plain values only; the batch instance belongs to this thread's session
        batch_id, start_date, end_date = batch.id, batch.start_date, batch.end_date

        lookups = self._run_lookups({
            'orientation': lambda: self.repository.get_orientations(student_ids),
            'fees': lambda: self.repository.get_payment_obligations(student_ids),
            'enrollments': lambda: self.repository.get_enrollments_with_batches(student_ids),
            'sessions': lambda: self.repository.get_sessions_in_range(
                start_date, end_date, student_ids, exclude_batch_id=batch_id
            ),
        })

        orientations = _group_by_student(lookups['orientation'].value)
        obligations = _group_by_student(lookups['fees'].value)
        enrollments = _group_by_student(lookups['enrollments'].value)
        sessions = _group_by_student(lookups['sessions'].value)

        conflict_error = lookups['enrollments'].error or lookups['sessions'].error

        facts = []
        for candidate in candidates:
            sid = candidate.id

            orientation = self._compute(
                'orientation', sid, lookups['orientation'].error, False,
                lambda: compute_orientation_fact(orientations[sid])
            )
            fees = self._compute(
                'fees', sid, lookups['fees'].error, FeeFacts(),
                lambda: compute_fee_facts(obligations[sid], today)
            )
            conflicts = self._compute(
                'conflicts', sid, conflict_error, ConflictFacts(),
                lambda: compute_conflict_facts(batch, enrollments[sid], sessions[sid], self.inactive_batch_statuses)
            )

            facts.append(CandidateFacts(
                student=candidate,
                orientation=orientation,
                fees=fees,
                conflicts=conflicts,
            ))

        failed = sum(1 for fact in facts if fact.failed_signals)
        if failed:
            self.logger.warning(f"Batch {batch.id}: {failed} of {len(facts)} candidates annotated with defaults")

        return facts

    def _compute(self, signal, student_id, lookup_error, default, compute):
        if lookup_error:
            return LookupOutcome(value=default, error=lookup_error)
        try:
            return LookupOutcome.success(compute())
        except Exception as e:
            self.logger.error(f"Failed to compute {signal} for student {student_id}: {str(e)}", exc_info=True)
            return LookupOutcome.defaulted(default, e)

    def _run_lookups(self, lookups):
        """Run the bulk lookups, concurrently when more than one worker is configured."""
        if not self.workers or self.workers <= 1:
            return {name: self._guarded(name, fetch) for name, fetch in lookups.items()}

        app = current_app._get_current_object()

        def run_in_context(name, fetch):
            # Each worker gets its own app context and so its own database session
            with app.app_context():
                return self._guarded(name, fetch)

        with ThreadPoolExecutor(max_workers=min(self.workers, len(lookups)),
                                thread_name_prefix='candidate-lookup') as pool:
            futures = {name: pool.submit(run_in_context, name, fetch) for name, fetch in lookups.items()}
            return {name: future.result() for name, future in futures.items()}

    def _guarded(self, name, fetch):
        try:
            return LookupOutcome.success(fetch())
        except Exception as e:
            self.logger.error(f"Bulk {name} lookup failed, defaulting to no signal: {str(e)}", exc_info=True)
            return LookupOutcome.defaulted([], e)
