"""
Candidate status classification.

STATUS_RULES is the enrollment policy: evaluated top to bottom, first match
wins. Orientation gates everything, and money owed outranks schedule clashes.
"""

from collections import namedtuple

from academy.services.candidate_records import CandidateResult


class CandidateStatus:
    """Candidate status constants."""
    AVAILABLE = 'available'
    NO_ORIENTATION = 'no_orientation'
    BUSY = 'busy'
    PENDING_FEES = 'pending_fees'
    FEES_OVERDUE = 'fees_overdue'


StatusRule = namedtuple('StatusRule', ['status', 'applies', 'message'])


def _busy_message(facts, currency):
    conflicts = facts.conflict_facts
    details = []
    if conflicts.conflicting_batches:
        details.append(f"{len(conflicts.conflicting_batches)} batch(es)")
    if conflicts.conflicting_sessions:
        details.append(f"{len(conflicts.conflicting_sessions)} session(s)")
    return f"Busy - {', '.join(details)}"


STATUS_RULES = [
    StatusRule(
        CandidateStatus.NO_ORIENTATION,
        lambda facts: not facts.has_orientation,
        lambda facts, currency: "Orientation not accepted",
    ),
    StatusRule(
        CandidateStatus.FEES_OVERDUE,
        lambda facts: facts.has_overdue_fees,
        lambda facts, currency: f"Fees overdue ({currency}{facts.fee_facts.total_overdue_amount:.2f})",
    ),
    StatusRule(
        CandidateStatus.PENDING_FEES,
        lambda facts: facts.has_pending_fees,
        lambda facts, currency: f"Pending fees/EMI ({currency}{facts.fee_facts.total_pending_amount:.2f})",
    ),
    StatusRule(
        CandidateStatus.BUSY,
        lambda facts: facts.is_busy,
        _busy_message,
    ),
    StatusRule(
        CandidateStatus.AVAILABLE,
        lambda facts: True,
        lambda facts, currency: "Available for enrollment",
    ),
]


def determine_status(facts, currency='₹', rules=None):
    """
    Pick the status of one candidate.

    Returns:
        tuple: (status, status_message)
    """
    for rule in rules or STATUS_RULES:
        if rule.applies(facts):
            return rule.status, rule.message(facts, currency)

    # The last rule always applies; only reachable with a custom table
    return CandidateStatus.AVAILABLE, "Available for enrollment"


def classify_candidate(facts, currency='₹'):
    """Turn the facts of one candidate into its result row."""
    status, message = determine_status(facts, currency)
    student = facts.student
    fees = facts.fee_facts
    conflicts = facts.conflict_facts

    return CandidateResult(
        student_id=student.id,
        name=student.name,
        email=student.email,
        phone=student.phone or '-',
        status=status,
        status_message=message,
        has_overdue_fees=fees.has_overdue_fees,
        has_pending_fees=fees.has_pending_fees,
        total_overdue_amount=fees.total_overdue_amount,
        total_pending_amount=fees.total_pending_amount,
        conflicting_batches=list(conflicts.conflicting_batches),
        conflicting_sessions=list(conflicts.conflicting_sessions),
    )


def classify_candidates(facts_list, currency='₹'):
    return [classify_candidate(facts, currency) for facts in facts_list]
