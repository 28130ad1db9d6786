from academy.services.candidate_classifier import CandidateStatus

# Display order of the suggestion list, most actionable first
STATUS_RANK = {
    CandidateStatus.AVAILABLE: 1,
    CandidateStatus.NO_ORIENTATION: 2,
    CandidateStatus.BUSY: 3,
    CandidateStatus.PENDING_FEES: 4,
    CandidateStatus.FEES_OVERDUE: 5,
}

# Response key of each summary bucket
SUMMARY_KEYS = {
    CandidateStatus.AVAILABLE: 'available',
    CandidateStatus.NO_ORIENTATION: 'noOrientation',
    CandidateStatus.BUSY: 'busy',
    CandidateStatus.PENDING_FEES: 'pendingFees',
    CandidateStatus.FEES_OVERDUE: 'feesOverdue',
}


def rank_candidates(results):
    """Stable sort by status rank; equal statuses keep their incoming order."""
    return sorted(results, key=lambda result: STATUS_RANK.get(result.status, len(STATUS_RANK) + 1))


def empty_summary():
    return {key: 0 for key in SUMMARY_KEYS.values()}


def summarize_candidates(results):
    """Count candidates per status bucket."""
    summary = empty_summary()
    for result in results:
        summary[SUMMARY_KEYS[result.status]] += 1
    return summary
