from academy.services.candidate_classifier import CandidateStatus
from academy.services.candidate_ranker import rank_candidates, summarize_candidates, empty_summary
from academy.services.candidate_records import CandidateResult


def result(student_id, status):
    return CandidateResult(
        student_id=student_id, name=f"S{student_id}", email=f"s{student_id}@example.com",
        phone='-', status=status, status_message=status
    )


def test_rank_order_and_stability():
    results = [
        result(1, CandidateStatus.FEES_OVERDUE),
        result(2, CandidateStatus.AVAILABLE),
        result(3, CandidateStatus.BUSY),
        result(4, CandidateStatus.PENDING_FEES),
        result(5, CandidateStatus.NO_ORIENTATION),
        result(6, CandidateStatus.AVAILABLE),
        result(7, CandidateStatus.BUSY),
    ]

    ranked = rank_candidates(results)

    assert [(r.student_id, r.status) for r in ranked] == [
        (2, CandidateStatus.AVAILABLE),
        (6, CandidateStatus.AVAILABLE),
        (5, CandidateStatus.NO_ORIENTATION),
        (3, CandidateStatus.BUSY),
        (7, CandidateStatus.BUSY),
        (4, CandidateStatus.PENDING_FEES),
        (1, CandidateStatus.FEES_OVERDUE),
    ]


def test_summary_counts_sum_to_total():
    results = [result(i, status) for i, status in enumerate([
        CandidateStatus.AVAILABLE, CandidateStatus.AVAILABLE, CandidateStatus.BUSY,
        CandidateStatus.FEES_OVERDUE, CandidateStatus.NO_ORIENTATION,
    ])]

    summary = summarize_candidates(results)

    assert summary == {'available': 2, 'noOrientation': 1, 'busy': 1, 'pendingFees': 0, 'feesOverdue': 1}
    assert sum(summary.values()) == len(results)


def test_empty_summary():
    assert summarize_candidates([]) == empty_summary()
    assert set(empty_summary().values()) == {0}
