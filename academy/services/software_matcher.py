"""
Software matching for batch candidate discovery.

Software names are typed in free text on profiles and batches, so tokens
match loosely: equal, or one contained in the other ("photoshop" matches
"photoshop cc"). Short names can over-match ("max" also hits "3ds max");
staff rely on the loose behaviour, so it is kept.
"""

import logging

from academy.exceptions import ValidationError


def normalize_software_tokens(value):
    """
    Split software text into lower-cased, trimmed, non-empty tokens.

    Args:
        value: Comma-separated string, or a list whose string entries may
            themselves be comma-separated. Non-string entries are ignored.

    Returns:
        list: Unique tokens in first-seen order
    """
    if not value:
        return []

    parts = [value] if isinstance(value, str) else value

    tokens = []
    for part in parts:
        if not isinstance(part, str):
            continue
        for token in part.split(','):
            token = token.strip().lower()
            if token and token not in tokens:
                tokens.append(token)
    return tokens


def tokens_match(left, right):
    """Loose token comparison: equality or substring containment either way."""
    return left == right or left in right or right in left


def software_overlaps(tokens, required_tokens):
    return any(tokens_match(token, required) for token in tokens for required in required_tokens)


def resolve_candidate_software(student):
    """
    The one software list used to match a student.

    Software of the batches a student is waiting to join takes priority;
    the profile list is the fallback for students without that data yet.
    """
    pending = normalize_software_tokens(student.pending_batch_software)
    if pending:
        return pending
    return normalize_software_tokens(student.profile_software_list)


def match_students_by_software(required_tokens, students):
    """IDs of students whose resolved software overlaps ``required_tokens``."""
    return {
        student.id for student in students
        if student.is_active and software_overlaps(resolve_candidate_software(student), required_tokens)
    }


def match_batches_by_software(required_tokens, batches):
    """IDs of batches whose own software overlaps ``required_tokens``."""
    return [
        batch.batch_id for batch in batches
        if software_overlaps(normalize_software_tokens(batch.software), required_tokens)
    ]


class SoftwareMatcher:
    """Builds the candidate pool for a batch from profile and batch-history software."""

    def __init__(self, repository):
        self.repository = repository
        self.logger = logging.getLogger('software_matcher')

    def find_candidates(self, batch):
        """
        Discover every active student who plausibly fits the batch's software.

        Args:
            batch: Target Batch (``id`` and ``software`` are read)

        Returns:
            list: StudentRecord objects ordered by student ID

        Raises:
            ValidationError: If the batch software yields no tokens
        """
        required_tokens = normalize_software_tokens(batch.software)
        if not required_tokens:
            raise ValidationError("batch has no software to match against")

        students = self.repository.get_active_students()
        students_by_id = {student.id: student for student in students}

        profile_matches = match_students_by_software(required_tokens, students)

        other_batches = self.repository.get_other_batches_with_software(batch.id)
        related_batch_ids = match_batches_by_software(required_tokens, other_batches)
        history_matches = self.repository.get_active_enrollment_student_ids(related_batch_ids)

        # Enrollment history can name inactive or non-student users; only active students are candidates
        candidate_ids = profile_matches | {sid for sid in history_matches if sid in students_by_id}

        self.logger.info(
            f"Batch {batch.id} software {required_tokens}: {len(profile_matches)} profile matches, "
            f"{len(history_matches)} from {len(related_batch_ids)} related batches, "
            f"{len(candidate_ids)} candidates"
        )

        return [students_by_id[sid] for sid in sorted(candidate_ids)]
