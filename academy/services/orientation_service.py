import logging

from academy.extensions import db
from academy.exceptions import NotFoundError
from academy.models import User, StudentOrientation, OrientationLanguage
from academy.services.candidate_repository import CandidateRepository
from academy.services.status_annotator import compute_orientation_fact


def _iso(value):
    return value.isoformat() if value else None


class OrientationService:
    """Orientation acceptance lookups for staff screens."""

    @staticmethod
    def get_student_orientation(student_id):
        """
        Per-language orientation status of one student.

        Raises:
            NotFoundError: If no student has this ID
        """
        student = db.session.get(User, student_id)
        if not student or not student.is_student:
            raise NotFoundError("Student not found")

        records = (
            db.session.query(StudentOrientation)
            .filter_by(student_id=student_id)
            .order_by(StudentOrientation.language)
            .all()
        )
        by_language = {record.language: record for record in records}

        orientations = {}
        for language in OrientationLanguage.ALL:
            record = by_language.get(language)
            orientations[language] = {
                'accepted': bool(record and record.accepted),
                'acceptedAt': _iso(record.accepted_at) if record else None,
            }

        return {
            'studentId': student_id,
            'isEligible': compute_orientation_fact(records),
            'orientations': orientations,
        }

    @staticmethod
    def get_bulk_orientation_status(student_ids):
        """Map each student ID to whether any orientation is accepted."""
        logger = logging.getLogger('orientation_service')

        records = CandidateRepository.get_orientations(student_ids)
        accepted = {record.student_id for record in records if record.accepted}

        logger.debug(f"Orientation status loaded for {len(student_ids)} students")
        return {str(student_id): student_id in accepted for student_id in student_ids}
