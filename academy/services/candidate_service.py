"""
Candidate suggestion service.

Suggests students for a batch: finds everyone whose software fits, then
labels each one as available, waiting on orientation, busy in another batch,
or blocked by pending/overdue fees. Read-only; nothing is written.
"""

import logging
from datetime import date

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from academy.exceptions import ValidationError, NotFoundError, InternalError
from academy.services.candidate_repository import CandidateRepository
from academy.services.software_matcher import SoftwareMatcher
from academy.services.status_annotator import StatusAnnotator
from academy.services.candidate_classifier import classify_candidates
from academy.services.candidate_ranker import rank_candidates, summarize_candidates, empty_summary
from academy.services.validation import parse_record_id


def _iso(value):
    return value.isoformat() if value else None


class CandidateSuggestionService:
    """Service class for suggesting batch candidates."""

    @staticmethod
    def parse_batch_id(raw_batch_id):
        """
        Validate a batch ID coming from a URL, CLI argument or caller.

        Raises:
            ValidationError: If the value is not a positive integer within the ID column range
        """
        return parse_record_id(raw_batch_id, "Invalid batch ID")

    @staticmethod
    def serialize_batch(batch):
        return {
            'id': batch.id,
            'title': batch.title,
            'software': batch.software,
            'startDate': _iso(batch.start_date),
            'endDate': _iso(batch.end_date),
            'schedule': batch.schedule,
        }

    @staticmethod
    def suggest_candidates(batch_id, today=None, repository=None):
        """
        Suggest and classify candidates for a batch.

        Args:
            batch_id: ID of the target batch
            today: Reference date for overdue fee checks (defaults to today)
            repository: Query layer, mainly replaced in tests

        Returns:
            dict: Response payload with batch info, ranked candidates,
            total count and per-status summary

        Raises:
            ValidationError: Invalid ID or batch without software
            NotFoundError: No batch with this ID
            InternalError: The candidate pool could not be loaded
        """
        logger = logging.getLogger('candidate_service')
        repository = repository or CandidateRepository
        batch_id = CandidateSuggestionService.parse_batch_id(batch_id)
        today = today or date.today()

        try:
            batch = repository.get_batch(batch_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load batch {batch_id}: {str(e)}", exc_info=True)
            raise InternalError("Internal server error while suggesting candidates") from e

        if not batch:
            raise NotFoundError("Batch not found")

        if not batch.software or not batch.software.strip():
            raise ValidationError("Batch must have software specified to suggest candidates")

        batch_info = CandidateSuggestionService.serialize_batch(batch)

        try:
            candidates = SoftwareMatcher(repository).find_candidates(batch)
        except SQLAlchemyError as e:
            logger.error(f"Candidate pool query failed for batch {batch_id}: {str(e)}", exc_info=True)
            raise InternalError("Internal server error while suggesting candidates") from e

        if not candidates:
            logger.info(f"No candidates found for batch {batch_id}")
            return {
                'batch': batch_info,
                'candidates': [],
                'totalCount': 0,
                'summary': empty_summary(),
            }

        facts = StatusAnnotator(repository).annotate(batch, candidates, today)
        results = classify_candidates(facts, current_app.config.get('CURRENCY_SYMBOL', '₹'))
        ranked = rank_candidates(results)
        summary = summarize_candidates(ranked)

        logger.info(f"Suggested {len(ranked)} candidates for batch {batch_id}: {summary}")

        return {
            'batch': batch_info,
            'candidates': [result.to_dict() for result in ranked],
            'totalCount': len(ranked),
            'summary': summary,
        }
