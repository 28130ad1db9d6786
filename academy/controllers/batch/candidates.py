# controllers/batch/candidates.py
"""
Batch candidate suggestion routes.
Used by staff when picking students to enroll in a batch.
"""
from flask import jsonify, current_app

from academy.exceptions import CandidateSuggestionError
from academy.services.candidate_service import CandidateSuggestionService

from . import batch_bp


@batch_bp.route('/<batch_id>/candidates/suggest')
def suggest_candidates(batch_id):
    """Suggest eligible students for a batch, ranked by availability."""
    try:
        data = CandidateSuggestionService.suggest_candidates(batch_id)
        return jsonify({'status': 'success', 'data': data})

    except CandidateSuggestionError as e:
        if e.status_code >= 500:
            current_app.logger.error(f"Suggest candidates error for batch {batch_id}: {e.message}")
        else:
            current_app.logger.info(f"Suggest candidates rejected for batch {batch_id}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    except Exception as e:
        current_app.logger.error(f"Suggest candidates error: {str(e)}", exc_info=True)
        return jsonify({
            'status': 'error',
            'message': 'Internal server error while suggesting candidates'
        }), 500
