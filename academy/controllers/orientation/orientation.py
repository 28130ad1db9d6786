# controllers/orientation/orientation.py
"""
Orientation status routes.
"""
from flask import jsonify, request, current_app

from academy.exceptions import CandidateSuggestionError
from academy.services.orientation_service import OrientationService
from academy.services.validation import parse_record_id, is_record_id

from . import orientation_bp


@orientation_bp.route('/<student_id>')
def student_orientation(student_id):
    """Orientation status of a single student."""
    try:
        data = OrientationService.get_student_orientation(
            parse_record_id(student_id, "Invalid student id")
        )
        return jsonify({'status': 'success', 'data': data})

    except CandidateSuggestionError as e:
        return jsonify(e.to_dict()), e.status_code

    except Exception as e:
        current_app.logger.error(f"Get student orientation error: {str(e)}", exc_info=True)
        return jsonify({'status': 'error', 'message': 'Failed to get orientation status'}), 500


@orientation_bp.route('/bulk-status', methods=['POST'])
def bulk_orientation_status():
    """Orientation eligibility for a list of students."""
    if not request.is_json:
        return jsonify({'status': 'error', 'message': 'Invalid request format'}), 400

    payload = request.get_json(silent=True)
    student_ids = payload.get('studentIds') if isinstance(payload, dict) else None
    if (not isinstance(student_ids, list) or not student_ids or
            not all(is_record_id(sid) for sid in student_ids)):
        return jsonify({'status': 'error', 'message': 'studentIds must be a non-empty list of student IDs'}), 400

    try:
        data = OrientationService.get_bulk_orientation_status(student_ids)
        return jsonify({'status': 'success', 'data': data})

    except Exception as e:
        current_app.logger.error(f"Bulk orientation status error: {str(e)}", exc_info=True)
        return jsonify({'status': 'error', 'message': 'Failed to get orientation status'}), 500
