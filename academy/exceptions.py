"""
Exceptions raised by the candidate suggestion flow.
Each carries the HTTP status code the API layer responds with.
"""


class CandidateSuggestionError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'status': 'error', 'message': self.message}


class ValidationError(CandidateSuggestionError):
    """Request input is missing or invalid."""

    status_code = 400


class NotFoundError(CandidateSuggestionError):
    """A referenced record does not exist."""

    status_code = 404


class InternalError(CandidateSuggestionError):
    """A bulk query failed and no report can be produced."""

    status_code = 500
