from flask import Blueprint

orientation_bp = Blueprint('orientation', __name__)

from . import orientation  # noqa: E402,F401
