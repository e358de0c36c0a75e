from flask import Blueprint, jsonify
from library_manager.buisness.circulation.errors import (
    NotFoundError,
    InvalidTransitionError,
    ConcurrencyConflictError,
)
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.routes.catalog")

catalog_bp = Blueprint('catalog', __name__)


@catalog_bp.errorhandler(NotFoundError)
def handle_not_found(error):
    logger.warning(f"Catalog lookup failed: {error}")
    return jsonify({'error': str(error)}), 404


@catalog_bp.errorhandler(InvalidTransitionError)
def handle_invalid_transition(error):
    logger.warning(f"Rejected circulation transition: {error}")
    return jsonify({'error': str(error)}), 409


@catalog_bp.errorhandler(ConcurrencyConflictError)
def handle_conflict(error):
    return jsonify({'error': str(error)}), 409


# Import all route modules
from . import (  # noqa: E402,F401
    views,
    actions,
)
