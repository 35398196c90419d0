from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.constants import STORE_UNAVAILABLE_CODE
from ..core.exceptions import AuthorizationError, NotFoundError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map domain exceptions to ``{"error": ...}`` JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(StoreUnavailableError)
    def _unavailable(e: StoreUnavailableError):
        logger.warning("Answering 503: %s", e)
        return jsonify({"error": str(e), "code": STORE_UNAVAILABLE_CODE}), 503
