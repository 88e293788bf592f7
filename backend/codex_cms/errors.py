from flask import jsonify, render_template, request
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from codex_cms.domain.blocks import error_details
from codex_cms.domain.invariants.exceptions import InvariantViolation, SchemaViolation
from codex_cms.extensions import db


def _wants_json():
    return request.path.startswith("/api/") or request.is_json


def register_error_handlers(app):
    @app.errorhandler(SchemaViolation)
    def handle_schema_violation(error):
        response = jsonify({
            "error": str(error),
            "details": error.details,
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": str(error),
        })
        response.status_code = 400
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "Validation failed",
            "details": error_details(error),
        })
        response.status_code = 400
        return response

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        app.logger.warning("Integrity error on %s: %s", request.path, error.orig)
        response = jsonify({
            "error": "Resource conflicts with an existing record",
        })
        response.status_code = 409
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if _wants_json():
            response = jsonify({"error": error.description})
            response.status_code = error.code
            return response

        template = "errors/404.html" if error.code == 404 else "errors/500.html"
        return render_template(template, error=error), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)

        if _wants_json():
            response = jsonify({"error": "Internal server error"})
            response.status_code = 500
            return response
        return render_template("errors/500.html", error=error), 500


def register_jwt_handlers(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Session has expired"}), 401
