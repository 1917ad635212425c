from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from sift.config import Config
from sift.errors import SiftError, Unauthenticated
from sift.extensions import db, login_manager, migrate
from sift.models import User
from sift.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    register_error_handlers(app)
    register_routes(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(SiftError)
    def handle_sift_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            current_app.logger.error("Request failed: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", error)
        return jsonify({"error": "Internal server error"}), 500


__all__ = ["create_app", "db", "migrate"]
