# app.py
from datetime import datetime, timezone

from bson import ObjectId
from flask import Flask, jsonify, request
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from jobboard.auth import init_auth
from jobboard.config import Config
from jobboard.content import blog_bp, faqs_bp, guides_bp, waitlist_bp
from jobboard.db import init_db
from jobboard.jobs import jobs_bp
from jobboard.jobs.seed import seed_jobs_command
from jobboard.log import get_logger

log = get_logger(__name__)


class MongoJSONProvider(DefaultJSONProvider):
    """ObjectId as its hex string, datetimes as ISO-8601."""

    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            if o.tzinfo is None:
                o = o.replace(tzinfo=timezone.utc)
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def create_app(overrides: dict = None) -> Flask:
    app = Flask(__name__)
    app.json = MongoJSONProvider(app)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # CORS: match exact origins (no trailing slash)
    CORS(app,
         resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
         supports_credentials=True,
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Requested-With"])

    init_db(app)
    init_auth(app)

    app.register_blueprint(jobs_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(guides_bp)
    app.register_blueprint(faqs_bp)
    app.register_blueprint(waitlist_bp)
    app.cli.add_command(seed_jobs_command)

    _register_core_routes(app)
    _register_error_handlers(app)

    log.info("🚀 App ready; CORS allowed origins: %s", app.config["CORS_ORIGINS"])
    return app


def _register_core_routes(app):
    @app.route("/", methods=["GET"])
    def root():
        return "Backend is working!", 200

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "cors": {
                "allowedOrigins": app.config["CORS_ORIGINS"],
                "requestOrigin": request.headers.get("Origin"),
            },
        }), 200


def _register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({
            "error": "Not Found",
            "message": "The requested resource was not found",
        }), 404

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return e
        log.exception("❌ Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Something went wrong!"}), 500


if __name__ == "__main__":
    application = create_app()
    # turn off debug in prod
    application.run(host="0.0.0.0", port=application.config["PORT"], debug=False)
