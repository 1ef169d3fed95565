# routes.py
from flask import Blueprint, current_app, jsonify, request

from jobboard.auth import require_auth
from jobboard.db import JOBS, get_collection
from jobboard.jobs.engine import JobNotFound, JobQueryEngine, JobValidationError, StoreFailure
from jobboard.jobs.filters import JobFilter, parse_pagination
from jobboard.log import get_logger

log = get_logger(__name__)

jobs_bp = Blueprint("jobs_bp", __name__, url_prefix="/api/jobs")


def _engine() -> JobQueryEngine:
    return JobQueryEngine(get_collection(JOBS))


def _not_found():
    return jsonify({"message": "Job not found"}), 404


def _json_body():
    """Parsed JSON body; a body that is present but not valid JSON is rejected."""
    data = request.get_json(silent=True)
    if data is None and request.get_data():
        raise JobValidationError([{"type": "json_invalid", "loc": (), "msg": "Invalid JSON body"}])
    return data


def _validation_failed(exc: JobValidationError):
    # Bare 400 unless detail is switched on in config
    if current_app.config.get("JOB_VALIDATION_DETAILS"):
        return jsonify({"message": "Validation failed", "errors": exc.errors}), 400
    return "", 400


# ----------------------------
# Public routes
# ----------------------------
@jobs_bp.route("", methods=["GET"])
def list_jobs():
    try:
        page, limit = parse_pagination(
            request.args,
            default_limit=current_app.config["JOBS_DEFAULT_LIMIT"],
            max_limit=current_app.config["JOBS_MAX_LIMIT"],
        )
        result = _engine().list_jobs(JobFilter.from_args(request.args), page, limit)
        return jsonify(result)
    except StoreFailure:
        log.exception("❌ Error fetching jobs")
        return jsonify({"message": "Error fetching jobs"}), 500


@jobs_bp.route("/categories", methods=["GET"])
def job_categories():
    try:
        return jsonify(_engine().get_categories())
    except StoreFailure:
        log.exception("❌ Error fetching job categories")
        return jsonify({"message": "Error fetching job categories"}), 500


@jobs_bp.route("/stats", methods=["GET"])
def job_stats():
    try:
        return jsonify(_engine().get_stats())
    except StoreFailure:
        log.exception("❌ Error fetching job stats")
        return jsonify({"message": "Error fetching job statistics"}), 500


@jobs_bp.route("/<job_id>", methods=["GET"])
def get_job(job_id):
    try:
        return jsonify(_engine().get_job(job_id))
    except JobNotFound:
        return _not_found()
    except StoreFailure:
        log.exception("❌ Error fetching job %s", job_id)
        return jsonify({"message": "Error fetching job"}), 500


@jobs_bp.route("/<job_id>/apply-click", methods=["POST"])
def apply_click(job_id):
    """Fired by the frontend on outbound "Apply" clicks; no auth."""
    try:
        job = _engine().increment_apply_click(job_id)
    except JobNotFound:
        return _not_found()
    except StoreFailure:
        log.exception("❌ Error incrementing apply click count for %s", job_id)
        return jsonify({"message": "Error incrementing apply click count"}), 500

    return jsonify({
        "success": True,
        "message": "Apply click count incremented successfully",
        "applyClickCount": job["applyClickCount"],
    })


# ----------------------------
# Protected routes
# ----------------------------
@jobs_bp.route("", methods=["POST"])
@require_auth
def create_job():
    try:
        job = _engine().create_job(_json_body())
        return jsonify(job), 201
    except JobValidationError as exc:
        log.warning("⚠️ Rejected job create: %s", exc.errors)
        return _validation_failed(exc)
    except StoreFailure:
        log.exception("❌ Error creating job")
        return jsonify({"message": "Error creating job"}), 500


@jobs_bp.route("/<job_id>", methods=["PUT"])
@require_auth
def update_job(job_id):
    try:
        job = _engine().update_job(job_id, _json_body())
        return jsonify(job)
    except JobNotFound:
        return _not_found()
    except JobValidationError as exc:
        log.warning("⚠️ Rejected update of job %s: %s", job_id, exc.errors)
        return _validation_failed(exc)
    except StoreFailure:
        log.exception("❌ Error updating job %s", job_id)
        return jsonify({"message": "Error updating job"}), 500


@jobs_bp.route("/<job_id>", methods=["DELETE"])
@require_auth
def delete_job(job_id):
    try:
        _engine().delete_job(job_id)
    except JobNotFound:
        return _not_found()
    except StoreFailure:
        log.exception("❌ Error deleting job %s", job_id)
        return jsonify({"message": "Error deleting job"}), 500
    return jsonify({"message": "Job deleted successfully"})
