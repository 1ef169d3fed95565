# waitlist.py
from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, ValidationError, field_validator
from pymongo.errors import DuplicateKeyError, PyMongoError

from jobboard.db import WAITLIST, get_collection
from jobboard.log import get_logger

log = get_logger(__name__)

waitlist_bp = Blueprint("waitlist_bp", __name__, url_prefix="/api/waitlist")


class WaitlistEntry(BaseModel):
    """
    Represents a waitlist signup.
    """

    name: str
    email: str

    @field_validator("name")
    @classmethod
    def _name_present(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("email")
    @classmethod
    def _email_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


@waitlist_bp.route("/join", methods=["POST"])
def join_waitlist():
    data = request.get_json(silent=True) or {}
    try:
        entry = WaitlistEntry.model_validate(data)
    except ValidationError:
        return jsonify({"success": False, "message": "Name and email are required"}), 400

    already_joined = jsonify({"success": False, "message": "You are already on the waitlist!"}), 409
    collection = get_collection(WAITLIST)
    try:
        if collection.find_one({"email": entry.email}):
            return already_joined
        collection.insert_one({
            "name": entry.name,
            "email": entry.email,
            "joinedAt": datetime.now(timezone.utc),
        })
    except DuplicateKeyError:
        # Lost a race with a concurrent join for the same email
        return already_joined
    except PyMongoError:
        log.exception("❌ Waitlist join error")
        return jsonify({"success": False, "message": "Failed to join waitlist"}), 500

    log.info("📝 Waitlist signup: %s", entry.email)
    return jsonify({"success": True, "message": "Successfully joined the waitlist!"})


@waitlist_bp.route("/check", methods=["GET"])
def check_waitlist():
    email = (request.args.get("email") or "").strip()
    if not email:
        return jsonify({"joined": False, "message": "Email is required"}), 400
    try:
        existing = get_collection(WAITLIST).find_one({"email": email})
    except PyMongoError:
        log.exception("❌ Waitlist check error")
        return jsonify({"joined": False, "message": "Failed to check waitlist"}), 500
    return jsonify({"joined": existing is not None})
