# auth.py
import functools
from typing import Optional

from flask import current_app, g, jsonify, request
from supabase import Client, create_client

from jobboard.log import get_logger

log = get_logger(__name__)


class SupabaseTokenVerifier:
    """Resolve a bearer token to a user through Supabase Auth."""

    def __init__(self, client: Optional[Client]):
        self.client = client

    @classmethod
    def from_config(cls, config) -> "SupabaseTokenVerifier":
        url = config.get("SUPABASE_URL")
        key = config.get("SUPABASE_KEY")
        if not url or not key:
            log.warning("⚠️ Supabase not configured; protected job routes will reject every token")
            return cls(None)
        try:
            return cls(create_client(url, key))
        except Exception:
            log.exception("❌ Failed to initialize Supabase client")
            return cls(None)

    def verify(self, token: str) -> Optional[dict]:
        """Return {"id", "email"} for a valid token, None otherwise."""
        if self.client is None:
            return None
        try:
            response = self.client.auth.get_user(token)
        except Exception as e:
            log.info("🔒 Token rejected by Supabase: %s", e)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return {"id": user.id, "email": getattr(user, "email", None)}


def init_auth(app):
    verifier = app.config.get("TOKEN_VERIFIER") or SupabaseTokenVerifier.from_config(app.config)
    app.extensions["token_verifier"] = verifier
    return verifier


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    token = header.replace("Bearer ", "", 1).strip()
    return token or None


def require_auth(view):
    """Reject with 401 unless the request carries a token the verifier accepts."""

    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"message": "Authentication required"}), 401

        user = current_app.extensions["token_verifier"].verify(token)
        if user is None:
            return jsonify({"message": "Invalid token"}), 401

        g.user = user
        return view(*args, **kwargs)

    return wrapper
