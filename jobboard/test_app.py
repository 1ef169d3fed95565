from datetime import datetime, timezone
from unittest import mock

from bson import ObjectId

from jobboard.auth import SupabaseTokenVerifier


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.data == b"Backend is working!"


def test_health_reports_cors_origins(client):
    res = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    body = res.get_json()
    assert body["status"] == "OK"
    assert "http://localhost:5173" in body["cors"]["allowedOrigins"]
    assert body["cors"]["requestOrigin"] == "http://localhost:5173"


def test_cors_header_for_allowed_origin(client):
    res = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
    assert res.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.get_json() == {
        "error": "Not Found",
        "message": "The requested resource was not found",
    }


def test_unhandled_errors_hide_detail(app, client):
    @app.route("/boom")
    def boom():
        raise RuntimeError("secret internals")

    res = client.get("/boom")

    assert res.status_code == 500
    assert res.get_json() == {"error": "Something went wrong!"}


def test_json_provider_handles_mongo_types(app):
    oid = ObjectId()
    payload = {"_id": oid, "at": datetime(2024, 5, 1, 12, 0), "aware": datetime(2024, 5, 1, tzinfo=timezone.utc)}

    text = app.json.dumps(payload)

    assert f'"_id": "{oid}"' in text
    assert '"at": "2024-05-01T12:00:00+00:00"' in text
    assert '"aware": "2024-05-01T00:00:00+00:00"' in text


# ----------------------------
# Supabase token verifier
# ----------------------------
def test_verifier_without_supabase_rejects_everything():
    verifier = SupabaseTokenVerifier.from_config({"SUPABASE_URL": None, "SUPABASE_KEY": None})
    assert verifier.verify("anything") is None


def test_verifier_accepts_known_user():
    client = mock.MagicMock()
    client.auth.get_user.return_value.user.id = "uuid-1"
    client.auth.get_user.return_value.user.email = "a@b.c"

    user = SupabaseTokenVerifier(client).verify("jwt")

    client.auth.get_user.assert_called_once_with("jwt")
    assert user == {"id": "uuid-1", "email": "a@b.c"}


def test_verifier_rejects_when_supabase_raises():
    client = mock.MagicMock()
    client.auth.get_user.side_effect = Exception("invalid JWT")

    assert SupabaseTokenVerifier(client).verify("jwt") is None


def test_verifier_rejects_empty_response():
    client = mock.MagicMock()
    client.auth.get_user.return_value = None

    assert SupabaseTokenVerifier(client).verify("jwt") is None
