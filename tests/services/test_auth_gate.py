"""Auth Gate — verifies the admin gate in front of every protected route.

Invariants:
    - No credentials, unknown, expired, or suspended sessions → 401
    - Valid non-admin session → 403, and nothing is written (no audit row)
    - Admin session → handler runs
"""

from datetime import timedelta

from sqlalchemy import func, select

from admin_console.models import AdminAction


async def _audit_count(test_db) -> int:
    return (await test_db.execute(
        select(func.count()).select_from(AdminAction),
    )).scalar_one()


async def test_missing_credentials_return_401(client):
    res = await client.get("/api/admin/stats")
    assert res.status_code == 401
    assert res.json() == {
        "success": False, "message": "Unauthorized", "error": "UNAUTHENTICATED",
    }


async def test_unknown_token_returns_401(client, admin_user):
    res = await client.get(
        "/api/admin/stats", headers={"Authorization": "Bearer no-such-token"},
    )
    assert res.status_code == 401


async def test_expired_session_returns_401(client, seed_user):
    await seed_user("admin", token="stale", expires_in=timedelta(minutes=-5))
    res = await client.get(
        "/api/admin/stats", headers={"Authorization": "Bearer stale"},
    )
    assert res.status_code == 401


async def test_suspended_admin_returns_401(client, seed_user):
    await seed_user("admin", token="frozen", suspended=True)
    res = await client.get(
        "/api/admin/stats", headers={"Authorization": "Bearer frozen"},
    )
    assert res.status_code == 401


async def test_non_admin_is_forbidden_and_not_audited(client, member_headers, test_db):
    for path in ("/api/admin/stats", "/api/admin/users", "/api/admin/charts/image-uploads"):
        res = await client.get(path, headers=member_headers)
        assert res.status_code == 403
        assert res.json()["message"] == "Admin access required"
    assert await _audit_count(test_db) == 0


async def test_admin_reaches_handler(client, admin_headers):
    res = await client.get("/api/admin/stats", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["success"] is True


async def test_session_cookie_is_accepted(client, admin_user):
    res = await client.get(
        "/api/admin/stats", headers={"Cookie": "session_token=admin-token.signature"},
    )
    assert res.status_code == 200


async def test_forbidden_check_runs_before_validation(client, member_headers):
    res = await client.get("/api/admin/users?pageSize=9999", headers=member_headers)
    assert res.status_code == 403
