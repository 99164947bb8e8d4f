"""Charts & Stats — verifies dense chart series and dashboard counts over SQLite.

Invariants:
    - Daily charts always have 31 buckets (30-day lookback, both ends inclusive)
    - Activity distribution always has 24 hour buckets
    - Missing processing-time days are null, not 0
    - Dashboard summary is audited; charts are not
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from admin_console.core.bucket_fill import hour_label
from admin_console.models import AdminAction
from admin_console.services.dashboard_stats import audit_stats


async def test_image_uploads_chart_is_dense(client, admin_headers, seed_user, seed_generation):
    owner = await seed_user()
    now = datetime.now(timezone.utc)
    two_days_ago = now - timedelta(days=2)
    await seed_generation(owner, created_at=two_days_ago)
    await seed_generation(owner, created_at=two_days_ago)
    await seed_generation(owner, created_at=now - timedelta(days=90))

    res = await client.get("/api/admin/charts/image-uploads", headers=admin_headers)
    assert res.status_code == 200
    series = res.json()["data"]
    assert len(series) == 31
    assert series[-1]["date"] == now.date().isoformat()
    by_date = {point["date"]: point["images"] for point in series}
    assert by_date[two_days_ago.date().isoformat()] == 2
    assert sum(by_date.values()) == 2
    assert all(set(point) == {"date", "images", "label"} for point in series)


async def test_processing_time_chart_averages_seconds_and_nulls_gaps(
    client, admin_headers, seed_user, seed_generation,
):
    owner = await seed_user()
    done = datetime.now(timezone.utc) - timedelta(days=1)
    await seed_generation(owner, processing_time_ms=1000, completed_at=done)
    await seed_generation(owner, processing_time_ms=2000, completed_at=done)
    await seed_generation(owner, status="failed", processing_time_ms=99000, completed_at=done)

    res = await client.get("/api/admin/charts/processing-time", headers=admin_headers)
    series = res.json()["data"]
    assert len(series) == 31
    point = next(p for p in series if p["date"] == done.date().isoformat())
    assert point["avgTime"] == 2
    assert point["count"] == 2
    others = [p for p in series if p["date"] != done.date().isoformat()]
    assert all(p["avgTime"] is None and p["count"] == 0 for p in others)


async def test_activity_distribution_has_twenty_four_hours(
    client, admin_headers, seed_user, seed_generation,
):
    owner = await seed_user()
    when = datetime.now(timezone.utc) - timedelta(hours=1)
    await seed_generation(owner, created_at=when)

    res = await client.get("/api/admin/charts/activity-distribution", headers=admin_headers)
    series = res.json()["data"]
    assert [p["hour"] for p in series] == [hour_label(h) for h in range(24)]
    assert series[when.hour]["activity"] == 1
    assert sum(p["activity"] for p in series) == 1


async def test_charts_are_not_audited(client, admin_headers, test_db):
    await client.get("/api/admin/charts/image-uploads", headers=admin_headers)
    count = (await test_db.execute(
        select(func.count()).select_from(AdminAction),
    )).scalar_one()
    assert count == 0


async def test_dashboard_stats_counts(client, admin_headers, seed_user, seed_generation, test_db):
    member = await seed_user()
    await seed_generation(member)
    await seed_generation(member, created_at=datetime.now(timezone.utc) - timedelta(days=20))

    res = await client.get("/api/admin/stats", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"] == {
        "totalUsers": 2,
        "totalImages": 2,
        "activeAdmins": 1,
        "weeklyActivity": 1,
    }
    action = (await test_db.execute(select(AdminAction.action))).scalar_one()
    assert action == "ACCESS_ADMIN_DASHBOARD"


async def test_audit_stats_window(client, admin_headers, admin_user, test_db):
    test_db.add(AdminAction(
        action="VIEW_AUDIT_LOGS", admin_id=admin_user.id,
        created_at=datetime.now(timezone.utc) - timedelta(days=45),
    ))
    for _ in range(2):
        test_db.add(AdminAction(action="SEARCH_USERS", admin_id=admin_user.id))
    await test_db.commit()

    res = await client.get("/api/admin/audit/stats?days=30", headers=admin_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totalActions"] == 2
    assert data["uniqueAdmins"] == 1
    assert data["actionsByType"] == {"SEARCH_USERS": 2}

    wide = await audit_stats(test_db, days=60)
    assert wide["totalActions"] == 3


async def test_audit_stats_days_is_bounded(client, admin_headers):
    res = await client.get("/api/admin/audit/stats?days=0", headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "query.days"
