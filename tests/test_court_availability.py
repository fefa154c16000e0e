from datetime import date

from conftest import auth_headers, make_court, make_user
from quickcourt.services.court_service import availability_calendar, resolve_operating_hours


def test_resolution_order(db, owner):
    court = make_court(
        db, owner,
        weekly_hours={"monday": {"open": "08:00", "close": "20:00"}},
        date_overrides={"2026-11-09": {"open": "12:00", "close": "14:00"}},
        blackout_dates=["2026-11-16"],
    )
    assert resolve_operating_hours(court, date(2026, 11, 2)) == ("08:00", "20:00")
    assert resolve_operating_hours(court, date(2026, 11, 3)) == ("06:00", "22:00")
    assert resolve_operating_hours(court, date(2026, 11, 9)) == ("12:00", "14:00")
    assert resolve_operating_hours(court, date(2026, 11, 16)) is None


def test_calendar_marks_blackouts(db, owner):
    court = make_court(db, owner, blackout_dates=["2026-11-03"])
    cal = availability_calendar(court, date(2026, 11, 2), days=3)

    assert [d["date"] for d in cal] == ["2026-11-02", "2026-11-03", "2026-11-04"]
    assert cal[1] == {"date": "2026-11-03", "isAvailable": False, "reason": "Blackout Date"}
    assert cal[0]["operatingHours"] == {"open": "06:00", "close": "22:00"}


def test_update_settings_via_api(client, db, owner, court):
    r = client.put(
        f"/api/v1/courts/{court.id}/availability",
        json={
            "weeklyHours": {"Saturday": {"open": "07:00", "close": "23:00"}},
            "blackoutDates": ["2026-12-25", "2026-12-25"],
            "peakRate": 900,
            "status": "maintenance",
            "maintenanceNotes": "resurfacing",
        },
        headers=auth_headers(owner),
    )
    assert r.status_code == 200, r.text
    c = r.json()["court"]
    assert c["weeklyHours"] == {"saturday": {"open": "07:00", "close": "23:00"}}
    assert c["blackoutDates"] == ["2026-12-25"]
    assert c["peakRate"] == 900
    assert c["peakStart"] == "18:00"
    assert c["status"] == "maintenance"
    assert c["maintenanceNotes"] == "resurfacing"

    r = client.get(f"/api/v1/courts/{court.id}/availability", headers=auth_headers(owner))
    assert r.status_code == 200
    assert r.json()["venueName"] == "Riverside Arena"
    assert len(r.json()["availability"]) == 30


def test_invalid_settings_rejected(client, db, owner, court):
    headers = auth_headers(owner)
    url = f"/api/v1/courts/{court.id}/availability"

    assert client.put(url, json={"weeklyHours": {"funday": {"open": "07:00", "close": "08:00"}}}, headers=headers).status_code == 400
    assert client.put(url, json={"openTime": "23:00", "closeTime": "07:00"}, headers=headers).status_code == 400
    assert client.put(url, json={"peakStart": "18:00", "peakEnd": None}, headers=headers).status_code == 400
    assert client.put(url, json={"blackoutDates": ["tomorrow"]}, headers=headers).status_code == 400
    assert client.put(url, json={"status": "closed"}, headers=headers).status_code == 400


def test_other_owner_cannot_read_settings(client, db, court):
    stranger = make_user(db, "owner")
    r = client.get(f"/api/v1/courts/{court.id}/availability", headers=auth_headers(stranger))
    assert r.status_code == 403
