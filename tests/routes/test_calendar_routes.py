from datetime import date, timedelta

from meetcal.auth import create_access_token
from meetcal.core.ulid_helper import generate_ulid

EMPTY = [False] * 30
MORNING = [True] * 5 + [False] * 25


def _days(start="2025-06-08", slots=EMPTY):
    first = date.fromisoformat(start)
    return [
        {"date": (first + timedelta(days=i)).isoformat(), "slots": list(slots)} for i in range(7)
    ]


def test_requires_authentication(client):
    response = client.get("/api/v1/calendar/week", params={"day": "2025-06-08"})
    assert response.status_code == 401
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["code"] == "NOT_AUTHENTICATED"


def test_rejects_invalid_token(client):
    response = client.get(
        "/api/v1/calendar/week", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_rejects_token_for_unknown_user(client):
    token = create_access_token({"sub": generate_ulid()})
    response = client.get("/api/v1/calendar/week", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token(client, make_user):
    user = make_user()
    token = create_access_token({"sub": user.id}, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/v1/calendar/week", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_get_empty_week(client, make_user, auth_headers):
    user = make_user()
    response = client.get(
        "/api/v1/calendar/week", params={"day": "2025-06-11"}, headers=auth_headers(user)
    )
    assert response.status_code == 200
    body = response.json()
    assert body["week_start_date"] == "2025-06-08"
    assert [d["date"] for d in body["days"]] == [d["date"] for d in _days()]
    assert all(d["slots"] == EMPTY for d in body["days"])


def test_get_week_defaults_to_today(client, make_user, auth_headers):
    user = make_user()
    response = client.get("/api/v1/calendar/week", headers=auth_headers(user))
    assert response.status_code == 200
    assert len(response.json()["days"]) == 7


def test_save_then_read(client, make_user, auth_headers):
    user = make_user()
    days = _days(slots=MORNING)

    response = client.put(
        "/api/v1/calendar/week",
        json={"reference_date": "2025-06-14", "days": days},
        headers=auth_headers(user),
    )
    assert response.status_code == 200
    assert response.json() == {"week_start_date": "2025-06-08"}

    body = client.get(
        "/api/v1/calendar/week", params={"day": "2025-06-08"}, headers=auth_headers(user)
    ).json()
    assert all(d["slots"] == MORNING for d in body["days"])


def test_save_rejects_wrong_week_with_400(client, make_user, auth_headers):
    user = make_user()
    response = client.put(
        "/api/v1/calendar/week",
        json={"reference_date": "2025-06-08", "days": _days(start="2025-06-09")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert body["code"] == "INVALID_WEEK"


def test_save_rejects_short_vector_with_400(client, make_user, auth_headers):
    user = make_user()
    days = _days()
    days[3]["slots"] = [False] * 29
    response = client.put(
        "/api/v1/calendar/week",
        json={"reference_date": "2025-06-08", "days": days},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_SLOTS"


def test_bad_day_query_is_400(client, make_user, auth_headers):
    user = make_user()
    response = client.get(
        "/api/v1/calendar/week", params={"day": "yesterday"}, headers=auth_headers(user)
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_DATE"


def test_unknown_body_field_is_422(client, make_user, auth_headers):
    user = make_user()
    response = client.put(
        "/api/v1/calendar/week",
        json={"reference_date": "2025-06-08", "days": _days(), "extra": 1},
        headers=auth_headers(user),
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_users_me(client, make_user, auth_headers):
    user = make_user(name="Ana", timezone="Europe/Lisbon")
    response = client.get("/api/v1/users/me", headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json() == {
        "id": user.id,
        "name": "Ana",
        "email": user.email,
        "timezone": "Europe/Lisbon",
        "profile_img": None,
    }


def test_users_me_includes_avatar(client, make_user, auth_headers, db):
    user = make_user()
    user.profile_img = "https://cdn.example.com/avatars/ana.png"
    db.commit()

    response = client.get("/api/v1/users/me", headers=auth_headers(user))

    assert response.json()["profile_img"] == "https://cdn.example.com/avatars/ana.png"
