from datetime import date, timedelta

from pregnancy_tracker.utils.i18n import describe_gestational_age
from pregnancy_tracker.utils.ob_calculators import compute


def test_preview_from_query_params(client):
    res = client.get("/api/gestational-age?lmp=2024-01-01&as_of=2024-04-08")
    body = res.get_json()

    assert res.status_code == 200
    assert body["success"] is True
    data = body["data"]
    assert data["weeks"] == 14
    assert data["days"] == 0
    assert data["trimester"] == 2
    assert data["due_date"] == "2024-10-07"
    assert data["as_of"] == "2024-04-08"
    assert data["display"]["trimester_label"] == "Second Trimester"
    assert data["display"]["status"] == "26 weeks to go"


def test_preview_from_json_in_french(client):
    res = client.post("/api/gestational-age", json={
        "last_menstrual_period": "2024-01-01",
        "as_of": "2024-04-08",
        "lang": "fr",
    })
    display = res.get_json()["data"]["display"]

    assert res.status_code == 200
    assert display["language"] == "fr"
    assert display["trimester_label"] == "Deuxième Trimestre"
    assert display["status"] == "Encore 26 semaines"


class FrozenDate(date):
    @classmethod
    def today(cls):
        return date(2024, 4, 8)


def test_preview_defaults_to_today(client, monkeypatch):
    monkeypatch.setattr("pregnancy_tracker.routes.calculator.date", FrozenDate)
    lmp = date(2024, 4, 8) - timedelta(days=15)
    data = client.get(f"/api/gestational-age?lmp={lmp.isoformat()}").get_json()["data"]

    assert data["as_of"] == "2024-04-08"
    assert (data["weeks"], data["days"]) == (2, 1)


def test_preview_future_lmp_is_not_an_error(client):
    res = client.get("/api/gestational-age?lmp=2024-02-01&as_of=2024-01-01")
    data = res.get_json()["data"]

    assert res.status_code == 200
    assert data["total_days"] == -31
    assert data["display"]["status"] == "Future date entered"


def test_preview_requires_lmp(client):
    res = client.get("/api/gestational-age")
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_preview_rejects_malformed_dates(client):
    assert client.get("/api/gestational-age?lmp=yesterday").status_code == 400
    assert client.get("/api/gestational-age?lmp=2024-01-01&as_of=soon").status_code == 400


def test_preview_post_requires_json(client):
    res = client.post("/api/gestational-age", data="lmp=2024-01-01")
    assert res.status_code == 400


def test_overdue_label():
    display = describe_gestational_age(compute("2023-01-01", "2024-01-01"))
    assert display["status"] == "Overdue"
    assert display["trimester_label"] == "Third Trimester"


def test_singular_units_and_unknown_language_falls_back_to_english():
    display = describe_gestational_age(compute("2024-01-01", "2024-01-09"), language="de")

    assert display["language"] == "en"
    assert display["weeks_unit"] == "week"
    assert display["days_unit"] == "day"


def test_preview_lmp_past_calendar_range_is_rejected(client):
    res = client.get("/api/gestational-age?lmp=9999-12-01&as_of=2024-01-01")

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_preview_ignores_non_string_language(client):
    res = client.post("/api/gestational-age", json={
        "last_menstrual_period": "2024-01-01",
        "as_of": "2024-04-08",
        "lang": 5,
    })

    assert res.status_code == 200
    assert res.get_json()["data"]["display"]["language"] == "en"
