"""
Integration tests for the daily routine endpoints.
"""

from meditime.models import LifePattern, SleepInducing


VALID_PATTERN = {
    "wake_up_time": "6:30",
    "bed_time": "23:00",
    "breakfast_time": "07:00",
    "lunch_time": "12:00",
    "dinner_time": "18:30",
    "work_start_time": "09:00",
    "work_end_time": "18:00",
    "has_driving": True,
    "has_focus_work": True,
}


class TestGetLifePattern:
    def test_empty_before_setup(self, client, auth_headers):
        response = client.get("/api/v1/life-pattern", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["data"] is None

    def test_requires_login(self, client, db):
        assert client.get("/api/v1/life-pattern").status_code == 401


class TestSaveLifePattern:
    def test_create(self, client, auth_headers, test_user):
        """Times are stored normalized to HH:MM."""
        response = client.post("/api/v1/life-pattern", json=VALID_PATTERN, headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["wake_up_time"] == "06:30"
        assert data["has_focus_work"] is True
        assert LifePattern.query.filter_by(user_id=test_user.id).count() == 1

    def test_update_keeps_single_row(self, client, auth_headers, life_pattern, test_user):
        response = client.post("/api/v1/life-pattern", json={
            "wake_up_time": "08:00",
            "bed_time": "01:00",
        }, headers=auth_headers)

        data = response.get_json()["data"]
        assert data["id"] == life_pattern.id
        assert data["bed_time"] == "01:00"
        assert data["breakfast_time"] is None
        assert data["has_driving"] is False
        assert LifePattern.query.filter_by(user_id=test_user.id).count() == 1

    def test_missing_required_time(self, client, auth_headers):
        response = client.post("/api/v1/life-pattern", json={"wake_up_time": "07:00"},
                               headers=auth_headers)

        assert response.status_code == 422
        assert "bed_time" in response.get_json()["message"]

    def test_string_booleans_are_parsed(self, client, auth_headers):
        """The string "false" turns a flag off rather than on."""
        payload = dict(VALID_PATTERN, has_driving="false", has_focus_work="true")

        response = client.post("/api/v1/life-pattern", json=payload, headers=auth_headers)

        data = response.get_json()["data"]
        assert response.status_code == 200
        assert data["has_driving"] is False
        assert data["has_focus_work"] is True

    def test_unrecognized_flag_value(self, client, auth_headers):
        payload = dict(VALID_PATTERN, has_driving="sometimes")

        response = client.post("/api/v1/life-pattern", json=payload, headers=auth_headers)

        assert response.status_code == 422
        assert LifePattern.query.count() == 0

    def test_malformed_optional_time(self, client, auth_headers):
        payload = dict(VALID_PATTERN, lunch_time="noon")

        response = client.post("/api/v1/life-pattern", json=payload, headers=auth_headers)

        assert response.status_code == 422
        assert LifePattern.query.count() == 0

    def test_saved_pattern_drives_recommendations(self, client, auth_headers, make_medicine):
        client.post("/api/v1/life-pattern", json=VALID_PATTERN, headers=auth_headers)
        medicine = make_medicine("Night pill", sleep_inducing=SleepInducing.MEDIUM)

        data = client.get(
            f"/api/v1/medicines/{medicine.id}/recommendation", headers=auth_headers,
        ).get_json()["data"]

        assert data["recommendation"]["recommended_times"] == ["21:00"]
        assert len(data["recommendation"]["special_warnings"]) == 1
