"""API tests for /events: public reads, business-only writes and creator-only edits."""

import unittest

from app.models import Event
from app.services.events import normalize_start_time
from tests.helpers import ApiTestCase, auth_headers, days_from_today, event_payload


class TestEndToEndOwnership(ApiTestCase):
    """A business creates an event; another identity cannot delete it."""

    def test_business_creates_other_identity_cannot_delete(self) -> None:
        self.register(role="business", email="a@x.com", password="Secret123!", display_name="A")
        login = self.client.post("/auth/login", json={"email": "a@x.com", "password": "Secret123!"})
        self.assertEqual(login.status_code, 200)
        token_a = login.json()["token"]
        a_id = login.json()["identity"]["id"]

        created = self.client.post(
            "/events",
            json={"title": "Market", "town": "Banff", "category": "Market", "date": "2025-12-01"},
            headers=auth_headers(token_a),
        )
        self.assertEqual(created.status_code, 201)
        event = created.json()
        self.assertEqual(event["createdBy"], a_id)

        token_b, _ = self.register(role="business", email="b@x.com")
        denied = self.client.delete(f"/events/{event['id']}", headers=auth_headers(token_b))
        self.assertEqual(denied.status_code, 403)
        self.assertEqual(denied.json()["error"], "forbidden")

        still_there = self.client.get(f"/events/{event['id']}")
        self.assertEqual(still_there.status_code, 200)
        self.assertEqual(still_there.json()["title"], "Market")

    def test_local_identity_cannot_create_events(self) -> None:
        business_token, _ = self.register(role="business")
        self.create_event(business_token)
        before = self.client.get("/events").json()

        token_c, _ = self.register(role="local")
        response = self.client.post("/events", json=event_payload(), headers=auth_headers(token_c))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "Business account required to perform this action.")

        after = self.client.get("/events").json()
        self.assertEqual(len(after), len(before))
        with self.SessionLocal() as db:
            self.assertEqual(db.query(Event).count(), 1)

    def test_role_is_checked_before_body_validation(self) -> None:
        token, _ = self.register(role="local")
        response = self.client.post("/events", json={"title": ""}, headers=auth_headers(token))
        self.assertEqual(response.status_code, 403)

    def test_anonymous_create_is_unauthenticated(self) -> None:
        response = self.client.post("/events", json=event_payload())
        self.assertEqual(response.status_code, 401)


class TestCreateAndFetch(ApiTestCase):
    """Created events round-trip every supplied field."""

    def test_round_trip_all_fields(self) -> None:
        token, identity = self.register(role="business")
        supplied = event_payload(
            title="Jazz on the Bow",
            town="Canmore",
            category="Music",
            date=days_from_today(12),
            time="7:00 PM",
            endTime="10:00 PM",
            location="Canmore Legion",
            description="Live trio, all ages.",
            imageUrl="https://example.com/jazz.png",
        )
        created = self.client.post("/events", json=supplied, headers=auth_headers(token))
        self.assertEqual(created.status_code, 201)
        fetched = self.client.get(f"/events/{created.json()['id']}")
        self.assertEqual(fetched.status_code, 200)
        body = fetched.json()
        for key, value in supplied.items():
            self.assertEqual(body[key], value, key)
        self.assertEqual(body["createdBy"], identity["id"])

    def test_snake_case_input_accepted(self) -> None:
        token, _ = self.register(role="business")
        created = self.create_event(token, end_time="9:00 PM", image_url="https://example.com/a.png")
        self.assertEqual(created["endTime"], "9:00 PM")
        self.assertEqual(created["imageUrl"], "https://example.com/a.png")

    def test_invalid_fields_rejected(self) -> None:
        token, _ = self.register(role="business")
        cases = [
            ({"date": "2025-13-01"}, "date"),
            ({"date": "12/01/2025"}, "date"),
            ({"town": "Calgary"}, "town"),
            ({"category": "Sports"}, "category"),
            ({"title": ""}, "title"),
        ]
        for override, field in cases:
            response = self.client.post(
                "/events", json=event_payload(**override), headers=auth_headers(token)
            )
            self.assertEqual(response.status_code, 400, override)
            self.assertEqual(response.json()["error"], "invalid_input")
            self.assertIn(field, response.json()["fields"])

    def test_missing_event_not_found(self) -> None:
        response = self.client.get("/events/12345")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "not_found", "detail": "Event not found."})

    def test_client_cannot_choose_creator(self) -> None:
        token, identity = self.register(role="business")
        created = self.create_event(token, createdBy=identity["id"] + 100)
        self.assertEqual(created["createdBy"], identity["id"])


class TestListing(ApiTestCase):
    """GET /events lists today and later in ascending date order; /events/mine lists the caller's."""

    def test_upcoming_only_ascending(self) -> None:
        token, _ = self.register(role="business")
        self.create_event(token, title="Past", date=days_from_today(-1))
        self.create_event(token, title="Later", date=days_from_today(10))
        self.create_event(token, title="Today", date=days_from_today(0))
        self.create_event(token, title="Soon", date=days_from_today(5))

        response = self.client.get("/events")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["title"] for e in response.json()], ["Today", "Soon", "Later"])

    def test_filter_by_town_and_category(self) -> None:
        token, _ = self.register(role="business")
        self.create_event(token, title="Banff Market", town="Banff", category="Market")
        self.create_event(token, title="Canmore Market", town="Canmore", category="Market")
        self.create_event(token, title="Canmore Yoga", town="Canmore", category="Wellness")

        by_town = self.client.get("/events", params={"town": "Canmore"}).json()
        self.assertEqual({e["title"] for e in by_town}, {"Canmore Market", "Canmore Yoga"})
        both = self.client.get("/events", params={"town": "Canmore", "category": "Market"}).json()
        self.assertEqual([e["title"] for e in both], ["Canmore Market"])

    def test_invalid_filter_rejected(self) -> None:
        response = self.client.get("/events", params={"town": "Calgary"})
        self.assertEqual(response.status_code, 400)

    def test_mine_lists_only_callers_events_including_past(self) -> None:
        token_a, _ = self.register(role="business")
        token_b, _ = self.register(role="business")
        self.create_event(token_a, title="A past", date=days_from_today(-3))
        self.create_event(token_a, title="A future", date=days_from_today(3))
        self.create_event(token_b, title="B future", date=days_from_today(1))

        response = self.client.get("/events/mine", headers=auth_headers(token_a))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["title"] for e in response.json()], ["A past", "A future"])

    def test_mine_requires_auth(self) -> None:
        self.assertEqual(self.client.get("/events/mine").status_code, 401)

    def test_same_day_events_ordered_by_start_time(self) -> None:
        token, _ = self.register(role="business")
        day = days_from_today(4)
        self.create_event(token, title="Evening", date=day, time="7:00 PM")
        self.create_event(token, title="Untimed", date=day)
        self.create_event(token, title="Morning", date=day, time="9:00 AM")
        self.create_event(token, title="Midmorning", date=day, time="10:00 AM")
        self.create_event(token, title="Noon", date=day, time="12:00 PM")

        titles = [e["title"] for e in self.client.get("/events").json()]
        self.assertEqual(titles, ["Morning", "Midmorning", "Noon", "Evening", "Untimed"])
        mine = [e["title"] for e in self.client.get("/events/mine", headers=auth_headers(token)).json()]
        self.assertEqual(mine, titles)

    def test_changing_time_reorders_event(self) -> None:
        token, _ = self.register(role="business")
        day = days_from_today(2)
        late = self.create_event(token, title="Late", date=day, time="8:00 PM")
        self.create_event(token, title="Early", date=day, time="8:00 AM")
        self.client.put(
            f"/events/{late['id']}", json={"time": "6:30 AM"}, headers=auth_headers(token)
        )
        titles = [e["title"] for e in self.client.get("/events").json()]
        self.assertEqual(titles, ["Late", "Early"])


class TestNormalizeStartTime(unittest.TestCase):
    def test_twelve_hour_and_twenty_four_hour_spellings(self) -> None:
        cases = {
            "9:00 AM": "09:00",
            "10:00 am": "10:00",
            "7:00 PM": "19:00",
            "7:30pm": "19:30",
            "7 PM": "19:00",
            "12:00 AM": "00:00",
            "12:15 PM": "12:15",
            "18:45": "18:45",
            " 8:05  AM ": "08:05",
        }
        for raw, expected in cases.items():
            self.assertEqual(normalize_start_time(raw), expected, raw)

    def test_missing_or_unrecognised_time(self) -> None:
        for raw in (None, "", "evening", "25:00"):
            self.assertIsNone(normalize_start_time(raw), raw)


class TestUpdate(ApiTestCase):
    """PUT /events/{id} merges provided fields, only for the creator."""

    def test_creator_partial_update(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token, location="Town Hall", time="10:00 AM")
        response = self.client.put(
            f"/events/{event['id']}", json={"title": "Winter Market"}, headers=auth_headers(token)
        )
        self.assertEqual(response.status_code, 200)
        updated = response.json()
        self.assertEqual(updated["title"], "Winter Market")
        self.assertEqual(updated["location"], "Town Hall")
        self.assertEqual(updated["time"], "10:00 AM")
        self.assertEqual(updated["date"], event["date"])

    def test_optional_field_can_be_cleared(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token, location="Town Hall")
        response = self.client.put(
            f"/events/{event['id']}", json={"location": None}, headers=auth_headers(token)
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["location"])

    def test_required_field_cannot_be_cleared(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token)
        response = self.client.put(
            f"/events/{event['id']}", json={"title": None}, headers=auth_headers(token)
        )
        self.assertEqual(response.status_code, 400)

    def test_empty_update_rejected(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token)
        response = self.client.put(f"/events/{event['id']}", json={}, headers=auth_headers(token))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "invalid_input")

    def test_creator_field_not_writable(self) -> None:
        token, identity = self.register(role="business")
        _, other = self.register(role="business")
        event = self.create_event(token)
        response = self.client.put(
            f"/events/{event['id']}",
            json={"title": "Mine still", "createdBy": other["id"]},
            headers=auth_headers(token),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["createdBy"], identity["id"])

    def test_non_creator_forbidden_and_event_unchanged(self) -> None:
        token_a, _ = self.register(role="business")
        token_b, _ = self.register(role="business")
        event = self.create_event(token_a, title="Original")
        response = self.client.put(
            f"/events/{event['id']}", json={"title": "Hijacked"}, headers=auth_headers(token_b)
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "You are not allowed to edit this event.")
        self.assertEqual(self.client.get(f"/events/{event['id']}").json()["title"], "Original")

    def test_local_identity_blocked_by_role_gate(self) -> None:
        token_a, _ = self.register(role="business")
        token_local, _ = self.register(role="local")
        event = self.create_event(token_a)
        response = self.client.put(
            f"/events/{event['id']}", json={"title": "Nope"}, headers=auth_headers(token_local)
        )
        self.assertEqual(response.status_code, 403)

    def test_update_missing_event_not_found(self) -> None:
        token, _ = self.register(role="business")
        response = self.client.put("/events/999", json={"title": "X"}, headers=auth_headers(token))
        self.assertEqual(response.status_code, 404)

    def test_non_creator_with_invalid_body_is_forbidden(self) -> None:
        token_a, _ = self.register(role="business")
        token_b, _ = self.register(role="business")
        event = self.create_event(token_a, title="Original")
        response = self.client.put(
            f"/events/{event['id']}",
            json={"title": "", "date": "bad"},
            headers=auth_headers(token_b),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"], "forbidden")

    def test_missing_event_with_invalid_body_not_found(self) -> None:
        token, _ = self.register(role="business")
        response = self.client.put("/events/999", json={"title": ""}, headers=auth_headers(token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "not_found")

    def test_local_identity_with_invalid_body_blocked_by_role_gate(self) -> None:
        token_a, _ = self.register(role="business")
        token_local, _ = self.register(role="local")
        event = self.create_event(token_a)
        response = self.client.put(
            f"/events/{event['id']}", json={"date": "bad"}, headers=auth_headers(token_local)
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["detail"], "Business account required to perform this action."
        )


class TestDelete(ApiTestCase):
    """DELETE /events/{id} removes the event for its creator only."""

    def test_creator_deletes(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token)
        response = self.client.delete(f"/events/{event['id']}", headers=auth_headers(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Event deleted.", "id": event["id"]})
        self.assertEqual(self.client.get(f"/events/{event['id']}").status_code, 404)

    def test_delete_twice_not_found(self) -> None:
        token, _ = self.register(role="business")
        event = self.create_event(token)
        self.client.delete(f"/events/{event['id']}", headers=auth_headers(token))
        again = self.client.delete(f"/events/{event['id']}", headers=auth_headers(token))
        self.assertEqual(again.status_code, 404)


if __name__ == "__main__":
    unittest.main()
