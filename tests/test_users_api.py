"""API tests for /users: business upgrade, own profile edits and member profiles."""

import unittest

from tests.helpers import ApiTestCase, auth_headers, event_payload


class TestUpgradeToBusiness(ApiTestCase):
    """A local identity can become business once; the new token carries the new role."""

    def test_upgrade_issues_business_token(self) -> None:
        token, identity = self.register(role="local")
        response = self.client.patch("/users/upgrade-to-business", headers=auth_headers(token))
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["identity"]["id"], identity["id"])
        self.assertEqual(payload["identity"]["role"], "business")
        self.assertTrue(payload["token"])

        me = self.client.get("/auth/me", headers=auth_headers(payload["token"]))
        self.assertEqual(me.json()["identity"]["role"], "business")

        created = self.client.post("/events", json=event_payload(), headers=auth_headers(payload["token"]))
        self.assertEqual(created.status_code, 201)

    def test_old_token_keeps_old_role(self) -> None:
        token, _ = self.register(role="local")
        self.client.patch("/users/upgrade-to-business", headers=auth_headers(token))
        response = self.client.post("/events", json=event_payload(), headers=auth_headers(token))
        self.assertEqual(response.status_code, 403)

    def test_already_business_rejected(self) -> None:
        token, _ = self.register(role="business")
        response = self.client.patch("/users/upgrade-to-business", headers=auth_headers(token))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"error": "invalid_input", "detail": "Account is already a business account."},
        )

    def test_requires_auth(self) -> None:
        response = self.client.patch("/users/upgrade-to-business")
        self.assertEqual(response.status_code, 401)


class TestProfile(ApiTestCase):
    """PATCH /users/me changes only the supplied fields of the caller's own profile."""

    def test_partial_update(self) -> None:
        token, identity = self.register(display_name="Old Name")
        response = self.client.patch(
            "/users/me",
            json={"bio": "Trail runner.", "lookingFor": "Ski partners", "avatarKey": "marmot"},
            headers=auth_headers(token),
        )
        self.assertEqual(response.status_code, 200)
        updated = response.json()["identity"]
        self.assertEqual(updated["id"], identity["id"])
        self.assertEqual(updated["displayName"], "Old Name")
        self.assertEqual(updated["bio"], "Trail runner.")
        self.assertEqual(updated["lookingFor"], "Ski partners")
        self.assertEqual(updated["avatarKey"], "marmot")

    def test_null_clears_optional_field(self) -> None:
        token, _ = self.register()
        self.client.patch("/users/me", json={"avatarKey": "elk"}, headers=auth_headers(token))
        response = self.client.patch("/users/me", json={"avatarKey": None}, headers=auth_headers(token))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["identity"]["avatarKey"])

    def test_display_name_cannot_be_cleared(self) -> None:
        token, _ = self.register()
        for value in (None, ""):
            response = self.client.patch(
                "/users/me", json={"displayName": value}, headers=auth_headers(token)
            )
            self.assertEqual(response.status_code, 400, value)

    def test_new_display_name_used_on_later_posts(self) -> None:
        token, _ = self.register(display_name="Before")
        self.client.patch("/users/me", json={"displayName": "After"}, headers=auth_headers(token))
        post = self.create_post(token)
        self.assertEqual(post["authorName"], "After")


class TestMemberProfile(ApiTestCase):
    """GET /users/{id} shows another member without their email."""

    def test_public_profile_hides_email(self) -> None:
        token_a, _ = self.register()
        _, other = self.register(display_name="Canmore Climber")
        response = self.client.get(f"/users/{other['id']}", headers=auth_headers(token_a))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["displayName"], "Canmore Climber")
        self.assertNotIn("email", body)

    def test_missing_member_not_found(self) -> None:
        token, _ = self.register()
        response = self.client.get("/users/9999", headers=auth_headers(token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "not_found")


if __name__ == "__main__":
    unittest.main()
