import unittest
from types import SimpleNamespace
from unittest.mock import patch

from fastapi.testclient import TestClient

from halfstar.core.config import settings
from halfstar.core.security import create_access_token
from halfstar.db.session import get_db
from halfstar.deps.auth import get_current_user
from halfstar.main import create_app
from halfstar.services.rating_service import InvalidRatingError
from support import TempDatabaseMixin


class TestRatingsApi(TempDatabaseMixin, unittest.TestCase):
    """Router behavior with the service layer patched out."""

    def setUp(self) -> None:
        super().setUp()
        self.app = create_app(self.database)
        self.client = TestClient(self.app)
        self.app.dependency_overrides[get_db] = lambda: iter([object()])

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        super().tearDown()

    def _sign_in(self, user_id: int = 7) -> None:
        self.app.dependency_overrides[get_current_user] = lambda: SimpleNamespace(id=user_id)

    def test_list_requires_auth(self) -> None:
        response = self.client.get("/api/ratings")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"]["error"]["code"], "NOT_AUTHENTICATED")

    def test_post_requires_auth(self) -> None:
        response = self.client.post("/api/ratings", json={"movieId": 603, "rating": 4})
        self.assertEqual(response.status_code, 401)

    def test_delete_requires_auth(self) -> None:
        response = self.client.delete("/api/ratings/603")
        self.assertEqual(response.status_code, 401)

    def test_feed_is_public(self) -> None:
        with patch(
            "halfstar.api.ratings.get_feed",
            return_value=[
                {
                    "movie_id": 603,
                    "rating": 4.5,
                    "movie_title": "The Matrix",
                    "movie_year": 1999,
                    "user_name": "Ada",
                    "user_picture": None,
                }
            ],
        ):
            response = self.client.get("/api/ratings/feed")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["user_name"], "Ada")

    def test_post_passes_camel_case_body_to_service(self) -> None:
        self._sign_in(7)
        with patch(
            "halfstar.api.ratings.set_rating",
            return_value={"movie_id": 603, "rating": 4.5, "movie_title": "The Matrix", "movie_year": 1999},
        ) as mock_set:
            response = self.client.post(
                "/api/ratings",
                json={"movieId": 603, "rating": 4.5, "movieTitle": "The Matrix", "movieYear": 1999},
            )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "movieId": 603, "rating": 4.5})
        args = mock_set.call_args.args
        self.assertEqual(args[1:], (7, 603, 4.5, "The Matrix", 1999))

    def test_post_maps_invalid_rating_to_400(self) -> None:
        self._sign_in()
        with patch(
            "halfstar.api.ratings.set_rating",
            side_effect=InvalidRatingError("Invalid rating (0.5-5 in 0.5 increments)"),
        ):
            response = self.client.post("/api/ratings", json={"movieId": 603, "rating": 5.5})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"]["error"]["code"], "INVALID_RATING")

    def test_post_missing_rating_is_422(self) -> None:
        self._sign_in()
        response = self.client.post("/api/ratings", json={"movieId": 603})
        self.assertEqual(response.status_code, 422)

    def test_delete_success(self) -> None:
        self._sign_in()
        with patch("halfstar.api.ratings.delete_rating", return_value=True):
            response = self.client.delete("/api/ratings/603")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True})

    def test_delete_404_when_missing(self) -> None:
        self._sign_in()
        with patch("halfstar.api.ratings.delete_rating", return_value=False):
            response = self.client.delete("/api/ratings/603")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"]["error"]["code"], "RATING_NOT_FOUND")


class TestRatingsApiEndToEnd(TempDatabaseMixin, unittest.TestCase):
    """Full stack against a real SQLite store, authenticated by session token."""

    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(create_app(self.database))
        self.ada = self.make_user("a", "Ada", "https://example.com/ada.png")
        self.bob = self.make_user("b", "Bob")

    def _auth(self, user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}

    def test_rate_list_feed_delete(self) -> None:
        response = self.client.post(
            "/api/ratings",
            json={"movieId": 603, "rating": 4.5, "movieTitle": "The Matrix", "movieYear": 1999},
            headers=self._auth(self.ada),
        )
        self.assertEqual(response.status_code, 200)

        mine = self.client.get("/api/ratings", headers=self._auth(self.ada)).json()
        self.assertEqual(
            mine,
            [{"movie_id": 603, "rating": 4.5, "movie_title": "The Matrix", "movie_year": 1999}],
        )

        self.client.post("/api/ratings", json={"movieId": 550, "rating": 3}, headers=self._auth(self.bob))

        feed = self.client.get("/api/ratings/feed").json()
        self.assertEqual([(f["movie_id"], f["user_name"]) for f in feed], [(550, "Bob"), (603, "Ada")])
        self.assertEqual(feed[1]["user_picture"], "https://example.com/ada.png")

        self.assertEqual(self.client.delete("/api/ratings/603", headers=self._auth(self.ada)).status_code, 200)
        self.assertEqual(self.client.delete("/api/ratings/603", headers=self._auth(self.ada)).status_code, 404)
        self.assertEqual(self.client.get("/api/ratings", headers=self._auth(self.ada)).json(), [])

    def test_boundary_scores(self) -> None:
        for score, expected in ((0.3, 400), (5.5, 400), (2.25, 400), (0.5, 200), (5.0, 200)):
            response = self.client.post(
                "/api/ratings",
                json={"movieId": 603, "rating": score},
                headers=self._auth(self.ada),
            )
            self.assertEqual(response.status_code, expected, score)

    def test_boolean_score_is_rejected(self) -> None:
        response = self.client.post(
            "/api/ratings",
            json={"movieId": 603, "rating": True},
            headers=self._auth(self.ada),
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.client.get("/api/ratings", headers=self._auth(self.ada)).json(), [])

    def test_integers_beyond_sqlite_range_are_422(self) -> None:
        too_big = 2**70
        for body in (
            {"movieId": too_big, "rating": 4},
            {"movieId": 603, "rating": 4, "movieYear": too_big},
            {"movieId": 603, "rating": 4, "movieYear": -too_big},
        ):
            response = self.client.post("/api/ratings", json=body, headers=self._auth(self.ada))
            self.assertEqual(response.status_code, 422, body)

        response = self.client.delete(f"/api/ratings/{too_big}", headers=self._auth(self.ada))
        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.client.get("/api/ratings", headers=self._auth(self.ada)).json(), [])

    def test_largest_sqlite_movie_id_round_trips(self) -> None:
        movie_id = 2**63 - 1
        response = self.client.post(
            "/api/ratings",
            json={"movieId": movie_id, "rating": 3},
            headers=self._auth(self.ada),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.client.delete(f"/api/ratings/{movie_id}", headers=self._auth(self.ada)).status_code,
            200,
        )

    def test_session_cookie_authenticates(self) -> None:
        self.client.cookies.set(settings.SESSION_COOKIE_NAME, create_access_token(subject=self.bob.id))
        response = self.client.get("/api/ratings")
        self.assertEqual(response.status_code, 200)

    def test_garbage_token_is_401(self) -> None:
        response = self.client.get("/api/ratings", headers={"Authorization": "Bearer not-a-jwt"})
        self.assertEqual(response.status_code, 401)

    def test_token_for_unknown_user_is_401(self) -> None:
        token = create_access_token(subject=9999)
        response = self.client.get("/api/ratings", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
