import unittest
from unittest.mock import patch

from halfstar.db.models import User
from halfstar.services import identity_service
from halfstar.services.identity_service import (
    ExternalProfile,
    find_or_create_user,
    get_user_by_id,
)
from support import TempDatabaseMixin


class TestExternalProfile(unittest.TestCase):
    def test_from_userinfo_maps_oidc_claims(self) -> None:
        profile = ExternalProfile.from_userinfo(
            {
                "sub": "10769150350006150715113082367",
                "name": "Grace Hopper",
                "email": "grace@example.com",
                "picture": "https://example.com/grace.jpg",
            }
        )
        self.assertEqual(profile.id, "10769150350006150715113082367")
        self.assertEqual(profile.display_name, "Grace Hopper")
        self.assertEqual(profile.emails, ["grace@example.com"])
        self.assertEqual(profile.photos, ["https://example.com/grace.jpg"])

    def test_from_userinfo_tolerates_missing_optional_claims(self) -> None:
        profile = ExternalProfile.from_userinfo({"sub": 42})
        self.assertEqual(profile.id, "42")
        self.assertIsNone(profile.display_name)
        self.assertEqual(profile.emails, [])
        self.assertEqual(profile.photos, [])

    def test_from_userinfo_requires_sub(self) -> None:
        with self.assertRaises(ValueError):
            ExternalProfile.from_userinfo({"name": "Nobody"})


class TestIdentityResolver(TempDatabaseMixin, unittest.TestCase):
    def test_first_sign_in_creates_user(self) -> None:
        profile = ExternalProfile(
            id="g-1",
            display_name="Ada",
            emails=["ada@example.com", "ada@work.example.com"],
            photos=["https://example.com/ada.png"],
        )
        user = find_or_create_user(self.db, profile)

        self.assertIsNotNone(user.id)
        self.assertEqual(user.google_id, "g-1")
        self.assertEqual(user.name, "Ada")
        self.assertEqual(user.email, "ada@example.com")
        self.assertEqual(user.picture, "https://example.com/ada.png")

    def test_same_identity_returns_same_user(self) -> None:
        first = find_or_create_user(self.db, ExternalProfile(id="g-1", display_name="Ada"))
        second = find_or_create_user(self.db, ExternalProfile(id="g-1", display_name="Ada L."))

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.name, "Ada")
        self.assertEqual(self.db.query(User).count(), 1)

    def test_missing_optional_fields_stored_as_null(self) -> None:
        user = find_or_create_user(self.db, ExternalProfile(id="g-2"))
        self.assertIsNone(user.name)
        self.assertIsNone(user.email)
        self.assertIsNone(user.picture)

    def test_lost_insert_race_returns_existing_row(self) -> None:
        winner = find_or_create_user(self.db, ExternalProfile(id="g-3", display_name="Winner"))
        real_lookup = identity_service.get_user_by_google_id
        calls = []

        def stale_then_real(db, google_id):
            # First lookup happens "before" the winner committed
            calls.append(google_id)
            return None if len(calls) == 1 else real_lookup(db, google_id)

        with patch.object(identity_service, "get_user_by_google_id", side_effect=stale_then_real):
            again = find_or_create_user(self.db, ExternalProfile(id="g-3", display_name="Loser"))

        self.assertEqual(again.id, winner.id)
        self.assertEqual(again.name, "Winner")
        self.assertEqual(len(calls), 2)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_get_user_by_id(self) -> None:
        user = find_or_create_user(self.db, ExternalProfile(id="g-1"))
        self.assertEqual(get_user_by_id(self.db, user.id).google_id, "g-1")
        self.assertIsNone(get_user_by_id(self.db, user.id + 100))


if __name__ == "__main__":
    unittest.main()
