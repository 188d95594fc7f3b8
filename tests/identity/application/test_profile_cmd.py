"""Application tests for profile updates."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.errors import Unauthenticated
from storefront.identity.events import ProfileUpdated
from storefront.identity.profile import UpdateProfile
from storefront.identity.user import User

UNKNOWN_ID = "5f1d7c9e-1111-4aaa-8bbb-00000000ffff"


def _update(user_id, **fields):
    current_domain.process(UpdateProfile(user_id=user_id, **fields), asynchronous=False)
    return current_domain.repository_for(User).get(user_id)


class TestUpdateProfile:
    def test_changes_email_and_gender(self, register):
        user_id = register("nina", email="nina@old.example")
        user = _update(user_id, email="nina@new.example", gender="female")

        assert user.email == "nina@new.example"
        assert user.gender == "female"

    def test_omitted_fields_keep_current_values(self, register):
        user_id = register("omar", email="omar@example.com")
        _update(user_id, gender="male")
        user = _update(user_id, gender="other")

        assert user.email == "omar@example.com"
        assert user.gender == "other"

    def test_email_of_another_user_rejected(self, register):
        register("first", email="taken@example.com")
        user_id = register("second", email="second@example.com")

        with pytest.raises(ValidationError) as exc:
            _update(user_id, email="taken@example.com")

        assert "email" in exc.value.messages
        assert current_domain.repository_for(User).get(user_id).email == "second@example.com"

    def test_own_email_accepted(self, register):
        user_id = register("same", email="same@example.com")
        assert _update(user_id, email="same@example.com").email == "same@example.com"

    def test_unknown_gender_rejected(self, register):
        user_id = register("gwen")
        with pytest.raises(ValidationError):
            UpdateProfile(user_id=user_id, gender="unknown")

    def test_unknown_user_is_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            _update(UNKNOWN_ID, email="ghost@example.com")


class TestProfileUpdatedEvent:
    def test_update_raises_event(self, register):
        user = current_domain.repository_for(User).get(register("eve", email="eve@example.com"))
        user._events.clear()

        user.update_profile(gender="female")

        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, ProfileUpdated)
        assert event.email == "eve@example.com"
        assert event.gender == "female"
