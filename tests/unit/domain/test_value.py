"""Tests for domain value objects."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from forum.domain.value import Actor, ReplyContent, Role
from tests.factories import make_user


class TestReplyContent:
    """Tests for ReplyContent."""

    def test_strips_whitespace(self):
        assert ReplyContent("  hi  ").root == "hi"

    @pytest.mark.parametrize("value", ["", "   ", "a" * 5001])
    def test_rejects_invalid(self, value):
        with pytest.raises(PydanticValidationError):
            ReplyContent(value)


class TestActor:
    """Tests for Actor."""

    @pytest.mark.parametrize(
        "role,privileged",
        [(Role.USER, False), (Role.MODERATOR, True), (Role.ADMIN, True)],
    )
    def test_privilege(self, role, privileged):
        assert Actor(user_id=make_user().id, role=role).is_privileged is privileged

    def test_can_modify_own_content_only(self):
        owner = make_user()
        actor = Actor(user_id=owner.id)

        assert actor.can_modify(owner.id) is True
        assert actor.can_modify(make_user().id) is False

    def test_moderator_can_modify_anything(self):
        actor = Actor(user_id=make_user().id, role=Role.MODERATOR)

        assert actor.can_modify(make_user().id) is True
