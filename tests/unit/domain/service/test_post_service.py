"""Tests for PostService reply counters."""

import pytest

from forum.domain.error import StorageError
from forum.domain.repository import PostRepository, ReplyRepository
from forum.domain.service import PostService
from tests.factories import BASE_TIME, make_post, make_reply, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRecordReplyCreated:
    """Tests for PostService.record_reply_created."""

    @pytest.mark.asyncio
    async def test_increments_and_records_last_reply(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(reply_count=3))
        replier = make_user("carol")

        # Act
        ok = await post_service.record_reply_created(post.id, BASE_TIME, replier.id)

        # Assert
        assert ok is True
        stored = await post_repo.find_by_id(post.id)
        assert stored.reply_count == 4
        assert stored.last_reply_at == BASE_TIME
        assert stored.last_reply_by == replier.id

    @pytest.mark.asyncio
    async def test_storage_failure_is_tolerated(self, unit_env, monkeypatch):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.post_repository.save(make_post())

        async def failing(*args, **kwargs):
            raise StorageError("connection reset")

        monkeypatch.setattr(
            post_service.post_repository, "increment_reply_count", failing
        )

        # Act
        ok = await post_service.record_reply_created(
            post.id, BASE_TIME, make_user().id
        )

        # Assert
        assert ok is False
        stored = await post_service.post_repository.find_by_id(post.id)
        assert stored.reply_count == 0


class TestRecordReplyDeleted:
    """Tests for PostService.record_reply_deleted."""

    @pytest.mark.asyncio
    async def test_decrements(self, unit_env):
        post_service = await unit_env.get(PostService)
        post = await post_service.post_repository.save(make_post(reply_count=2))

        await post_service.record_reply_deleted(post.id)

        stored = await post_service.post_repository.find_by_id(post.id)
        assert stored.reply_count == 1

    @pytest.mark.asyncio
    async def test_never_goes_below_zero(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.post_repository.save(make_post(reply_count=0))

        # Act
        await post_service.record_reply_deleted(post.id)
        await post_service.record_reply_deleted(post.id)

        # Assert
        stored = await post_service.post_repository.find_by_id(post.id)
        assert stored.reply_count == 0

    @pytest.mark.asyncio
    async def test_storage_failure_is_tolerated(self, unit_env, monkeypatch):
        post_service = await unit_env.get(PostService)
        post = await post_service.post_repository.save(make_post(reply_count=1))

        async def failing(*args, **kwargs):
            raise StorageError("deadlock detected")

        monkeypatch.setattr(
            post_service.post_repository, "decrement_reply_count", failing
        )

        assert await post_service.record_reply_deleted(post.id) is False


class TestRecountReplies:
    """Tests for PostService.recount_replies."""

    @pytest.mark.asyncio
    async def test_counts_only_active_replies(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await post_service.post_repository.save(make_post(reply_count=17))
        await reply_repo.save(make_reply(post.id, minute=1))
        await reply_repo.save(make_reply(post.id, minute=2))
        await reply_repo.save(make_reply(post.id, minute=3, is_active=False))
        await reply_repo.save(make_reply(make_post().id, minute=4))

        # Act
        updated = await post_service.recount_replies(post.id)

        # Assert
        assert updated.reply_count == 2

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        post_service = await unit_env.get(PostService)

        assert await post_service.recount_replies(make_post().id) is None


class TestSetLocked:
    """Tests for PostService.set_locked."""

    @pytest.mark.asyncio
    async def test_toggles_lock(self, unit_env):
        post_service = await unit_env.get(PostService)
        post = await post_service.post_repository.save(make_post())

        locked = await post_service.set_locked(post.id, True)
        unlocked = await post_service.set_locked(post.id, False)

        assert locked.is_locked is True
        assert unlocked.is_locked is False
