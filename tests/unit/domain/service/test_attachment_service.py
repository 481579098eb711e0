"""Tests for AttachmentService."""

import pytest

from forum.domain.error import StorageError
from forum.domain.repository import AttachmentRepository
from forum.domain.service import AttachmentService
from forum.domain.value import EntityType
from tests.factories import make_attachment, make_post, make_reply, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestBindToReply:
    """Tests for AttachmentService.bind_to_reply."""

    @pytest.mark.asyncio
    async def test_binds_own_unassociated_files(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        repo = await unit_env.get(AttachmentRepository)
        author = make_user()
        reply = make_reply(make_post().id, author_id=author.id)
        first = await repo.save(make_attachment(author.id))
        second = await repo.save(make_attachment(author.id))

        # Act
        bound = await service.bind_to_reply([first.id, second.id], reply)

        # Assert
        assert [a.id for a in bound] == [first.id, second.id]
        stored = await repo.find_by_id(first.id)
        assert stored.entity_type == EntityType.FORUM_REPLY
        assert stored.entity_id == reply.id

    @pytest.mark.asyncio
    async def test_skips_files_of_other_uploaders(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        repo = await unit_env.get(AttachmentRepository)
        author = make_user("erin")
        stranger = make_user("mallory")
        reply = make_reply(make_post().id, author_id=author.id)
        foreign = await repo.save(make_attachment(stranger.id))

        # Act
        bound = await service.bind_to_reply([foreign.id], reply)

        # Assert
        assert bound == []
        assert (await repo.find_by_id(foreign.id)).entity_id is None

    @pytest.mark.asyncio
    async def test_skips_already_bound_files(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        repo = await unit_env.get(AttachmentRepository)
        author = make_user()
        post = make_post()
        earlier = make_reply(post.id, author_id=author.id, minute=1)
        later = make_reply(post.id, author_id=author.id, minute=2)
        file = await repo.save(make_attachment(author.id))
        await service.bind_to_reply([file.id], earlier)

        # Act
        bound = await service.bind_to_reply([file.id], later)

        # Assert
        assert bound == []
        assert (await repo.find_by_id(file.id)).entity_id == earlier.id

    @pytest.mark.asyncio
    async def test_unknown_and_duplicate_ids(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        repo = await unit_env.get(AttachmentRepository)
        author = make_user()
        reply = make_reply(make_post().id, author_id=author.id)
        file = await repo.save(make_attachment(author.id))
        unknown = make_attachment(author.id)

        # Act
        bound = await service.bind_to_reply([file.id, unknown.id, file.id], reply)

        # Assert
        assert [a.id for a in bound] == [file.id]

    @pytest.mark.asyncio
    async def test_storage_failure_stops_binding_without_raising(
        self, unit_env, monkeypatch
    ):
        # Arrange
        service = await unit_env.get(AttachmentService)
        author = make_user()
        reply = make_reply(make_post().id, author_id=author.id)
        file = await service.attachment_repository.save(make_attachment(author.id))

        async def failing(*args, **kwargs):
            raise StorageError("relation file_uploads does not exist")

        monkeypatch.setattr(service.attachment_repository, "bind", failing)

        # Act
        bound = await service.bind_to_reply([file.id], reply)

        # Assert
        assert bound == []


class TestAttachmentsForReplies:
    """Tests for AttachmentService.attachments_for_replies."""

    @pytest.mark.asyncio
    async def test_groups_by_reply(self, unit_env):
        # Arrange
        service = await unit_env.get(AttachmentService)
        repo = await unit_env.get(AttachmentRepository)
        author = make_user()
        post = make_post()
        with_files = make_reply(post.id, author_id=author.id, minute=1)
        without_files = make_reply(post.id, author_id=author.id, minute=2)
        a = await repo.save(make_attachment(author.id))
        b = await repo.save(make_attachment(author.id))
        await service.bind_to_reply([a.id, b.id], with_files)

        # Act
        grouped = await service.attachments_for_replies(
            [with_files.id, without_files.id]
        )

        # Assert
        assert {f.id for f in grouped[with_files.id]} == {a.id, b.id}
        assert without_files.id not in grouped

    @pytest.mark.asyncio
    async def test_empty_input(self, unit_env):
        service = await unit_env.get(AttachmentService)

        assert await service.attachments_for_replies([]) == {}
