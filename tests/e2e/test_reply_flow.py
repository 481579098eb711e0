"""End-to-end tests for the reply thread API.

The application runs with in-memory persistence; requests go through the
ASGI stack, DI container and error handlers.
"""

from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from forum.config import Settings
from forum.domain.model import User
from forum.domain.value import Role
from forum.interface.api.app import create_app
from forum.persistence.repository.inmemory import InMemoryStore
from forum.util.jwt import create_token
from tests.di import build_test_container
from tests.factories import make_attachment, make_post, make_reply, make_user


class Env:
    """Client plus direct access to the in-memory data."""

    def __init__(self, client: httpx.AsyncClient, store: InMemoryStore) -> None:
        self.client = client
        self.store = store

    def add_user(self, username: str, role: Role = Role.USER) -> User:
        user = make_user(username, role=role)
        self.store.users[user.id] = user
        return user

    def login(self, user: User) -> None:
        token = create_token(
            str(user.id), user.username, user.role.value, Settings().auth
        )
        self.client.cookies.set("auth_token", token)

    def logout(self) -> None:
        self.client.cookies.clear()


@pytest_asyncio.fixture
async def env():
    container = build_test_container()
    app = create_app(container)
    store = await container.get(InMemoryStore)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield Env(client, store)
    await container.close()


def _add_post(env: Env, **overrides):
    post = make_post(**overrides)
    env.store.posts[post.id] = post
    return post


class TestThreadFlow:
    """Create, read, edit and delete replies over HTTP."""

    @pytest.mark.asyncio
    async def test_full_conversation(self, env):
        # Arrange
        alice = env.add_user("alice")
        post = _add_post(env)
        env.login(alice)

        # Act: a four-level chain
        parent_id = None
        created = []
        for text in ("first", "second", "third", "fourth"):
            response = await env.client.post(
                f"/posts/{post.id}/replies",
                json={"content": text, "parent_id": parent_id},
            )
            assert response.status_code == 201
            parent_id = response.json()["reply_id"]
            created.append(parent_id)

        env.logout()
        thread = await env.client.get(f"/posts/{post.id}/replies")

        # Assert
        assert thread.status_code == 200
        body = thread.json()
        assert body["post"]["reply_count"] == 4
        assert body["post"]["last_reply_by"] == str(alice.id)
        assert body["pagination"] == {"page": 1, "limit": 20, "total": 4, "pages": 1}
        root = body["replies"][0]
        assert root["reply_id"] == created[0]
        second = root["children"][0]
        assert [c["reply_id"] for c in second["children"]] == created[2:]
        assert all(c["depth"] == 2 for c in second["children"])
        assert all(c["children"] == [] for c in second["children"])

    @pytest.mark.asyncio
    async def test_edit_and_delete(self, env):
        # Arrange
        bob = env.add_user("bob")
        post = _add_post(env)
        env.login(bob)
        created = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "typo hree"}
        )
        reply_id = created.json()["reply_id"]

        # Act
        edited = await env.client.patch(
            f"/replies/{reply_id}", json={"content": "typo here"}
        )
        deleted = await env.client.delete(f"/replies/{reply_id}")
        again = await env.client.delete(f"/replies/{reply_id}")
        thread = await env.client.get(f"/posts/{post.id}/replies")

        # Assert
        assert edited.status_code == 200
        assert edited.json()["is_edited"] is True
        assert deleted.json() == {
            "reply_id": reply_id,
            "post_id": str(post.id),
            "deleted": True,
        }
        assert again.status_code == 404
        assert thread.json()["replies"] == []
        assert thread.json()["post"]["reply_count"] == 0

    @pytest.mark.asyncio
    async def test_children_of_deleted_reply_surface_as_roots(self, env):
        # Arrange
        carol = env.add_user("carol")
        post = _add_post(env)
        env.login(carol)
        parent = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "parent"}
        )
        parent_id = parent.json()["reply_id"]
        child = await env.client.post(
            f"/posts/{post.id}/replies",
            json={"content": "child", "parent_id": parent_id},
        )

        # Act
        await env.client.delete(f"/replies/{parent_id}")
        thread = await env.client.get(f"/posts/{post.id}/replies")

        # Assert
        replies = thread.json()["replies"]
        assert [r["reply_id"] for r in replies] == [child.json()["reply_id"]]
        assert replies[0]["depth"] == 0

    @pytest.mark.asyncio
    async def test_attachments_are_bound_on_create(self, env):
        # Arrange
        dave = env.add_user("dave")
        post = _add_post(env)
        own = make_attachment(dave.id)
        foreign = make_attachment(make_user("eve").id)
        env.store.attachments[own.id] = own
        env.store.attachments[foreign.id] = foreign
        env.login(dave)

        # Act
        response = await env.client.post(
            f"/posts/{post.id}/replies",
            json={
                "content": "see photos",
                "attachment_ids": [str(own.id), str(foreign.id)],
            },
        )
        thread = await env.client.get(f"/posts/{post.id}/replies")

        # Assert
        assert response.status_code == 201
        assert [a["file_id"] for a in response.json()["attachments"]] == [str(own.id)]
        assert [
            a["file_id"] for a in thread.json()["replies"][0]["attachments"]
        ] == [str(own.id)]
        assert env.store.attachments[foreign.id].entity_id is None


class TestPagination:
    """Paging parameters over HTTP."""

    @pytest.mark.asyncio
    async def test_limit_counts_roots_while_total_counts_all(self, env):
        # Arrange
        post = _add_post(env)
        for minute in range(0, 30, 10):
            root = make_reply(post.id, minute=minute)
            child = make_reply(post.id, parent=root, minute=minute + 1)
            env.store.replies[root.id] = root
            env.store.replies[child.id] = child

        # Act
        response = await env.client.get(
            f"/posts/{post.id}/replies", params={"page": 1, "limit": 2}
        )

        # Assert
        body = response.json()
        assert len(body["replies"]) == 2
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 6, "pages": 3}

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, env):
        post = _add_post(env)

        response = await env.client.get(
            f"/posts/{post.id}/replies", params={"limit": 51}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_page_zero_is_rejected(self, env):
        post = _add_post(env)

        response = await env.client.get(
            f"/posts/{post.id}/replies", params={"page": 0}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestErrors:
    """Error envelope and status codes."""

    @pytest.mark.asyncio
    async def test_write_requires_authentication(self, env):
        post = _add_post(env)

        response = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "anonymous"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_invalid_token_is_unauthorized(self, env):
        post = _add_post(env)
        env.client.cookies.set("auth_token", "not-a-jwt")

        response = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "forged"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_post(self, env):
        response = await env.client.get(f"/posts/{uuid4()}/replies")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
        assert "Post not found" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_malformed_post_id(self, env):
        response = await env.client.get("/posts/abc/replies")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_empty_content(self, env):
        frank = env.add_user("frank")
        post = _add_post(env)
        env.login(frank)

        response = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": ""}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_length_is_measured_after_stripping(self, env):
        frank = env.add_user("frank")
        post = _add_post(env)
        env.login(frank)

        padded = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "  " + "x" * 5000 + "  "}
        )
        too_long = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "x" * 5001}
        )
        thread = await env.client.get(f"/posts/{post.id}/replies")

        assert padded.status_code == 201
        assert too_long.status_code == 400
        assert too_long.json()["error"]["code"] == "VALIDATION_ERROR"
        assert [len(r["content"]) for r in thread.json()["replies"]] == [5000]

    @pytest.mark.asyncio
    async def test_locked_post_is_forbidden(self, env):
        grace = env.add_user("grace")
        post = _add_post(env, is_locked=True)
        env.login(grace)

        response = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "let me in"}
        )

        assert response.status_code == 403
        assert response.json() == {
            "error": {"message": "This post is locked", "code": "FORBIDDEN"}
        }

    @pytest.mark.asyncio
    async def test_editing_someone_elses_reply_is_forbidden(self, env):
        # Arrange
        heidi = env.add_user("heidi")
        ivan = env.add_user("ivan")
        post = _add_post(env)
        reply = make_reply(post.id, author_id=heidi.id)
        env.store.replies[reply.id] = reply
        env.login(ivan)

        # Act
        response = await env.client.patch(
            f"/replies/{reply.id}", json={"content": "mine now"}
        )

        # Assert
        assert response.status_code == 403


class TestModeration:
    """Lock and recount endpoints."""

    @pytest.mark.asyncio
    async def test_moderator_locks_post(self, env):
        # Arrange
        mod = env.add_user("mod", role=Role.MODERATOR)
        judy = env.add_user("judy")
        post = _add_post(env)
        env.login(mod)

        # Act
        locked = await env.client.post(f"/posts/{post.id}/lock", json={"is_locked": True})
        env.login(judy)
        blocked = await env.client.post(
            f"/posts/{post.id}/replies", json={"content": "too late"}
        )

        # Assert
        assert locked.status_code == 200
        assert locked.json()["is_locked"] is True
        assert blocked.status_code == 403

    @pytest.mark.asyncio
    async def test_regular_user_cannot_lock(self, env):
        judy = env.add_user("judy")
        post = _add_post(env)
        env.login(judy)

        response = await env.client.post(
            f"/posts/{post.id}/lock", json={"is_locked": True}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_recounts(self, env):
        # Arrange
        admin = env.add_user("root", role=Role.ADMIN)
        post = _add_post(env, reply_count=42)
        reply = make_reply(post.id)
        env.store.replies[reply.id] = reply
        env.login(admin)

        # Act
        response = await env.client.post(f"/posts/{post.id}/recount")

        # Assert
        assert response.status_code == 200
        assert response.json()["reply_count"] == 1


class TestHealth:
    """Health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, env):
        response = await env.client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
