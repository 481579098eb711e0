"""Tests for reply thread reconstruction."""

import random
from uuid import uuid4

from forum.domain.model import ReplyWithAuthor
from forum.domain.service import (
    MAX_DEPTH,
    ReplyNode,
    build_reply_tree,
    count_nodes,
    resolve_depth,
)
from forum.domain.value import PostId, ReplyId
from tests.factories import make_attachment, make_reply, make_user


def _post_id() -> PostId:
    return PostId(uuid4())


def _flatten(roots: list[ReplyNode]) -> list[ReplyNode]:
    nodes = []
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack.extend(reversed(node.children))
    return nodes


def _ids(nodes: list[ReplyNode]) -> list[ReplyId]:
    return [node.reply.id for node in nodes]


class TestResolveDepth:
    """Tests for resolve_depth."""

    def test_root_has_depth_zero(self):
        reply = make_reply(_post_id())

        assert resolve_depth(reply, {reply.id: reply}) == 0

    def test_counts_hops_to_root(self):
        # Arrange
        post_id = _post_id()
        r1 = make_reply(post_id)
        r2 = make_reply(post_id, parent=r1)
        r3 = make_reply(post_id, parent=r2)
        r4 = make_reply(post_id, parent=r3)
        by_id = {r.id: r for r in (r1, r2, r3, r4)}

        # Act & Assert
        assert resolve_depth(r2, by_id) == 1
        assert resolve_depth(r3, by_id) == 2
        assert resolve_depth(r4, by_id) == 3

    def test_missing_parent_stops_walk(self):
        reply = make_reply(_post_id(), parent=ReplyId(uuid4()))

        assert resolve_depth(reply, {reply.id: reply}) == 0

    def test_cycle_terminates(self):
        # Arrange
        post_id = _post_id()
        a_id, b_id = ReplyId(uuid4()), ReplyId(uuid4())
        a = make_reply(post_id, parent=b_id, id=a_id)
        b = make_reply(post_id, parent=a_id, id=b_id)

        # Act
        depth = resolve_depth(a, {a_id: a, b_id: b})

        # Assert
        assert depth == 1

    def test_self_reference_terminates(self):
        reply_id = ReplyId(uuid4())
        reply = make_reply(_post_id(), parent=reply_id, id=reply_id)

        assert resolve_depth(reply, {reply_id: reply}) == 0

    def test_cache_is_reused_and_filled(self):
        # Arrange
        post_id = _post_id()
        r1 = make_reply(post_id)
        r2 = make_reply(post_id, parent=r1)
        r3 = make_reply(post_id, parent=r2)
        by_id = {r.id: r for r in (r1, r2, r3)}
        cache: dict[ReplyId, int] = {}

        # Act
        first = resolve_depth(r2, by_id, cache)
        second = resolve_depth(r3, by_id, cache)
        again = resolve_depth(r3, by_id, cache)

        # Assert
        assert (first, second, again) == (1, 2, 2)
        assert cache == {r1.id: 0, r2.id: 1, r3.id: 2}

    def test_long_chain_does_not_recurse(self):
        post_id = _post_id()
        replies = [make_reply(post_id)]
        for minute in range(1, 5000):
            replies.append(make_reply(post_id, parent=replies[-1], minute=minute))
        by_id = {r.id: r for r in replies}

        assert resolve_depth(replies[-1], by_id) == 4999


class TestBuildReplyTree:
    """Tests for build_reply_tree."""

    def test_empty_input(self):
        assert build_reply_tree([]) == []

    def test_deep_chain_is_reparented(self):
        """R4 answers R3 at the depth limit and is moved under R2."""
        # Arrange
        post_id = _post_id()
        r1 = make_reply(post_id, minute=1)
        r2 = make_reply(post_id, parent=r1, minute=2)
        r3 = make_reply(post_id, parent=r2, minute=3)
        r4 = make_reply(post_id, parent=r3, minute=4)

        # Act
        roots = build_reply_tree([r1, r2, r3, r4])

        # Assert
        assert _ids(roots) == [r1.id]
        level1 = roots[0].children
        assert _ids(level1) == [r2.id]
        assert _ids(level1[0].children) == [r3.id, r4.id]
        assert [n.depth for n in level1[0].children] == [2, 2]
        assert level1[0].children[0].children == []

    def test_depths_follow_nesting(self):
        post_id = _post_id()
        r1 = make_reply(post_id, minute=1)
        r2 = make_reply(post_id, parent=r1, minute=2)

        roots = build_reply_tree([r1, r2])

        assert roots[0].depth == 0
        assert roots[0].children[0].depth == 1

    def test_two_cycle_becomes_root_at_earliest(self):
        # Arrange
        post_id = _post_id()
        a_id, b_id = ReplyId(uuid4()), ReplyId(uuid4())
        a = make_reply(post_id, parent=b_id, id=a_id, minute=1)
        b = make_reply(post_id, parent=a_id, id=b_id, minute=2)

        # Act
        roots = build_reply_tree([a, b])

        # Assert
        assert _ids(roots) == [a_id]
        assert _ids(roots[0].children) == [b_id]

    def test_three_cycle_with_tail(self):
        # Arrange
        post_id = _post_id()
        a_id, b_id, c_id = ReplyId(uuid4()), ReplyId(uuid4()), ReplyId(uuid4())
        a = make_reply(post_id, parent=c_id, id=a_id, minute=1)
        b = make_reply(post_id, parent=a_id, id=b_id, minute=2)
        c = make_reply(post_id, parent=b_id, id=c_id, minute=3)
        tail = make_reply(post_id, parent=c_id, minute=4)

        # Act
        roots = build_reply_tree([a, b, c, tail])

        # Assert
        assert _ids(roots) == [a_id]
        b_node = roots[0].children[0]
        assert b_node.reply.id == b_id
        assert _ids(b_node.children) == [c_id, tail.id]
        assert sorted(map(str, _ids(_flatten(roots)))) == sorted(
            map(str, [a_id, b_id, c_id, tail.id])
        )

    def test_cycle_cut_uses_fetch_order_not_id(self):
        post_id = _post_id()
        a_id, b_id = ReplyId(uuid4()), ReplyId(uuid4())
        a = make_reply(post_id, parent=b_id, id=a_id, minute=1)
        b = make_reply(post_id, parent=a_id, id=b_id, minute=2)

        roots = build_reply_tree([b, a])

        assert _ids(roots) == [b_id]

    def test_missing_parent_becomes_root(self):
        post_id = _post_id()
        orphan = make_reply(post_id, parent=ReplyId(uuid4()))

        roots = build_reply_tree([orphan])

        assert _ids(roots) == [orphan.id]
        assert roots[0].depth == 0

    def test_inactive_parent_promotes_children(self):
        # Arrange
        post_id = _post_id()
        parent = make_reply(post_id, minute=1, is_active=False)
        child = make_reply(post_id, parent=parent, minute=2)
        grandchild = make_reply(post_id, parent=child, minute=3)

        # Act
        roots = build_reply_tree([parent, child, grandchild])

        # Assert
        assert _ids(roots) == [child.id]
        assert _ids(roots[0].children) == [grandchild.id]

    def test_cross_post_parent_is_ignored(self):
        other = make_reply(_post_id(), minute=1)
        reply = make_reply(_post_id(), parent=other, minute=2)

        roots = build_reply_tree([other, reply])

        assert _ids(roots) == [other.id, reply.id]

    def test_self_parent_becomes_root(self):
        reply_id = ReplyId(uuid4())
        reply = make_reply(_post_id(), parent=reply_id, id=reply_id)

        roots = build_reply_tree([reply])

        assert _ids(roots) == [reply_id]

    def test_roots_and_children_keep_fetch_order(self):
        # Arrange
        post_id = _post_id()
        r1 = make_reply(post_id, minute=1)
        r2 = make_reply(post_id, minute=2)
        c1 = make_reply(post_id, parent=r1, minute=3)
        c2 = make_reply(post_id, parent=r1, minute=4)
        c3 = make_reply(post_id, parent=r1, minute=5)

        # Act
        roots = build_reply_tree([r1, r2, c1, c2, c3])

        # Assert
        assert _ids(roots) == [r1.id, r2.id]
        assert _ids(roots[0].children) == [c1.id, c2.id, c3.id]

    def test_child_fetched_before_parent_still_nests(self):
        post_id = _post_id()
        parent = make_reply(post_id, minute=2)
        child = make_reply(post_id, parent=parent, minute=1)

        roots = build_reply_tree([child, parent])

        assert _ids(roots) == [parent.id]
        assert _ids(roots[0].children) == [child.id]

    def test_duplicate_ids_keep_first(self):
        post_id = _post_id()
        reply = make_reply(post_id, content="first")
        duplicate = reply.model_copy(update={"content": "second"})

        roots = build_reply_tree([reply, duplicate])

        assert len(roots) == 1
        assert roots[0].reply.content == "first"

    def test_authors_and_attachments_are_carried(self):
        # Arrange
        author = make_user("bob")
        reply = make_reply(_post_id(), author_id=author.id)
        attachment = make_attachment(author.id, entity_id=reply.id)

        # Act
        roots = build_reply_tree(
            [ReplyWithAuthor(reply=reply, author=author)],
            attachments={reply.id: [attachment]},
        )

        # Assert
        assert roots[0].author == author
        assert roots[0].attachments == [attachment]

    def test_random_forests_keep_every_reply_within_depth(self):
        """Arbitrary parent pointers, including cycles and dangling ids."""
        rng = random.Random(20260101)
        post_id = _post_id()
        foreign_post = _post_id()

        for _ in range(200):
            # Arrange
            size = rng.randint(1, 25)
            ids = [ReplyId(uuid4()) for _ in range(size)]
            replies = []
            for index, reply_id in enumerate(ids):
                choice = rng.random()
                if choice < 0.15:
                    parent = None
                elif choice < 0.25:
                    parent = ReplyId(uuid4())
                else:
                    parent = rng.choice(ids)
                replies.append(
                    make_reply(
                        foreign_post if rng.random() < 0.05 else post_id,
                        parent=parent,
                        id=reply_id,
                        minute=index,
                        is_active=rng.random() > 0.1,
                    )
                )
            rng.shuffle(replies)

            # Act
            roots = build_reply_tree(replies)

            # Assert
            nodes = _flatten(roots)
            expected = {r.id for r in replies if r.is_active}
            assert len(nodes) == len(expected)
            assert set(_ids(nodes)) == expected
            assert count_nodes(roots) == len(expected)
            for node in nodes:
                assert 0 <= node.depth <= MAX_DEPTH
                for child in node.children:
                    assert child.depth == node.depth + 1
                    assert child.reply.post_id == node.reply.post_id

    def test_is_deterministic(self):
        post_id = _post_id()
        r1 = make_reply(post_id, minute=1)
        r2 = make_reply(post_id, parent=r1, minute=2)
        r3 = make_reply(post_id, parent=r2, minute=3)
        r4 = make_reply(post_id, parent=r3, minute=4)
        replies = [r1, r2, r3, r4]

        first = _ids(_flatten(build_reply_tree(replies)))
        second = _ids(_flatten(build_reply_tree(replies)))

        assert first == second


class TestCountNodes:
    """Tests for count_nodes."""

    def test_counts_all_levels(self):
        post_id = _post_id()
        r1 = make_reply(post_id, minute=1)
        r2 = make_reply(post_id, parent=r1, minute=2)
        r3 = make_reply(post_id, parent=r2, minute=3)
        r4 = make_reply(post_id, minute=4)

        assert count_nodes(build_reply_tree([r1, r2, r3, r4])) == 4
