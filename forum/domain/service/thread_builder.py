"""Reply thread reconstruction.

Replies are stored flat with a ``parent_id`` pointer. This module turns a
post's replies into a forest whose nesting never exceeds ``MAX_DEPTH``.
Stored data is trusted as little as possible: parents may be deleted,
belong to another post, point at the reply itself or form cycles. Every
active reply still appears exactly once.

All walks are iterative so that adversarial chains cannot exhaust the
interpreter stack.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from forum.domain.model import Attachment, Reply, ReplyWithAuthor, User
from forum.domain.value import ReplyId

MAX_DEPTH = 2

_UNSEEN, _IN_PROGRESS, _DONE = 0, 1, 2


@dataclass
class ReplyNode:
    """Reply placed in a reconstructed thread.

    ``depth`` is derived on every build (0 for roots) and is never stored.
    """

    reply: Reply
    author: Optional[User]
    depth: int
    children: list["ReplyNode"] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)


def resolve_depth(
    reply: Reply,
    replies_by_id: Mapping[ReplyId, Reply],
    cache: Optional[dict[ReplyId, int]] = None,
) -> int:
    """Count how many parent hops lead from a reply to a root.

    The walk stops on a null parent, on a parent missing from
    ``replies_by_id`` and on an id it has already visited. It never raises.

    When ``cache`` is given, known depths are reused and the depth of every
    reply on an acyclic walk is recorded.

    Args:
        reply: Reply to resolve
        replies_by_id: Replies that may act as parents
        cache: Optional memo of reply id to depth

    Returns:
        Number of hops taken before the walk stopped
    """
    chain: list[ReplyId] = []
    visited: set[ReplyId] = set()
    current = reply
    offset = 0
    acyclic = True

    while True:
        if cache is not None and current.id in cache:
            # current sits one level above the last id walked
            offset = cache[current.id] + 1
            break
        chain.append(current.id)
        visited.add(current.id)
        parent_id = current.parent_id
        if parent_id is None or parent_id not in replies_by_id:
            break
        if parent_id in visited:
            acyclic = False
            break
        current = replies_by_id[parent_id]

    if not chain:
        return offset - 1

    if cache is not None and acyclic:
        last = len(chain) - 1
        for index, reply_id in enumerate(chain):
            cache[reply_id] = last - index + offset

    return len(chain) - 1 + offset


def build_reply_tree(
    entries: Iterable[Reply | ReplyWithAuthor],
    attachments: Optional[Mapping[ReplyId, list[Attachment]]] = None,
) -> list[ReplyNode]:
    """Build a bounded-depth forest from replies in fetch order.

    Rules, applied in order:

    1. Inactive replies and repeated ids (after the first) are dropped.
    2. A parent that is missing, inactive, in another post or the reply
       itself is ignored and the reply becomes a root.
    3. Each parent cycle is cut at its earliest-fetched member, which
       becomes a root.
    4. A reply whose parent already sits at ``MAX_DEPTH`` is attached to the
       nearest ancestor above that level instead.

    Roots and every children list keep fetch order.

    Args:
        entries: Replies or reply/author pairs, ordered by creation time
        attachments: Optional files per reply id to hang on each node

    Returns:
        Root nodes with nested children
    """
    order: list[ReplyId] = []
    replies: dict[ReplyId, Reply] = {}
    authors: dict[ReplyId, Optional[User]] = {}

    for entry in entries:
        if isinstance(entry, ReplyWithAuthor):
            reply, author = entry.reply, entry.author
        else:
            reply, author = entry, None
        if not reply.is_active or reply.id in replies:
            continue
        order.append(reply.id)
        replies[reply.id] = reply
        authors[reply.id] = author

    parent_of: dict[ReplyId, Optional[ReplyId]] = {}
    for reply_id in order:
        reply = replies[reply_id]
        parent = replies.get(reply.parent_id) if reply.parent_id else None
        if parent is None or parent.id == reply_id or parent.post_id != reply.post_id:
            parent_of[reply_id] = None
        else:
            parent_of[reply_id] = parent.id

    _break_cycles(order, parent_of)

    effective = {
        reply_id: replies[reply_id].model_copy(update={"parent_id": parent_of[reply_id]})
        for reply_id in order
    }
    depths: dict[ReplyId, int] = {}
    for reply_id in order:
        resolve_depth(effective[reply_id], effective, depths)

    attachments = attachments or {}
    nodes = {
        reply_id: ReplyNode(
            reply=replies[reply_id],
            author=authors[reply_id],
            depth=min(depths[reply_id], MAX_DEPTH),
            attachments=list(attachments.get(reply_id, [])),
        )
        for reply_id in order
    }

    roots: list[ReplyNode] = []
    for reply_id in order:
        target = _attachment_point(parent_of[reply_id], parent_of, depths)
        if target is None:
            roots.append(nodes[reply_id])
        else:
            nodes[target].children.append(nodes[reply_id])
    return roots


def count_nodes(roots: Sequence[ReplyNode]) -> int:
    """Count every node in a forest, all levels included."""
    total = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total


def _break_cycles(
    order: list[ReplyId], parent_of: dict[ReplyId, Optional[ReplyId]]
) -> None:
    """Cut every cycle in the parent graph in place.

    Each reply has at most one parent, so a walk from any reply either ends
    at a root, joins an already finished walk or loops back on itself.
    """
    position = {reply_id: index for index, reply_id in enumerate(order)}
    state = dict.fromkeys(order, _UNSEEN)

    for start in order:
        if state[start] != _UNSEEN:
            continue
        path: list[ReplyId] = []
        current: Optional[ReplyId] = start
        while current is not None and state[current] == _UNSEEN:
            state[current] = _IN_PROGRESS
            path.append(current)
            current = parent_of[current]
        if current is not None and state[current] == _IN_PROGRESS:
            cycle = path[path.index(current) :]
            parent_of[min(cycle, key=position.__getitem__)] = None
        for reply_id in path:
            state[reply_id] = _DONE


def _attachment_point(
    parent_id: Optional[ReplyId],
    parent_of: Mapping[ReplyId, Optional[ReplyId]],
    depths: Mapping[ReplyId, int],
) -> Optional[ReplyId]:
    """Find the node a reply hangs under, climbing past full levels."""
    visited: set[ReplyId] = set()
    current = parent_id
    while current is not None and depths[current] >= MAX_DEPTH:
        if current in visited:
            return None
        visited.add(current)
        current = parent_of[current]
    return current
