"""Pagination over reconstructed reply threads."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from forum.domain.error import ValidationError
from forum.domain.service.thread_builder import ReplyNode, count_nodes
from forum.domain.value.common import ValueObject


class Pagination(ValueObject):
    """Page metadata returned alongside a thread."""

    page: int
    limit: int
    total: int
    pages: int


@dataclass
class TreePage:
    """One page of root replies plus page metadata."""

    roots: list[ReplyNode]
    pagination: Pagination


def paginate_tree(roots: Sequence[ReplyNode], page: int, limit: int) -> TreePage:
    """Slice a thread into pages.

    ``total`` and ``pages`` count every node at every level, while the slice
    itself is taken over the root list. A page therefore carries up to
    ``limit`` roots with all of their children, and ``pages`` can exceed the
    number of non-empty pages. Clients depend on this shape.

    Args:
        roots: Root nodes in display order
        page: 1-based page number
        limit: Roots per page

    Returns:
        The requested slice of roots and its metadata

    Raises:
        ValidationError: If page or limit is below 1
    """
    if page < 1:
        raise ValidationError("page must be at least 1")
    if limit < 1:
        raise ValidationError("limit must be at least 1")

    total = count_nodes(roots)
    offset = (page - 1) * limit
    return TreePage(
        roots=list(roots[offset : offset + limit]),
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )
