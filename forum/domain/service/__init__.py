"""Domain services."""

from .attachment_service import AttachmentService
from .base import Service
from .jwt_service import JWTService
from .pagination import Pagination, TreePage, paginate_tree
from .post_service import PostService
from .reply_service import ReplyService
from .thread_builder import (
    MAX_DEPTH,
    ReplyNode,
    build_reply_tree,
    count_nodes,
    resolve_depth,
)
from .thread_service import ThreadService

__all__ = [
    "MAX_DEPTH",
    "AttachmentService",
    "JWTService",
    "Pagination",
    "PostService",
    "ReplyNode",
    "ReplyService",
    "Service",
    "ThreadService",
    "TreePage",
    "build_reply_tree",
    "count_nodes",
    "paginate_tree",
    "resolve_depth",
]
