"""Reply use cases."""

from .common import AttachmentResponse, AuthorResponse, ReplyResponse
from .create_reply import CreateReplyRequest, CreateReplyUseCase
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ReplyNodeResponse,
)
from .update_reply import UpdateReplyRequest, UpdateReplyUseCase

__all__ = [
    "AttachmentResponse",
    "AuthorResponse",
    "CreateReplyRequest",
    "CreateReplyUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ReplyNodeResponse",
    "ReplyResponse",
    "UpdateReplyRequest",
    "UpdateReplyUseCase",
]
