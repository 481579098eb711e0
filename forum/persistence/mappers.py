"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from forum.domain.model import Attachment, Post, Reply, User
from forum.domain.value import EntityType, FileId, PostId, ReplyId, Role, UserId


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        username=row["username"],
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        role=Role(row.get("role") or Role.USER.value),
        is_active=row.get("is_active", True),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "avatar_url": user.avatar_url,
        "role": user.role.value,
        "is_active": user.is_active,
        "created_at": user.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        content=row.get("content") or "",
        author_id=UserId(row["author_id"]),
        reply_count=row["reply_count"],
        last_reply_at=row.get("last_reply_at"),
        last_reply_by=UserId(row["last_reply_by"]) if row.get("last_reply_by") else None,
        is_locked=row["is_locked"],
        is_pinned=row.get("is_pinned", False),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "author_id": post.author_id,
        "reply_count": post.reply_count,
        "last_reply_at": post.last_reply_at,
        "last_reply_by": post.last_reply_by,
        "is_locked": post.is_locked,
        "is_pinned": post.is_pinned,
        "is_active": post.is_active,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model."""
    return Reply(
        id=ReplyId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        content=row["content"],
        parent_id=ReplyId(row["parent_id"]) if row.get("parent_id") else None,
        is_active=row["is_active"],
        is_edited=row.get("is_edited", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict."""
    return {
        "id": reply.id,
        "post_id": reply.post_id,
        "author_id": reply.author_id,
        "content": reply.content,
        "parent_id": reply.parent_id,
        "is_active": reply.is_active,
        "is_edited": reply.is_edited,
        "created_at": reply.created_at,
        "updated_at": reply.updated_at,
    }


def row_to_attachment(row: Dict[str, Any]) -> Attachment:
    """Convert ``file_uploads`` row to Attachment domain model."""
    entity_type = row.get("entity_type")
    return Attachment(
        id=FileId(row["id"]),
        uploader_id=UserId(row["user_id"]),
        filename=row["filename"],
        original_name=row["original_name"],
        file_path=row["file_path"],
        mime_type=row["mime_type"],
        file_size=row["file_size"],
        entity_type=EntityType(entity_type) if entity_type else None,
        entity_id=row.get("entity_id"),
        created_at=row["created_at"],
    )


def attachment_to_dict(attachment: Attachment) -> Dict[str, Any]:
    """Convert Attachment domain model to ``file_uploads`` dict."""
    return {
        "id": attachment.id,
        "user_id": attachment.uploader_id,
        "filename": attachment.filename,
        "original_name": attachment.original_name,
        "file_path": attachment.file_path,
        "file_size": attachment.file_size,
        "mime_type": attachment.mime_type,
        "entity_type": attachment.entity_type.value if attachment.entity_type else None,
        "entity_id": attachment.entity_id,
        "created_at": attachment.created_at,
    }
