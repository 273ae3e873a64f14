from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import comment

# object_type -> CommentCreatePath / CommentListPath field
_OBJECT_FIELDS = {
    "tasks": "task_id",
    "milestones": "milestone_id",
    "files": "file_version_id",
    "notebooks": "notebook_id",
    "links": "link_id",
}


def _object_field(object_type: str, allowed: List[str]) -> str:
    field = _OBJECT_FIELDS.get(object_type)
    if field is None or object_type not in allowed:
        raise ValueError(
            f"object_type must be one of {', '.join(allowed)}; got {object_type!r}"
        )
    return field


async def create_comment(
    engine: Engine,
    object_type: str,
    object_id: int,
    body: str,
    content_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Comment on a task, milestone, file, notebook or link.

    ``object_type`` is one of tasks, milestones, files, notebooks or links;
    ``content_type`` is "TEXT" or "HTML".
    """
    field = _object_field(object_type, list(_OBJECT_FIELDS))
    req = comment.CommentCreateRequest(
        path=comment.CommentCreatePath(**{field: object_id}),
        body=body,
        **present(content_type=content_type),
    )
    resp = await comment.comment_create(engine, req)
    return ack("Comment created successfully", id=resp.created_id())


async def update_comment(
    engine: Engine,
    comment_id: int,
    body: str,
    content_type: Optional[str] = None,
) -> Dict[str, Any]:
    req = comment.CommentUpdateRequest(
        path=IDPath(id=comment_id), body=body, **present(content_type=content_type)
    )
    await comment.comment_update(engine, req)
    return ack("Comment updated successfully", id=comment_id)


async def delete_comment(engine: Engine, comment_id: int) -> Dict[str, Any]:
    await comment.comment_delete(engine, comment.CommentDeleteRequest.new(comment_id))
    return ack("Comment deleted successfully", id=comment_id)


async def get_comment(engine: Engine, comment_id: int) -> Dict[str, Any]:
    return dump(
        await comment.comment_get(engine, comment.CommentGetRequest.new(comment_id))
    )


async def list_comments(
    engine: Engine,
    object_type: Optional[str] = None,
    object_id: Optional[int] = None,
    search_term: Optional[str] = None,
    user_ids: Optional[List[int]] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """
    List comments, optionally only those on one object.

    ``object_type`` is one of tasks, milestones, files or notebooks and must
    come with ``object_id``.
    """
    path = comment.CommentListPath()
    if object_type is not None or object_id is not None:
        if object_type is None or object_id is None:
            raise ValueError("object_type and object_id must be given together")
        field = _object_field(object_type, ["tasks", "milestones", "files", "notebooks"])
        path = comment.CommentListPath(**{field: object_id})

    req = comment.CommentListRequest(
        path=path,
        filters=comment.CommentListFilters(
            page=page,
            page_size=page_size,
            **present(search_term=search_term, user_ids=user_ids),
        ),
    )
    return dump(await comment.comment_list(engine, req))
