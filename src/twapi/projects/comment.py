"""
Comments on tasks, milestones, notebooks, file versions and links.

Comments are created through the legacy API under their parent item and read
through the current one. Exactly one parent identifier is expected on a
create path; when several are set the first in declaration order wins.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from ..client import Engine
from ..contract import (
    V3,
    CreateResponse,
    IDPath,
    ListFilters,
    ListResponse,
    Model,
    QueryParams,
    Request,
    Response,
    join_ids,
)
from ..errors import RequestBuildError
from ..types import LegacyNumber, Relationship


class Comment(Model):
    id: int = 0
    body: str = ""
    html_body: str = Field("", alias="htmlBody")
    # "TEXT" or "HTML"
    content_type: str = Field("", alias="contentType")
    object: Optional[Relationship] = None
    project: Optional[Relationship] = None
    posted_by: Optional[int] = Field(None, alias="postedBy")
    posted_at: Optional[datetime] = Field(None, alias="postedDateTime")
    last_edited_by: Optional[int] = Field(None, alias="lastEditedBy")
    edited_at: Optional[datetime] = Field(None, alias="dateLastEdited")
    deleted: bool = False
    deleted_by: Optional[int] = Field(None, alias="deletedBy")
    deleted_at: Optional[datetime] = Field(None, alias="dateDeleted")


# --- create ---------------------------------------------------------------- #


class CommentCreatePath(BaseModel):
    file_version_id: int = 0
    milestone_id: int = 0
    notebook_id: int = 0
    task_id: int = 0
    link_id: int = 0


class CommentCreateResponse(CreateResponse):
    operation = "create comment"

    id: LegacyNumber = 0

    def created_id(self) -> int:
        return self.id


class CommentCreateRequest(Request):
    method = "POST"
    envelope = "comment"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"body"})
    operation = "create comment"
    response_class = CommentCreateResponse

    path: CommentCreatePath = Field(default_factory=CommentCreatePath)
    body: str
    content_type: Optional[str] = Field(None, alias="contentType")

    @classmethod
    def in_file_version(cls, file_version_id: int, body: str) -> "CommentCreateRequest":
        return cls(path=CommentCreatePath(file_version_id=file_version_id), body=body)

    @classmethod
    def in_milestone(cls, milestone_id: int, body: str) -> "CommentCreateRequest":
        return cls(path=CommentCreatePath(milestone_id=milestone_id), body=body)

    @classmethod
    def in_notebook(cls, notebook_id: int, body: str) -> "CommentCreateRequest":
        return cls(path=CommentCreatePath(notebook_id=notebook_id), body=body)

    @classmethod
    def in_task(cls, task_id: int, body: str) -> "CommentCreateRequest":
        return cls(path=CommentCreatePath(task_id=task_id), body=body)

    @classmethod
    def in_link(cls, link_id: int, body: str) -> "CommentCreateRequest":
        return cls(path=CommentCreatePath(link_id=link_id), body=body)

    def url(self, server: str) -> str:
        p = self.path
        if p.file_version_id > 0:
            return f"{server}/fileversions/{p.file_version_id}/comments.json"
        if p.milestone_id > 0:
            return f"{server}/milestones/{p.milestone_id}/comments.json"
        if p.notebook_id > 0:
            return f"{server}/notebooks/{p.notebook_id}/comments.json"
        if p.task_id > 0:
            return f"{server}/tasks/{p.task_id}/comments.json"
        if p.link_id > 0:
            return f"{server}/links/{p.link_id}/comments.json"
        raise RequestBuildError("no valid path provided for creating comment")


async def comment_create(
    engine: Engine, req: CommentCreateRequest
) -> CommentCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class CommentUpdateResponse(Response):
    operation = "update comment"


class CommentUpdateRequest(Request):
    method = "PUT"
    envelope = "comment"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"body"})
    operation = "update comment"
    response_class = CommentUpdateResponse

    path: IDPath
    body: str = ""
    content_type: Optional[str] = Field(None, alias="contentType")

    @classmethod
    def new(cls, comment_id: int) -> "CommentUpdateRequest":
        return cls(path=IDPath(id=comment_id))

    def url(self, server: str) -> str:
        return f"{server}/comments/{self.path.id}.json"


async def comment_update(
    engine: Engine, req: CommentUpdateRequest
) -> CommentUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class CommentDeleteResponse(Response):
    operation = "delete comment"


class CommentDeleteRequest(Request):
    method = "DELETE"
    operation = "delete comment"
    response_class = CommentDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, comment_id: int) -> "CommentDeleteRequest":
        return cls(path=IDPath(id=comment_id))

    def url(self, server: str) -> str:
        return f"{server}/comments/{self.path.id}.json"


async def comment_delete(
    engine: Engine, req: CommentDeleteRequest
) -> CommentDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class CommentGetResponse(Response):
    operation = "retrieve comment"

    # The single-comment endpoint keeps the plural envelope key.
    comment: Comment = Field(default_factory=Comment, alias="comments")


class CommentGetRequest(Request):
    operation = "retrieve comment"
    response_class = CommentGetResponse

    path: IDPath

    @classmethod
    def new(cls, comment_id: int) -> "CommentGetRequest":
        return cls(path=IDPath(id=comment_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/comments/{self.path.id}.json"


async def comment_get(engine: Engine, req: CommentGetRequest) -> CommentGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class CommentListPath(BaseModel):
    file_version_id: int = 0
    milestone_id: int = 0
    notebook_id: int = 0
    task_id: int = 0


class CommentListFilters(ListFilters):
    search_term: str = ""
    user_ids: List[int] = Field(default_factory=list)

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.user_ids:
            params.append(("userIds", join_ids(self.user_ids)))
        return params + self.paging_params()


class CommentListResponse(ListResponse):
    operation = "list comments"

    comments: List[Comment] = Field(default_factory=list)


class CommentListRequest(Request):
    operation = "list comments"
    response_class = CommentListResponse

    path: CommentListPath = Field(default_factory=CommentListPath)
    filters: CommentListFilters = Field(default_factory=CommentListFilters)

    def url(self, server: str) -> str:
        p = self.path
        if p.file_version_id > 0:
            return f"{server}{V3}/fileversions/{p.file_version_id}/comments.json"
        if p.milestone_id > 0:
            return f"{server}{V3}/milestones/{p.milestone_id}/comments.json"
        if p.notebook_id > 0:
            return f"{server}{V3}/notebooks/{p.notebook_id}/comments.json"
        if p.task_id > 0:
            return f"{server}{V3}/tasks/{p.task_id}/comments.json"
        return f"{server}{V3}/comments.json"


async def comment_list(
    engine: Engine, req: CommentListRequest
) -> CommentListResponse:
    return await engine.execute(req)


__all__ = [
    "Comment",
    "CommentCreatePath",
    "CommentCreateRequest",
    "CommentCreateResponse",
    "CommentUpdateRequest",
    "CommentUpdateResponse",
    "CommentDeleteRequest",
    "CommentDeleteResponse",
    "CommentGetRequest",
    "CommentGetResponse",
    "CommentListPath",
    "CommentListFilters",
    "CommentListRequest",
    "CommentListResponse",
    "comment_create",
    "comment_update",
    "comment_delete",
    "comment_get",
    "comment_list",
]
