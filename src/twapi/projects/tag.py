from __future__ import annotations

from typing import ClassVar, FrozenSet, List, Optional

from pydantic import Field

from ..client import Engine
from ..contract import (
    V3,
    CreateResponse,
    IDPath,
    ListFilters,
    ListResponse,
    Model,
    NoContentResponse,
    QueryParams,
    Request,
    Response,
    join_ids,
)
from ..types import Relationship


class Tag(Model):
    """Label attached to projects, tasks, milestones and other items."""

    id: int = 0
    name: str = ""
    # Set when the tag is scoped to a single project.
    project: Optional[Relationship] = None


# --- create ---------------------------------------------------------------- #


class TagCreateResponse(CreateResponse):
    operation = "create tag"

    tag: Tag = Field(default_factory=Tag)

    def created_id(self) -> int:
        return self.tag.id


class TagCreateRequest(Request):
    method = "POST"
    envelope = "tag"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create tag"
    response_class = TagCreateResponse

    name: str
    project_id: Optional[int] = Field(None, alias="projectId")

    @classmethod
    def new(cls, name: str) -> "TagCreateRequest":
        return cls(name=name)

    def url(self, server: str) -> str:
        return f"{server}{V3}/tags.json"


async def tag_create(engine: Engine, req: TagCreateRequest) -> TagCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class TagUpdateResponse(Response):
    operation = "update tag"

    tag: Tag = Field(default_factory=Tag)


class TagUpdateRequest(Request):
    method = "PATCH"
    envelope = "tag"
    has_body = True
    operation = "update tag"
    response_class = TagUpdateResponse

    path: IDPath
    name: Optional[str] = None
    project_id: Optional[int] = Field(None, alias="projectId")

    @classmethod
    def new(cls, tag_id: int) -> "TagUpdateRequest":
        return cls(path=IDPath(id=tag_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tags/{self.path.id}.json"


async def tag_update(engine: Engine, req: TagUpdateRequest) -> TagUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class TagDeleteResponse(NoContentResponse):
    operation = "delete tag"


class TagDeleteRequest(Request):
    method = "DELETE"
    operation = "delete tag"
    response_class = TagDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, tag_id: int) -> "TagDeleteRequest":
        return cls(path=IDPath(id=tag_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tags/{self.path.id}.json"


async def tag_delete(engine: Engine, req: TagDeleteRequest) -> TagDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class TagGetResponse(Response):
    operation = "retrieve tag"

    tag: Tag = Field(default_factory=Tag)


class TagGetRequest(Request):
    operation = "retrieve tag"
    response_class = TagGetResponse

    path: IDPath

    @classmethod
    def new(cls, tag_id: int) -> "TagGetRequest":
        return cls(path=IDPath(id=tag_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tags/{self.path.id}.json"


async def tag_get(engine: Engine, req: TagGetRequest) -> TagGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class TagListFilters(ListFilters):
    search_term: str = ""
    # "project", "task", "tasklist", "milestone", "message", "timelog",
    # "notebook", "file", "company" or "link"
    item_type: str = ""
    project_ids: List[int] = Field(default_factory=list)

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.item_type:
            params.append(("itemType", self.item_type))
        if self.project_ids:
            params.append(("projectIds", join_ids(self.project_ids)))
        return params + self.paging_params()


class TagListResponse(ListResponse):
    operation = "list tags"

    tags: List[Tag] = Field(default_factory=list)


class TagListRequest(Request):
    operation = "list tags"
    response_class = TagListResponse

    filters: TagListFilters = Field(default_factory=TagListFilters)

    def url(self, server: str) -> str:
        return f"{server}{V3}/tags.json"


async def tag_list(engine: Engine, req: TagListRequest) -> TagListResponse:
    return await engine.execute(req)


__all__ = [
    "Tag",
    "TagCreateRequest",
    "TagCreateResponse",
    "TagUpdateRequest",
    "TagUpdateResponse",
    "TagDeleteRequest",
    "TagDeleteResponse",
    "TagGetRequest",
    "TagGetResponse",
    "TagListFilters",
    "TagListRequest",
    "TagListResponse",
    "tag_create",
    "tag_update",
    "tag_delete",
    "tag_get",
    "tag_list",
]
