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
)
from ..types import LegacyNumber, Relationship


class Tasklist(Model):
    id: int = 0
    name: str = ""
    description: str = ""
    project: Optional[Relationship] = None
    milestone: Optional[Relationship] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    status: str = ""


class _TasklistFields(Request):
    description: Optional[str] = None
    milestone_id: Optional[int] = Field(None, alias="milestone-Id")


# --- create ---------------------------------------------------------------- #


class TasklistCreatePath(BaseModel):
    project_id: int


class TasklistCreateResponse(CreateResponse):
    operation = "create tasklist"

    id: LegacyNumber = Field(0, alias="tasklistId")

    def created_id(self) -> int:
        return self.id


class TasklistCreateRequest(_TasklistFields):
    method = "POST"
    envelope = "todo-list"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create tasklist"
    response_class = TasklistCreateResponse

    path: TasklistCreatePath
    name: str

    @classmethod
    def new(cls, project_id: int, name: str) -> "TasklistCreateRequest":
        return cls(path=TasklistCreatePath(project_id=project_id), name=name)

    def url(self, server: str) -> str:
        return f"{server}/projects/{self.path.project_id}/tasklists.json"


async def tasklist_create(
    engine: Engine, req: TasklistCreateRequest
) -> TasklistCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class TasklistUpdateResponse(Response):
    operation = "update tasklist"


class TasklistUpdateRequest(_TasklistFields):
    method = "PUT"
    envelope = "todo-list"
    has_body = True
    operation = "update tasklist"
    response_class = TasklistUpdateResponse

    path: IDPath
    name: Optional[str] = None

    @classmethod
    def new(cls, tasklist_id: int) -> "TasklistUpdateRequest":
        return cls(path=IDPath(id=tasklist_id))

    def url(self, server: str) -> str:
        return f"{server}/tasklists/{self.path.id}.json"


async def tasklist_update(
    engine: Engine, req: TasklistUpdateRequest
) -> TasklistUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class TasklistDeleteResponse(Response):
    operation = "delete tasklist"


class TasklistDeleteRequest(Request):
    method = "DELETE"
    operation = "delete tasklist"
    response_class = TasklistDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, tasklist_id: int) -> "TasklistDeleteRequest":
        return cls(path=IDPath(id=tasklist_id))

    def url(self, server: str) -> str:
        return f"{server}/tasklists/{self.path.id}.json"


async def tasklist_delete(
    engine: Engine, req: TasklistDeleteRequest
) -> TasklistDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class TasklistGetResponse(Response):
    operation = "retrieve tasklist"

    tasklist: Tasklist = Field(default_factory=Tasklist)


class TasklistGetRequest(Request):
    operation = "retrieve tasklist"
    response_class = TasklistGetResponse

    path: IDPath

    @classmethod
    def new(cls, tasklist_id: int) -> "TasklistGetRequest":
        return cls(path=IDPath(id=tasklist_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tasklists/{self.path.id}.json"


async def tasklist_get(
    engine: Engine, req: TasklistGetRequest
) -> TasklistGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class TasklistListPath(BaseModel):
    project_id: int = 0


class TasklistListFilters(ListFilters):
    search_term: str = ""

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        return params + self.paging_params()


class TasklistListResponse(ListResponse):
    operation = "list tasklists"

    tasklists: List[Tasklist] = Field(default_factory=list)


class TasklistListRequest(Request):
    operation = "list tasklists"
    response_class = TasklistListResponse

    path: TasklistListPath = Field(default_factory=TasklistListPath)
    filters: TasklistListFilters = Field(default_factory=TasklistListFilters)

    def url(self, server: str) -> str:
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/tasklists.json"
        return f"{server}{V3}/tasklists.json"


async def tasklist_list(
    engine: Engine, req: TasklistListRequest
) -> TasklistListResponse:
    return await engine.execute(req)


__all__ = [
    "Tasklist",
    "TasklistCreatePath",
    "TasklistCreateRequest",
    "TasklistCreateResponse",
    "TasklistUpdateRequest",
    "TasklistUpdateResponse",
    "TasklistDeleteRequest",
    "TasklistDeleteResponse",
    "TasklistGetRequest",
    "TasklistGetResponse",
    "TasklistListPath",
    "TasklistListFilters",
    "TasklistListRequest",
    "TasklistListResponse",
    "tasklist_create",
    "tasklist_update",
    "tasklist_delete",
    "tasklist_get",
    "tasklist_list",
]
