from __future__ import annotations

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from ..client import Engine
from ..contract import (
    V3,
    IDPath,
    CreateResponse,
    ListFilters,
    ListResponse,
    Model,
    QueryParams,
    Request,
    Response,
    bool_param,
    join_ids,
)
from ..types import Date, Relationship, UserGroups


class Task(Model):
    id: int = 0
    name: str = ""
    description: Optional[str] = None
    description_content_type: Optional[str] = Field(
        None, alias="descriptionContentType"
    )
    priority: Optional[str] = None
    progress: int = 0
    start_at: Optional[datetime] = Field(None, alias="startDate")
    due_at: Optional[datetime] = Field(None, alias="dueDate")
    estimated_minutes: int = Field(0, alias="estimateMinutes")
    tasklist: Optional[Relationship] = None
    assignees: List[Relationship] = Field(default_factory=list)
    tags: List[Relationship] = Field(default_factory=list)
    created_by: Optional[int] = Field(None, alias="createdBy")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_by: Optional[int] = Field(None, alias="updatedBy")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    deleted_by: Optional[int] = Field(None, alias="deletedBy")
    deleted_at: Optional[datetime] = Field(None, alias="deletedAt")
    completed_by: Optional[int] = Field(None, alias="completedBy")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    status: str = ""


class _TaskFields(Request):
    description: Optional[str] = None
    # "low", "medium" or "high"
    priority: Optional[str] = None
    progress: Optional[int] = None
    start_at: Optional[Date] = Field(None, alias="startAt")
    due_at: Optional[Date] = Field(None, alias="dueAt")
    estimated_minutes: Optional[int] = Field(None, alias="estimatedMinutes")
    assignees: Optional[UserGroups] = None
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")


# --- create ---------------------------------------------------------------- #


class TaskCreatePath(BaseModel):
    tasklist_id: int


class TaskCreateResponse(CreateResponse):
    operation = "create task"

    task: Task = Field(default_factory=Task)

    def created_id(self) -> int:
        return self.task.id


class TaskCreateRequest(_TaskFields):
    method = "POST"
    envelope = "task"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create task"
    response_class = TaskCreateResponse

    path: TaskCreatePath
    name: str

    @classmethod
    def new(cls, tasklist_id: int, name: str) -> "TaskCreateRequest":
        return cls(path=TaskCreatePath(tasklist_id=tasklist_id), name=name)

    def url(self, server: str) -> str:
        return f"{server}{V3}/tasklists/{self.path.tasklist_id}/tasks.json"


async def task_create(engine: Engine, req: TaskCreateRequest) -> TaskCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class TaskUpdateResponse(Response):
    operation = "update task"

    task: Task = Field(default_factory=Task)


class TaskUpdateRequest(_TaskFields):
    method = "PUT"
    envelope = "task"
    has_body = True
    operation = "update task"
    response_class = TaskUpdateResponse

    path: IDPath
    name: Optional[str] = None
    # Moves the task to another tasklist.
    tasklist_id: Optional[int] = Field(None, alias="tasklistId")

    @classmethod
    def new(cls, task_id: int) -> "TaskUpdateRequest":
        return cls(path=IDPath(id=task_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tasks/{self.path.id}.json"


async def task_update(engine: Engine, req: TaskUpdateRequest) -> TaskUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class TaskDeleteResponse(Response):
    operation = "delete task"


class TaskDeleteRequest(Request):
    method = "DELETE"
    operation = "delete task"
    response_class = TaskDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, task_id: int) -> "TaskDeleteRequest":
        return cls(path=IDPath(id=task_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tasks/{self.path.id}.json"


async def task_delete(engine: Engine, req: TaskDeleteRequest) -> TaskDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class TaskGetResponse(Response):
    operation = "retrieve task"

    task: Task = Field(default_factory=Task)


class TaskGetRequest(Request):
    operation = "retrieve task"
    response_class = TaskGetResponse

    path: IDPath

    @classmethod
    def new(cls, task_id: int) -> "TaskGetRequest":
        return cls(path=IDPath(id=task_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/tasks/{self.path.id}.json"


async def task_get(engine: Engine, req: TaskGetRequest) -> TaskGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class TaskListPath(BaseModel):
    """Scope of a task listing; the tasklist wins over the project."""

    tasklist_id: int = 0
    project_id: int = 0


class TaskListFilters(ListFilters):
    search_term: str = ""
    tag_ids: List[int] = Field(default_factory=list)
    match_all_tags: Optional[bool] = None

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.tag_ids:
            params.append(("tagIds", join_ids(self.tag_ids)))
        if self.match_all_tags is not None:
            params.append(("matchAllTags", bool_param(self.match_all_tags)))
        return params + self.paging_params()


class TaskListResponse(ListResponse):
    operation = "list tasks"

    tasks: List[Task] = Field(default_factory=list)


class TaskListRequest(Request):
    operation = "list tasks"
    response_class = TaskListResponse

    path: TaskListPath = Field(default_factory=TaskListPath)
    filters: TaskListFilters = Field(default_factory=TaskListFilters)

    def url(self, server: str) -> str:
        if self.path.tasklist_id > 0:
            return f"{server}{V3}/tasklists/{self.path.tasklist_id}/tasks.json"
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/tasks.json"
        return f"{server}{V3}/tasks.json"


async def task_list(engine: Engine, req: TaskListRequest) -> TaskListResponse:
    return await engine.execute(req)


__all__ = [
    "Task",
    "TaskCreatePath",
    "TaskCreateRequest",
    "TaskCreateResponse",
    "TaskUpdateRequest",
    "TaskUpdateResponse",
    "TaskDeleteRequest",
    "TaskDeleteResponse",
    "TaskGetRequest",
    "TaskGetResponse",
    "TaskListPath",
    "TaskListFilters",
    "TaskListRequest",
    "TaskListResponse",
    "task_create",
    "task_update",
    "task_delete",
    "task_get",
    "task_list",
]
