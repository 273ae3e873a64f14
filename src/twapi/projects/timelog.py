from __future__ import annotations

import datetime as dt
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
    NoContentResponse,
    QueryParams,
    Request,
    Response,
    bool_param,
    join_ids,
)
from ..errors import RequestBuildError
from ..types import Date, Relationship, Time


class Timelog(Model):
    id: int = 0
    description: str = ""
    billable: bool = False
    minutes: int = 0
    logged_at: Optional[dt.datetime] = Field(None, alias="timeLogged")
    user: Optional[Relationship] = None
    task: Optional[Relationship] = None
    project: Optional[Relationship] = None
    tags: List[Relationship] = Field(default_factory=list)
    created_at: Optional[dt.datetime] = Field(None, alias="createdAt")
    logged_by: int = Field(0, alias="loggedBy")
    updated_at: Optional[dt.datetime] = Field(None, alias="updatedAt")
    updated_by: Optional[int] = Field(None, alias="updatedBy")
    deleted_at: Optional[dt.datetime] = Field(None, alias="deletedAt")
    deleted_by: Optional[int] = Field(None, alias="deletedBy")
    deleted: bool = False


# --- create ---------------------------------------------------------------- #


class TimelogCreatePath(BaseModel):
    """Where the time is logged; a task wins over a project."""

    task_id: int = 0
    project_id: int = 0


class TimelogCreateResponse(CreateResponse):
    operation = "create timelog"

    timelog: Timelog = Field(default_factory=Timelog)

    def created_id(self) -> int:
        return self.timelog.id


def _utc_parts(when: dt.datetime, duration: dt.timedelta) -> dict:
    utc = when.astimezone(dt.timezone.utc)
    return {
        "date": utc.date(),
        "time": utc.time().replace(microsecond=0),
        "is_utc": True,
        "minutes": int(duration.total_seconds() // 60),
    }


class TimelogCreateRequest(Request):
    """
    Log time against a task or a project.

    Either ``hours`` or ``minutes`` (or both) describe the duration; the
    server adds them up. ``time`` is read as UTC only when ``is_utc`` is set,
    otherwise as the logging user's local time.
    """

    method = "POST"
    envelope = "timelog"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset(
        {
            "description",
            "date",
            "time",
            "is_utc",
            "hours",
            "minutes",
            "billable",
            "user_id",
            "tag_ids",
        }
    )
    operation = "create timelog"
    response_class = TimelogCreateResponse

    path: TimelogCreatePath = Field(default_factory=TimelogCreatePath)
    description: Optional[str] = None
    date: Date
    time: Time
    is_utc: bool = Field(False, alias="isUTC")
    hours: int = 0
    minutes: int = 0
    billable: bool = Field(False, alias="isBillable")
    user_id: Optional[int] = Field(None, alias="userId")
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")

    @classmethod
    def in_task(
        cls, task_id: int, when: dt.datetime, duration: dt.timedelta
    ) -> "TimelogCreateRequest":
        return cls(path=TimelogCreatePath(task_id=task_id), **_utc_parts(when, duration))

    @classmethod
    def in_project(
        cls, project_id: int, when: dt.datetime, duration: dt.timedelta
    ) -> "TimelogCreateRequest":
        return cls(
            path=TimelogCreatePath(project_id=project_id),
            **_utc_parts(when, duration),
        )

    def url(self, server: str) -> str:
        if self.path.task_id > 0:
            return f"{server}{V3}/tasks/{self.path.task_id}/time.json"
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/time.json"
        raise RequestBuildError("no valid path provided for creating timelog")


async def timelog_create(
    engine: Engine, req: TimelogCreateRequest
) -> TimelogCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class TimelogUpdateResponse(Response):
    operation = "update timelog"

    timelog: Timelog = Field(default_factory=Timelog)


class TimelogUpdateRequest(Request):
    method = "PATCH"
    envelope = "timelog"
    has_body = True
    operation = "update timelog"
    response_class = TimelogUpdateResponse

    path: IDPath
    description: Optional[str] = None
    date: Optional[Date] = None
    time: Optional[Time] = None
    is_utc: Optional[bool] = Field(None, alias="isUTC")
    hours: Optional[int] = None
    minutes: Optional[int] = None
    billable: Optional[bool] = Field(None, alias="isBillable")
    user_id: Optional[int] = Field(None, alias="userId")
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")

    @classmethod
    def new(cls, timelog_id: int) -> "TimelogUpdateRequest":
        return cls(path=IDPath(id=timelog_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/time/{self.path.id}.json"


async def timelog_update(
    engine: Engine, req: TimelogUpdateRequest
) -> TimelogUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class TimelogDeleteResponse(NoContentResponse):
    operation = "delete timelog"


class TimelogDeleteRequest(Request):
    method = "DELETE"
    operation = "delete timelog"
    response_class = TimelogDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, timelog_id: int) -> "TimelogDeleteRequest":
        return cls(path=IDPath(id=timelog_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/time/{self.path.id}.json"


async def timelog_delete(
    engine: Engine, req: TimelogDeleteRequest
) -> TimelogDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class TimelogGetResponse(Response):
    operation = "retrieve timelog"

    timelog: Timelog = Field(default_factory=Timelog)


class TimelogGetRequest(Request):
    operation = "retrieve timelog"
    response_class = TimelogGetResponse

    path: IDPath

    @classmethod
    def new(cls, timelog_id: int) -> "TimelogGetRequest":
        return cls(path=IDPath(id=timelog_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/time/{self.path.id}.json"


async def timelog_get(engine: Engine, req: TimelogGetRequest) -> TimelogGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class TimelogListPath(BaseModel):
    task_id: int = 0
    project_id: int = 0


class TimelogListFilters(ListFilters):
    tag_ids: List[int] = Field(default_factory=list)
    match_all_tags: Optional[bool] = None

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.tag_ids:
            params.append(("tagIds", join_ids(self.tag_ids)))
        if self.match_all_tags is not None:
            params.append(("matchAllTags", bool_param(self.match_all_tags)))
        return params + self.paging_params()


class TimelogListResponse(ListResponse):
    operation = "list timelogs"

    timelogs: List[Timelog] = Field(default_factory=list)


class TimelogListRequest(Request):
    operation = "list timelogs"
    response_class = TimelogListResponse

    path: TimelogListPath = Field(default_factory=TimelogListPath)
    filters: TimelogListFilters = Field(default_factory=TimelogListFilters)

    def url(self, server: str) -> str:
        if self.path.task_id > 0:
            return f"{server}{V3}/tasks/{self.path.task_id}/time.json"
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/time.json"
        return f"{server}{V3}/time.json"


async def timelog_list(
    engine: Engine, req: TimelogListRequest
) -> TimelogListResponse:
    return await engine.execute(req)


__all__ = [
    "Timelog",
    "TimelogCreatePath",
    "TimelogCreateRequest",
    "TimelogCreateResponse",
    "TimelogUpdateRequest",
    "TimelogUpdateResponse",
    "TimelogDeleteRequest",
    "TimelogDeleteResponse",
    "TimelogGetRequest",
    "TimelogGetResponse",
    "TimelogListPath",
    "TimelogListFilters",
    "TimelogListRequest",
    "TimelogListResponse",
    "timelog_create",
    "timelog_update",
    "timelog_delete",
    "timelog_get",
    "timelog_list",
]
