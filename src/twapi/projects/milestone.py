from __future__ import annotations

from datetime import date, datetime
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
    bool_param,
    join_ids,
)
from ..types import LegacyDate, LegacyNumber, LegacyUserGroups, Relationship


class Milestone(Model):
    id: int = 0
    name: str = ""
    description: str = ""
    due_at: Optional[datetime] = Field(None, alias="deadline")
    project: Optional[Relationship] = None
    tasklists: List[Relationship] = Field(default_factory=list)
    tags: List[Relationship] = Field(default_factory=list)
    responsible_parties: List[Relationship] = Field(
        default_factory=list, alias="responsibleParties"
    )
    created_at: Optional[datetime] = Field(None, alias="createdOn")
    updated_at: Optional[datetime] = Field(None, alias="lastChangedOn")
    deleted_at: Optional[datetime] = Field(None, alias="deletedOn")
    completed_at: Optional[datetime] = Field(None, alias="completedOn")
    completed_by: Optional[int] = Field(None, alias="completedBy")
    completed: bool = False
    status: str = ""


class _MilestoneFields(Request):
    description: Optional[str] = None
    tasklist_ids: Optional[List[int]] = Field(None, alias="tasklistIds")
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")


# --- create ---------------------------------------------------------------- #


class MilestoneCreatePath(BaseModel):
    project_id: int


class MilestoneCreateResponse(CreateResponse):
    operation = "create milestone"

    id: LegacyNumber = Field(0, alias="milestoneId")

    def created_id(self) -> int:
        return self.id


class MilestoneCreateRequest(_MilestoneFields):
    method = "POST"
    envelope = "milestone"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "due_at", "assignees"}
    )
    operation = "create milestone"
    response_class = MilestoneCreateResponse

    path: MilestoneCreatePath
    name: str = Field(alias="title")
    due_at: LegacyDate = Field(alias="deadline")
    assignees: LegacyUserGroups = Field(
        default_factory=LegacyUserGroups, alias="responsible-party-ids"
    )

    @classmethod
    def new(
        cls,
        project_id: int,
        name: str,
        due_at: date,
        assignees: LegacyUserGroups,
    ) -> "MilestoneCreateRequest":
        return cls(
            path=MilestoneCreatePath(project_id=project_id),
            name=name,
            due_at=due_at,
            assignees=assignees,
        )

    def url(self, server: str) -> str:
        return f"{server}/projects/{self.path.project_id}/milestones.json"


async def milestone_create(
    engine: Engine, req: MilestoneCreateRequest
) -> MilestoneCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class MilestoneUpdateResponse(Response):
    operation = "update milestone"


class MilestoneUpdateRequest(_MilestoneFields):
    method = "PUT"
    envelope = "milestone"
    has_body = True
    operation = "update milestone"
    response_class = MilestoneUpdateResponse

    path: IDPath
    name: Optional[str] = Field(None, alias="title")
    due_at: Optional[LegacyDate] = Field(None, alias="deadline")
    assignees: Optional[LegacyUserGroups] = Field(
        None, alias="responsible-party-ids"
    )

    @classmethod
    def new(cls, milestone_id: int) -> "MilestoneUpdateRequest":
        return cls(path=IDPath(id=milestone_id))

    def url(self, server: str) -> str:
        return f"{server}/milestones/{self.path.id}.json"


async def milestone_update(
    engine: Engine, req: MilestoneUpdateRequest
) -> MilestoneUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class MilestoneDeleteResponse(Response):
    operation = "delete milestone"


class MilestoneDeleteRequest(Request):
    method = "DELETE"
    operation = "delete milestone"
    response_class = MilestoneDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, milestone_id: int) -> "MilestoneDeleteRequest":
        return cls(path=IDPath(id=milestone_id))

    def url(self, server: str) -> str:
        return f"{server}/milestones/{self.path.id}.json"


async def milestone_delete(
    engine: Engine, req: MilestoneDeleteRequest
) -> MilestoneDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class MilestoneGetResponse(Response):
    operation = "retrieve milestone"

    milestone: Milestone = Field(default_factory=Milestone)


class MilestoneGetRequest(Request):
    operation = "retrieve milestone"
    response_class = MilestoneGetResponse

    path: IDPath

    @classmethod
    def new(cls, milestone_id: int) -> "MilestoneGetRequest":
        return cls(path=IDPath(id=milestone_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/milestones/{self.path.id}.json"


async def milestone_get(
    engine: Engine, req: MilestoneGetRequest
) -> MilestoneGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class MilestoneListPath(BaseModel):
    project_id: int = 0


class MilestoneListFilters(ListFilters):
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


class MilestoneListResponse(ListResponse):
    operation = "list milestones"

    milestones: List[Milestone] = Field(default_factory=list)


class MilestoneListRequest(Request):
    operation = "list milestones"
    response_class = MilestoneListResponse

    path: MilestoneListPath = Field(default_factory=MilestoneListPath)
    filters: MilestoneListFilters = Field(default_factory=MilestoneListFilters)

    def url(self, server: str) -> str:
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/milestones.json"
        return f"{server}{V3}/milestones.json"


async def milestone_list(
    engine: Engine, req: MilestoneListRequest
) -> MilestoneListResponse:
    return await engine.execute(req)


__all__ = [
    "Milestone",
    "MilestoneCreatePath",
    "MilestoneCreateRequest",
    "MilestoneCreateResponse",
    "MilestoneUpdateRequest",
    "MilestoneUpdateResponse",
    "MilestoneDeleteRequest",
    "MilestoneDeleteResponse",
    "MilestoneGetRequest",
    "MilestoneGetResponse",
    "MilestoneListPath",
    "MilestoneListFilters",
    "MilestoneListRequest",
    "MilestoneListResponse",
    "milestone_create",
    "milestone_update",
    "milestone_delete",
    "milestone_get",
    "milestone_list",
]
