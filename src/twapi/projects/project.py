from __future__ import annotations

from datetime import datetime
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
    QueryParams,
    Request,
    Response,
    bool_param,
    join_ids,
)
from ..types import LegacyDate, LegacyNumber, Relationship


class Project(Model):
    """A project: the container for tasklists, milestones and time."""

    id: int = 0
    description: Optional[str] = None
    name: str = ""
    start_at: Optional[datetime] = Field(None, alias="startAt")
    end_at: Optional[datetime] = Field(None, alias="endAt")
    company: Optional[Relationship] = None
    owner: Optional[Relationship] = Field(None, alias="projectOwner")
    tags: List[Relationship] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    created_by: Optional[int] = Field(None, alias="createdBy")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    updated_by: Optional[int] = Field(None, alias="updatedBy")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    completed_by: Optional[int] = Field(None, alias="completedBy")
    # "active", "inactive", "deleted", ...
    status: str = ""
    # "normal", "template", "personal", ...
    type: str = ""


class _ProjectFields(Request):
    description: Optional[str] = None
    start_at: Optional[LegacyDate] = Field(None, alias="start-date")
    end_at: Optional[LegacyDate] = Field(None, alias="end-date")
    owner_id: Optional[int] = Field(None, alias="projectOwnerId")
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")


# --- create ---------------------------------------------------------------- #


class ProjectCreateResponse(CreateResponse):
    operation = "create project"

    id: LegacyNumber = 0

    def created_id(self) -> int:
        return self.id


class ProjectCreateRequest(_ProjectFields):
    method = "POST"
    envelope = "project"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name", "company_id"})
    operation = "create project"
    response_class = ProjectCreateResponse

    name: str
    company_id: int = Field(0, alias="companyId")

    @classmethod
    def new(cls, name: str) -> "ProjectCreateRequest":
        return cls(name=name)

    def url(self, server: str) -> str:
        return f"{server}/projects.json"


async def project_create(
    engine: Engine, req: ProjectCreateRequest
) -> ProjectCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class ProjectUpdateResponse(Response):
    operation = "update project"


class ProjectUpdateRequest(_ProjectFields):
    method = "PUT"
    envelope = "project"
    has_body = True
    operation = "update project"
    response_class = ProjectUpdateResponse

    path: IDPath
    name: Optional[str] = None
    company_id: Optional[int] = Field(None, alias="companyId")

    @classmethod
    def new(cls, project_id: int) -> "ProjectUpdateRequest":
        return cls(path=IDPath(id=project_id))

    def url(self, server: str) -> str:
        return f"{server}/projects/{self.path.id}.json"


async def project_update(
    engine: Engine, req: ProjectUpdateRequest
) -> ProjectUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class ProjectDeleteResponse(Response):
    operation = "delete project"


class ProjectDeleteRequest(Request):
    method = "DELETE"
    operation = "delete project"
    response_class = ProjectDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, project_id: int) -> "ProjectDeleteRequest":
        return cls(path=IDPath(id=project_id))

    def url(self, server: str) -> str:
        return f"{server}/projects/{self.path.id}.json"


async def project_delete(
    engine: Engine, req: ProjectDeleteRequest
) -> ProjectDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class ProjectGetResponse(Response):
    operation = "retrieve project"

    project: Project = Field(default_factory=Project)


class ProjectGetRequest(Request):
    operation = "retrieve project"
    response_class = ProjectGetResponse

    path: IDPath

    @classmethod
    def new(cls, project_id: int) -> "ProjectGetRequest":
        return cls(path=IDPath(id=project_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/projects/{self.path.id}.json"


async def project_get(engine: Engine, req: ProjectGetRequest) -> ProjectGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class ProjectListFilters(ListFilters):
    search_term: str = ""
    tag_ids: List[int] = Field(default_factory=list)
    match_all_tags: Optional[bool] = None

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.tag_ids:
            params.append(("projectTagIds", join_ids(self.tag_ids)))
        if self.match_all_tags is not None:
            params.append(("matchAllProjectTags", bool_param(self.match_all_tags)))
        return params + self.paging_params()


class ProjectListResponse(ListResponse):
    operation = "list projects"

    projects: List[Project] = Field(default_factory=list)


class ProjectListRequest(Request):
    operation = "list projects"
    response_class = ProjectListResponse

    filters: ProjectListFilters = Field(default_factory=ProjectListFilters)

    def url(self, server: str) -> str:
        return f"{server}{V3}/projects.json"


async def project_list(
    engine: Engine, req: ProjectListRequest
) -> ProjectListResponse:
    return await engine.execute(req)


__all__ = [
    "Project",
    "ProjectCreateRequest",
    "ProjectCreateResponse",
    "ProjectUpdateRequest",
    "ProjectUpdateResponse",
    "ProjectDeleteRequest",
    "ProjectDeleteResponse",
    "ProjectGetRequest",
    "ProjectGetResponse",
    "ProjectListFilters",
    "ProjectListRequest",
    "ProjectListResponse",
    "project_create",
    "project_update",
    "project_delete",
    "project_get",
    "project_list",
]
