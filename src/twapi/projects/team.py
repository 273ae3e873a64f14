"""
Teams: named groups of users, optionally scoped to a company or a project.

Teams only exist in the legacy API, so identifiers may arrive as strings and
list pagination comes from the ``X-Page``/``X-Pages`` response headers.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from ..client import Engine
from ..contract import (
    CreateResponse,
    HeaderPagedListResponse,
    IDPath,
    ListFilters,
    Model,
    QueryParams,
    Request,
    Response,
)
from ..types import LegacyNumber, LegacyNumericList, LegacyRelationship, OptionalDateTime


class TeamCompany(Model):
    id: LegacyNumber = 0
    name: str = ""


class TeamRef(Model):
    id: LegacyNumber = 0
    name: str = ""
    handle: str = ""


class Team(Model):
    id: LegacyNumber = 0
    name: str = ""
    description: Optional[str] = None
    handle: str = ""
    logo_url: Optional[str] = Field(None, alias="logoUrl")
    logo_icon: Optional[str] = Field(None, alias="logoIcon")
    logo_color: Optional[str] = Field(None, alias="logoColor")
    # Zero for teams not scoped to a project.
    project_id: LegacyNumber = Field(0, alias="projectId")
    company: TeamCompany = Field(default_factory=TeamCompany)
    parent_team: TeamRef = Field(default_factory=TeamRef, alias="parentTeam")
    root_team: TeamRef = Field(default_factory=TeamRef, alias="rootTeam")
    members: List[LegacyRelationship] = Field(default_factory=list)
    created_by: LegacyNumber = Field(0, alias="createdByUserId")
    created_at: Optional[datetime] = Field(None, alias="dateCreated")
    updated_by: LegacyNumber = Field(0, alias="updatedByUserId")
    updated_at: Optional[datetime] = Field(None, alias="dateUpdated")
    deleted: bool = False
    deleted_at: OptionalDateTime = Field(None, alias="deletedDate")


class _TeamFields(Request):
    handle: Optional[str] = None
    description: Optional[str] = None
    company_id: Optional[int] = Field(None, alias="companyId")
    project_id: Optional[int] = Field(None, alias="projectId")
    user_ids: Optional[LegacyNumericList] = Field(None, alias="userIds")


# --- create ---------------------------------------------------------------- #


class TeamCreateResponse(CreateResponse):
    # The legacy endpoint answers a create with 200.
    expected_status = 200
    operation = "create team"

    id: LegacyNumber = 0

    def created_id(self) -> int:
        return self.id


class TeamCreateRequest(_TeamFields):
    method = "POST"
    envelope = "team"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create team"
    response_class = TeamCreateResponse

    name: str
    parent_team_id: Optional[int] = Field(None, alias="parentTeamId")

    @classmethod
    def new(cls, name: str) -> "TeamCreateRequest":
        return cls(name=name)

    def url(self, server: str) -> str:
        return f"{server}/teams.json"


async def team_create(engine: Engine, req: TeamCreateRequest) -> TeamCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class TeamUpdateResponse(Response):
    operation = "update team"


class TeamUpdateRequest(_TeamFields):
    method = "PUT"
    envelope = "team"
    has_body = True
    operation = "update team"
    response_class = TeamUpdateResponse

    path: IDPath
    name: Optional[str] = None

    @classmethod
    def new(cls, team_id: int) -> "TeamUpdateRequest":
        return cls(path=IDPath(id=team_id))

    def url(self, server: str) -> str:
        return f"{server}/teams/{self.path.id}.json"


async def team_update(engine: Engine, req: TeamUpdateRequest) -> TeamUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class TeamDeleteResponse(Response):
    operation = "delete team"


class TeamDeleteRequest(Request):
    method = "DELETE"
    operation = "delete team"
    response_class = TeamDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, team_id: int) -> "TeamDeleteRequest":
        return cls(path=IDPath(id=team_id))

    def url(self, server: str) -> str:
        return f"{server}/teams/{self.path.id}.json"


async def team_delete(engine: Engine, req: TeamDeleteRequest) -> TeamDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class TeamGetResponse(Response):
    operation = "retrieve team"

    team: Team = Field(default_factory=Team)


class TeamGetRequest(Request):
    operation = "retrieve team"
    response_class = TeamGetResponse

    path: IDPath

    @classmethod
    def new(cls, team_id: int) -> "TeamGetRequest":
        return cls(path=IDPath(id=team_id))

    def url(self, server: str) -> str:
        return f"{server}/teams/{self.path.id}.json"


async def team_get(engine: Engine, req: TeamGetRequest) -> TeamGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class TeamListPath(BaseModel):
    project_id: int = 0
    company_id: int = 0


class TeamListFilters(ListFilters):
    search_term: str = ""
    include_company_teams: bool = False
    include_project_teams: bool = False
    include_subteams: bool = False

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        # The legacy API only understands these flags when present.
        if self.include_company_teams:
            params.append(("includeCompanyTeams", "true"))
        if self.include_project_teams:
            params.append(("includeProjectTeams", "true"))
        if self.include_subteams:
            params.append(("includeSubteams", "true"))
        return params + self.paging_params()


class TeamListResponse(HeaderPagedListResponse):
    operation = "list teams"

    teams: List[Team] = Field(default_factory=list)


class TeamListRequest(Request):
    operation = "list teams"
    response_class = TeamListResponse

    path: TeamListPath = Field(default_factory=TeamListPath)
    filters: TeamListFilters = Field(default_factory=TeamListFilters)

    def url(self, server: str) -> str:
        if self.path.project_id > 0:
            return f"{server}/projects/{self.path.project_id}/teams.json"
        if self.path.company_id > 0:
            return f"{server}/companies/{self.path.company_id}/teams.json"
        return f"{server}/teams.json"


async def team_list(engine: Engine, req: TeamListRequest) -> TeamListResponse:
    return await engine.execute(req)


__all__ = [
    "Team",
    "TeamCompany",
    "TeamRef",
    "TeamCreateRequest",
    "TeamCreateResponse",
    "TeamUpdateRequest",
    "TeamUpdateResponse",
    "TeamDeleteRequest",
    "TeamDeleteResponse",
    "TeamGetRequest",
    "TeamGetResponse",
    "TeamListPath",
    "TeamListFilters",
    "TeamListRequest",
    "TeamListResponse",
    "team_create",
    "team_update",
    "team_delete",
    "team_get",
    "team_list",
]
