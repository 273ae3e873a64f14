"""
Billable rates at installation, project and user level.

All amounts are in cents. Rate bodies are sent without an envelope, and a
``None`` rate is sent as an explicit ``null`` to clear a rate.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..client import Engine
from ..contract import (
    V3,
    IncludeFilters,
    ListFilters,
    ListResponse,
    Model,
    NoContentResponse,
    QueryParams,
    Request,
    Response,
)
from ..types import Money, Relationship

# Where an effective rate comes from.
SOURCE_INSTALLATION_RATE = "installationrate"
SOURCE_PROJECT_RATE = "projectrate"
SOURCE_USER_PROJECT_RATE = "userprojectrate"


class Currency(Model):
    id: int = 0
    code: str = ""
    symbol: str = ""
    name: str = ""


class BillableRate(Model):
    rate: float = 0.0
    currency: Optional[Relationship] = None


class UserProjectRate(Model):
    project: Optional[Relationship] = None
    user_rate: Money = Field(Money(0), alias="userRate")


class EffectiveUserProjectRate(Model):
    user: Optional[Relationship] = None
    effective_rate: Money = Field(Money(0), alias="effectiveRate")
    user_project_rate: Optional[Money] = Field(None, alias="userProjectRate")
    user_installation_rate: Optional[Money] = Field(None, alias="userInstallationRate")
    project_rate: Optional[Money] = Field(None, alias="projectRate")
    source: Optional[str] = None
    from_date: Optional[datetime] = Field(None, alias="fromDate")
    to_date: Optional[datetime] = Field(None, alias="toDate")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    updated_by: Optional[Relationship] = Field(None, alias="updatedBy")
    billable_rate: Optional[BillableRate] = Field(None, alias="billableRate")


class UserRateHistory(Model):
    rate: Money = Money(0)
    from_date: Optional[datetime] = Field(None, alias="fromDate")
    to_date: Optional[datetime] = Field(None, alias="toDate")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class InstallationUserRate(Model):
    user: Optional[Relationship] = None
    rate: Money = Money(0)


class CurrencyIncluded(Model):
    currencies: Dict[str, Currency] = Field(default_factory=dict)


class UserIncluded(CurrencyIncluded):
    users: Dict[str, Relationship] = Field(default_factory=dict)


class UserUserRateIncluded(CurrencyIncluded):
    projects: Dict[str, Relationship] = Field(default_factory=dict)


class ProjectUserRateIncluded(UserIncluded):
    cost_rates: Dict[str, Any] = Field(default_factory=dict, alias="costRates")


class RateListFilters(ListFilters):
    search_term: str = ""
    order_by: str = ""
    # "asc" or "desc"
    order_mode: str = "asc"

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.order_by:
            params.append(("orderBy", self.order_by))
        if self.order_mode:
            params.append(("orderMode", self.order_mode))
        return params + self.paging_params()


# --- user rates ------------------------------------------------------------ #


class UserIDPath(BaseModel):
    user_id: int


class ProjectIDPath(BaseModel):
    project_id: int


class ProjectUserPath(BaseModel):
    project_id: int
    user_id: int


class RateUserGetFilters(ListFilters):
    include_installation_rate: bool = False
    include_user_cost: bool = False
    include_archived_projects: bool = False
    include_deleted_projects: bool = False
    include: List[str] = Field(default_factory=list)

    def query(self) -> QueryParams:
        params = self.paging_params()
        if self.include_installation_rate:
            params.append(("includeInstallationRate", "true"))
        if self.include_user_cost:
            params.append(("includeUserCost", "true"))
        if self.include_archived_projects:
            params.append(("includeArchivedProjects", "true"))
        if self.include_deleted_projects:
            params.append(("includeDeletedProjects", "true"))
        params.extend(("include", item) for item in self.include)
        return params


class RateUserGetResponse(ListResponse):
    operation = "get user rates"

    project_rates: List[UserProjectRate] = Field(
        default_factory=list, alias="projectRates"
    )
    installation_rate: Optional[Money] = Field(None, alias="installationRate")
    # Installation rate per currency ID.
    installation_rates: Dict[int, Money] = Field(
        default_factory=dict, alias="installationRates"
    )
    user_cost: Optional[Money] = Field(None, alias="userCost")
    included: UserUserRateIncluded = Field(default_factory=UserUserRateIncluded)


class RateUserGetRequest(Request):
    operation = "get user rates"
    response_class = RateUserGetResponse

    path: UserIDPath
    filters: RateUserGetFilters = Field(default_factory=RateUserGetFilters)

    @classmethod
    def new(cls, user_id: int) -> "RateUserGetRequest":
        return cls(path=UserIDPath(user_id=user_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/people/{self.path.user_id}/rates"


async def rate_user_get(
    engine: Engine, req: RateUserGetRequest
) -> RateUserGetResponse:
    return await engine.execute(req)


# --- installation rates ---------------------------------------------------- #


class RateInstallationUserListResponse(ListResponse):
    operation = "list installation user rates"

    user_rates: List[InstallationUserRate] = Field(
        default_factory=list, alias="userRates"
    )
    included: UserIncluded = Field(default_factory=UserIncluded)


class RateInstallationUserListRequest(Request):
    operation = "list installation user rates"
    response_class = RateInstallationUserListResponse

    filters: ListFilters = Field(default_factory=ListFilters)

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/installation/users.json"


async def rate_installation_user_list(
    engine: Engine, req: RateInstallationUserListRequest
) -> RateInstallationUserListResponse:
    return await engine.execute(req)


class RateInstallationUserGetResponse(Response):
    operation = "get installation user rate"

    user_rate: Money = Field(Money(0), alias="userRate")
    # Rate per currency code.
    user_rates: Dict[str, Money] = Field(default_factory=dict, alias="userRates")
    included: CurrencyIncluded = Field(default_factory=CurrencyIncluded)


class RateInstallationUserGetRequest(Request):
    operation = "get installation user rate"
    response_class = RateInstallationUserGetResponse

    path: UserIDPath
    filters: IncludeFilters = Field(default_factory=IncludeFilters)

    @classmethod
    def new(cls, user_id: int) -> "RateInstallationUserGetRequest":
        return cls(path=UserIDPath(user_id=user_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/installation/users/{self.path.user_id}.json"


async def rate_installation_user_get(
    engine: Engine, req: RateInstallationUserGetRequest
) -> RateInstallationUserGetResponse:
    return await engine.execute(req)


class RateInstallationUserUpdateResponse(Response):
    expected_status = 201
    operation = "update installation user rate"


class RateInstallationUserUpdateRequest(Request):
    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"user_rate"})
    operation = "update installation user rate"
    response_class = RateInstallationUserUpdateResponse

    path: UserIDPath
    currency_id: Optional[int] = Field(None, alias="currencyId")
    user_rate: Optional[int] = Field(None, alias="userRate")

    @classmethod
    def new(
        cls, user_id: int, rate: Optional[int]
    ) -> "RateInstallationUserUpdateRequest":
        return cls(path=UserIDPath(user_id=user_id), user_rate=rate)

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/installation/users/{self.path.user_id}.json"


async def rate_installation_user_update(
    engine: Engine, req: RateInstallationUserUpdateRequest
) -> RateInstallationUserUpdateResponse:
    return await engine.execute(req)


class RateInstallationUserBulkUpdateResponse(Response):
    operation = "bulk update installation user rates"

    all: bool = False
    ids: List[int] = Field(default_factory=list)
    exclude_ids: List[int] = Field(default_factory=list, alias="excludeIds")
    rate: Money = Money(0)


class RateInstallationUserBulkUpdateRequest(Request):
    """Set one rate for many users: either ``ids`` or ``all`` minus ``exclude_ids``."""

    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"user_rate"})
    operation = "bulk update installation user rates"
    response_class = RateInstallationUserBulkUpdateResponse

    all: Optional[bool] = None
    ids: Optional[List[int]] = None
    exclude_ids: Optional[List[int]] = Field(None, alias="excludeIds")
    currency_id: Optional[int] = Field(None, alias="currencyId")
    user_rate: Optional[int] = Field(None, alias="userRate")

    @classmethod
    def new(cls, rate: Optional[int]) -> "RateInstallationUserBulkUpdateRequest":
        return cls(user_rate=rate)

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/installation/users/bulk/update.json"


async def rate_installation_user_bulk_update(
    engine: Engine, req: RateInstallationUserBulkUpdateRequest
) -> RateInstallationUserBulkUpdateResponse:
    return await engine.execute(req)


# --- project rates --------------------------------------------------------- #


class RateProjectGetResponse(Response):
    operation = "get project rate"

    project_rate: Money = Field(Money(0), alias="projectRate")
    rate: Money = Money(0)
    included: CurrencyIncluded = Field(default_factory=CurrencyIncluded)


class RateProjectGetRequest(Request):
    operation = "get project rate"
    response_class = RateProjectGetResponse

    path: ProjectIDPath
    filters: IncludeFilters = Field(default_factory=IncludeFilters)

    @classmethod
    def new(cls, project_id: int) -> "RateProjectGetRequest":
        return cls(path=ProjectIDPath(project_id=project_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/projects/{self.path.project_id}.json"


async def rate_project_get(
    engine: Engine, req: RateProjectGetRequest
) -> RateProjectGetResponse:
    return await engine.execute(req)


class RateProjectUpdateResponse(NoContentResponse):
    operation = "update project rate"


class RateProjectUpdateRequest(Request):
    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"project_rate"})
    operation = "update project rate"
    response_class = RateProjectUpdateResponse

    path: ProjectIDPath
    project_rate: Optional[int] = Field(None, alias="projectRate")

    @classmethod
    def new(cls, project_id: int, rate: Optional[int]) -> "RateProjectUpdateRequest":
        return cls(path=ProjectIDPath(project_id=project_id), project_rate=rate)

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/projects/{self.path.project_id}.json"


async def rate_project_update(
    engine: Engine, req: RateProjectUpdateRequest
) -> RateProjectUpdateResponse:
    return await engine.execute(req)


class ProjectUserRateRequest(BaseModel):
    """One user's rate inside a project-and-users update."""

    user: Relationship
    user_rate: int = Field(alias="userRate")
    from_date: Optional[datetime] = Field(None, alias="fromDate")

    model_config = ConfigDict(populate_by_name=True)


class RateProjectAndUsersUpdateResponse(NoContentResponse):
    operation = "update project and users rates"


class RateProjectAndUsersUpdateRequest(Request):
    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"project_rate"})
    operation = "update project and users rates"
    response_class = RateProjectAndUsersUpdateResponse

    path: ProjectIDPath
    project_rate: int = Field(0, alias="projectRate")
    user_rates: Optional[List[ProjectUserRateRequest]] = Field(None, alias="userRates")

    @classmethod
    def new(
        cls, project_id: int, project_rate: int
    ) -> "RateProjectAndUsersUpdateRequest":
        return cls(path=ProjectIDPath(project_id=project_id), project_rate=project_rate)

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/projects/{self.path.project_id}/actions/update"


async def rate_project_and_users_update(
    engine: Engine, req: RateProjectAndUsersUpdateRequest
) -> RateProjectAndUsersUpdateResponse:
    return await engine.execute(req)


# --- project user rates ---------------------------------------------------- #


class RateProjectUserListResponse(ListResponse):
    operation = "list project user rates"

    user_rates: List[EffectiveUserProjectRate] = Field(
        default_factory=list, alias="userRates"
    )
    included: ProjectUserRateIncluded = Field(default_factory=ProjectUserRateIncluded)


class RateProjectUserListRequest(Request):
    operation = "list project user rates"
    response_class = RateProjectUserListResponse

    path: ProjectIDPath
    filters: RateListFilters = Field(default_factory=RateListFilters)

    @classmethod
    def new(cls, project_id: int) -> "RateProjectUserListRequest":
        return cls(path=ProjectIDPath(project_id=project_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/rates/projects/{self.path.project_id}/users"


async def rate_project_user_list(
    engine: Engine, req: RateProjectUserListRequest
) -> RateProjectUserListResponse:
    return await engine.execute(req)


class RateProjectUserGetResponse(Response):
    operation = "get project user rate"

    user_rate: Money = Field(Money(0), alias="userRate")
    rate: Money = Money(0)
    included: CurrencyIncluded = Field(default_factory=CurrencyIncluded)


class RateProjectUserGetRequest(Request):
    operation = "get project user rate"
    response_class = RateProjectUserGetResponse

    path: ProjectUserPath
    filters: IncludeFilters = Field(default_factory=IncludeFilters)

    @classmethod
    def new(cls, project_id: int, user_id: int) -> "RateProjectUserGetRequest":
        return cls(path=ProjectUserPath(project_id=project_id, user_id=user_id))

    def url(self, server: str) -> str:
        p = self.path
        return f"{server}{V3}/rates/projects/{p.project_id}/users/{p.user_id}.json"


async def rate_project_user_get(
    engine: Engine, req: RateProjectUserGetRequest
) -> RateProjectUserGetResponse:
    return await engine.execute(req)


class RateProjectUserUpdateResponse(Response):
    expected_status = 201
    operation = "update project user rate"

    user_rate: Money = Field(Money(0), alias="userRate")
    rate: Money = Money(0)
    included: CurrencyIncluded = Field(default_factory=CurrencyIncluded)


class RateProjectUserUpdateRequest(Request):
    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"user_rate"})
    operation = "update project user rate"
    response_class = RateProjectUserUpdateResponse

    path: ProjectUserPath
    currency_id: Optional[int] = Field(None, alias="currencyId")
    user_rate: Optional[int] = Field(None, alias="userRate")

    @classmethod
    def new(
        cls, project_id: int, user_id: int, rate: Optional[int]
    ) -> "RateProjectUserUpdateRequest":
        return cls(
            path=ProjectUserPath(project_id=project_id, user_id=user_id),
            user_rate=rate,
        )

    def url(self, server: str) -> str:
        p = self.path
        return f"{server}{V3}/rates/projects/{p.project_id}/users/{p.user_id}.json"


async def rate_project_user_update(
    engine: Engine, req: RateProjectUserUpdateRequest
) -> RateProjectUserUpdateResponse:
    return await engine.execute(req)


class RateProjectUserHistoryGetResponse(ListResponse):
    operation = "get project user rate history"

    user_rate_history: List[UserRateHistory] = Field(
        default_factory=list, alias="userRateHistory"
    )
    included: UserIncluded = Field(default_factory=UserIncluded)


class RateProjectUserHistoryGetRequest(Request):
    operation = "get project user rate history"
    response_class = RateProjectUserHistoryGetResponse

    path: ProjectUserPath
    filters: RateListFilters = Field(default_factory=RateListFilters)

    @classmethod
    def new(cls, project_id: int, user_id: int) -> "RateProjectUserHistoryGetRequest":
        return cls(path=ProjectUserPath(project_id=project_id, user_id=user_id))

    def url(self, server: str) -> str:
        p = self.path
        return f"{server}{V3}/rates/projects/{p.project_id}/users/{p.user_id}/history"


async def rate_project_user_history_get(
    engine: Engine, req: RateProjectUserHistoryGetRequest
) -> RateProjectUserHistoryGetResponse:
    return await engine.execute(req)


__all__ = [
    "Currency",
    "BillableRate",
    "UserProjectRate",
    "EffectiveUserProjectRate",
    "UserRateHistory",
    "InstallationUserRate",
    "ProjectUserRateRequest",
    "RateListFilters",
    "RateUserGetFilters",
    "RateUserGetRequest",
    "RateUserGetResponse",
    "RateInstallationUserListRequest",
    "RateInstallationUserListResponse",
    "RateInstallationUserGetRequest",
    "RateInstallationUserGetResponse",
    "RateInstallationUserUpdateRequest",
    "RateInstallationUserUpdateResponse",
    "RateInstallationUserBulkUpdateRequest",
    "RateInstallationUserBulkUpdateResponse",
    "RateProjectGetRequest",
    "RateProjectGetResponse",
    "RateProjectUpdateRequest",
    "RateProjectUpdateResponse",
    "RateProjectAndUsersUpdateRequest",
    "RateProjectAndUsersUpdateResponse",
    "RateProjectUserListRequest",
    "RateProjectUserListResponse",
    "RateProjectUserGetRequest",
    "RateProjectUserGetResponse",
    "RateProjectUserUpdateRequest",
    "RateProjectUserUpdateResponse",
    "RateProjectUserHistoryGetRequest",
    "RateProjectUserHistoryGetResponse",
    "rate_user_get",
    "rate_installation_user_list",
    "rate_installation_user_get",
    "rate_installation_user_update",
    "rate_installation_user_bulk_update",
    "rate_project_get",
    "rate_project_update",
    "rate_project_and_users_update",
    "rate_project_user_list",
    "rate_project_user_get",
    "rate_project_user_update",
    "rate_project_user_history_get",
    "SOURCE_INSTALLATION_RATE",
    "SOURCE_PROJECT_RATE",
    "SOURCE_USER_PROJECT_RATE",
]
