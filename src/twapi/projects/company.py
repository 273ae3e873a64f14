"""Companies (clients) a project can belong to."""

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
    NoContentResponse,
    QueryParams,
    Request,
    Response,
    bool_param,
    join_ids,
)
from ..types import Relationship


class Company(Model):
    id: int = 0
    address_one: str = Field("", alias="addressOne")
    address_two: str = Field("", alias="addressTwo")
    city: str = ""
    country_code: str = Field("", alias="countryCode")
    email_one: str = Field("", alias="emailOne")
    email_two: str = Field("", alias="emailTwo")
    email_three: str = Field("", alias="emailThree")
    fax: str = ""
    name: str = ""
    phone: str = ""
    profile: Optional[str] = Field(None, alias="profileText")
    state: str = ""
    website: str = ""
    zip: str = ""
    client_managed_by: Optional[Relationship] = Field(None, alias="clientManagedBy")
    industry: Optional[Relationship] = None
    tags: List[Relationship] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    status: str = ""


class _CompanyFields(Request):
    """Writable company attributes; unset attributes are not sent."""

    address_one: Optional[str] = Field(None, alias="addressOne")
    address_two: Optional[str] = Field(None, alias="addressTwo")
    city: Optional[str] = None
    country_code: Optional[str] = Field(None, alias="countrycode")
    email_one: Optional[str] = Field(None, alias="emailOne")
    email_two: Optional[str] = Field(None, alias="emailTwo")
    email_three: Optional[str] = Field(None, alias="emailThree")
    fax: Optional[str] = None
    phone: Optional[str] = None
    profile: Optional[str] = None
    state: Optional[str] = None
    website: Optional[str] = None
    zip: Optional[str] = None
    client_managed_by: Optional[int] = Field(None, alias="clientManagedBy")
    industry_category_id: Optional[int] = Field(None, alias="industryCatId")
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")


# --- create ---------------------------------------------------------------- #


class CompanyCreateResponse(CreateResponse):
    operation = "create company"

    company: Company = Field(default_factory=Company)

    def created_id(self) -> int:
        return self.company.id


class CompanyCreateRequest(_CompanyFields):
    method = "POST"
    envelope = "company"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create company"
    response_class = CompanyCreateResponse

    name: str

    @classmethod
    def new(cls, name: str) -> "CompanyCreateRequest":
        return cls(name=name)

    def url(self, server: str) -> str:
        return f"{server}{V3}/companies.json"


async def company_create(
    engine: Engine, req: CompanyCreateRequest
) -> CompanyCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class CompanyUpdateResponse(Response):
    operation = "update company"

    company: Company = Field(default_factory=Company)


class CompanyUpdateRequest(_CompanyFields):
    method = "PATCH"
    envelope = "company"
    has_body = True
    operation = "update company"
    response_class = CompanyUpdateResponse

    path: IDPath
    name: Optional[str] = None

    @classmethod
    def new(cls, company_id: int) -> "CompanyUpdateRequest":
        return cls(path=IDPath(id=company_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/companies/{self.path.id}.json"


async def company_update(
    engine: Engine, req: CompanyUpdateRequest
) -> CompanyUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class CompanyDeleteResponse(NoContentResponse):
    operation = "delete company"


class CompanyDeleteRequest(Request):
    method = "DELETE"
    operation = "delete company"
    response_class = CompanyDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, company_id: int) -> "CompanyDeleteRequest":
        return cls(path=IDPath(id=company_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/companies/{self.path.id}.json"


async def company_delete(
    engine: Engine, req: CompanyDeleteRequest
) -> CompanyDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class CompanyGetResponse(Response):
    operation = "retrieve company"

    company: Company = Field(default_factory=Company)


class CompanyGetRequest(Request):
    operation = "retrieve company"
    response_class = CompanyGetResponse

    path: IDPath

    @classmethod
    def new(cls, company_id: int) -> "CompanyGetRequest":
        return cls(path=IDPath(id=company_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/companies/{self.path.id}.json"


async def company_get(engine: Engine, req: CompanyGetRequest) -> CompanyGetResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class CompanyListFilters(ListFilters):
    search_term: str = ""
    project_tag_ids: List[int] = Field(default_factory=list)
    match_all_project_tags: Optional[bool] = None

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.project_tag_ids:
            params.append(("projectTagIds", join_ids(self.project_tag_ids)))
        if self.match_all_project_tags is not None:
            params.append(
                ("matchAllProjectTags", bool_param(self.match_all_project_tags))
            )
        return params + self.paging_params()


class CompanyListResponse(ListResponse):
    operation = "list companies"

    companies: List[Company] = Field(default_factory=list)


class CompanyListRequest(Request):
    operation = "list companies"
    response_class = CompanyListResponse

    filters: CompanyListFilters = Field(default_factory=CompanyListFilters)

    def url(self, server: str) -> str:
        return f"{server}{V3}/companies.json"


async def company_list(
    engine: Engine, req: CompanyListRequest
) -> CompanyListResponse:
    return await engine.execute(req)


__all__ = [
    "Company",
    "CompanyCreateRequest",
    "CompanyCreateResponse",
    "CompanyUpdateRequest",
    "CompanyUpdateResponse",
    "CompanyDeleteRequest",
    "CompanyDeleteResponse",
    "CompanyGetRequest",
    "CompanyGetResponse",
    "CompanyListFilters",
    "CompanyListRequest",
    "CompanyListResponse",
    "company_create",
    "company_update",
    "company_delete",
    "company_get",
    "company_list",
]
