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
from ..types import LegacyNumber, Money, Relationship


class User(Model):
    id: int = 0
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    title: Optional[str] = None
    email: str = ""
    admin: bool = Field(False, alias="isAdmin")
    # "account", "collaborator" or "contact"
    type: str = ""
    cost: Optional[Money] = Field(None, alias="userCost")
    rate: Optional[Money] = Field(None, alias="userRate")
    company: Optional[Relationship] = None
    job_roles: List[Relationship] = Field(default_factory=list, alias="jobRoles")
    skills: List[Relationship] = Field(default_factory=list)
    deleted: bool = False
    created_by: Optional[Relationship] = Field(None, alias="createdBy")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_by: Optional[Relationship] = Field(None, alias="updatedBy")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class _UserFields(Request):
    title: Optional[str] = None
    admin: Optional[bool] = Field(None, alias="administrator")
    type: Optional[str] = Field(None, alias="user-type")
    company_id: Optional[int] = Field(None, alias="company-id")


# --- create ---------------------------------------------------------------- #


class UserCreateResponse(CreateResponse):
    operation = "create user"

    id: LegacyNumber = 0

    def created_id(self) -> int:
        return self.id


class UserCreateRequest(_UserFields):
    method = "POST"
    envelope = "person"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset(
        {"first_name", "last_name", "email"}
    )
    operation = "create user"
    response_class = UserCreateResponse

    first_name: str = Field(alias="first-name")
    last_name: str = Field(alias="last-name")
    email: str = Field(alias="email-address")

    @classmethod
    def new(cls, first_name: str, last_name: str, email: str) -> "UserCreateRequest":
        return cls(first_name=first_name, last_name=last_name, email=email)

    def url(self, server: str) -> str:
        return f"{server}/people.json"


async def user_create(engine: Engine, req: UserCreateRequest) -> UserCreateResponse:
    return await engine.execute(req)


# --- update ---------------------------------------------------------------- #


class UserUpdateResponse(Response):
    operation = "update user"


class UserUpdateRequest(_UserFields):
    method = "PUT"
    envelope = "person"
    has_body = True
    operation = "update user"
    response_class = UserUpdateResponse

    path: IDPath
    first_name: Optional[str] = Field(None, alias="first-name")
    last_name: Optional[str] = Field(None, alias="last-name")
    email: Optional[str] = Field(None, alias="email-address")

    @classmethod
    def new(cls, user_id: int) -> "UserUpdateRequest":
        return cls(path=IDPath(id=user_id))

    def url(self, server: str) -> str:
        return f"{server}/people/{self.path.id}.json"


async def user_update(engine: Engine, req: UserUpdateRequest) -> UserUpdateResponse:
    return await engine.execute(req)


# --- delete ---------------------------------------------------------------- #


class UserDeleteResponse(Response):
    operation = "delete user"


class UserDeleteRequest(Request):
    method = "DELETE"
    operation = "delete user"
    response_class = UserDeleteResponse

    path: IDPath

    @classmethod
    def new(cls, user_id: int) -> "UserDeleteRequest":
        return cls(path=IDPath(id=user_id))

    def url(self, server: str) -> str:
        return f"{server}/people/{self.path.id}.json"


async def user_delete(engine: Engine, req: UserDeleteRequest) -> UserDeleteResponse:
    return await engine.execute(req)


# --- get ------------------------------------------------------------------- #


class UserGetResponse(Response):
    operation = "retrieve user"

    user: User = Field(default_factory=User, alias="person")


class UserGetRequest(Request):
    operation = "retrieve user"
    response_class = UserGetResponse

    path: IDPath

    @classmethod
    def new(cls, user_id: int) -> "UserGetRequest":
        return cls(path=IDPath(id=user_id))

    def url(self, server: str) -> str:
        return f"{server}{V3}/people/{self.path.id}.json"


async def user_get(engine: Engine, req: UserGetRequest) -> UserGetResponse:
    return await engine.execute(req)


class UserGetMeResponse(Response):
    operation = "retrieve logged user"

    user: User = Field(default_factory=User, alias="person")


class UserGetMeRequest(Request):
    """The user the session is authenticated as."""

    operation = "retrieve logged user"
    response_class = UserGetMeResponse

    def url(self, server: str) -> str:
        return f"{server}{V3}/me.json"


async def user_get_me(engine: Engine, req: UserGetMeRequest) -> UserGetMeResponse:
    return await engine.execute(req)


# --- list ------------------------------------------------------------------ #


class UserListPath(BaseModel):
    project_id: int = 0


class UserListFilters(ListFilters):
    search_term: str = ""
    # "account", "collaborator" or "contact"
    type: str = ""

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        if self.type:
            params.append(("userType", self.type))
        return params + self.paging_params()


class UserListResponse(ListResponse):
    operation = "list users"

    users: List[User] = Field(default_factory=list, alias="people")


class UserListRequest(Request):
    operation = "list users"
    response_class = UserListResponse

    path: UserListPath = Field(default_factory=UserListPath)
    filters: UserListFilters = Field(default_factory=UserListFilters)

    def url(self, server: str) -> str:
        if self.path.project_id > 0:
            return f"{server}{V3}/projects/{self.path.project_id}/people.json"
        return f"{server}{V3}/people.json"


async def user_list(engine: Engine, req: UserListRequest) -> UserListResponse:
    return await engine.execute(req)


__all__ = [
    "User",
    "UserCreateRequest",
    "UserCreateResponse",
    "UserUpdateRequest",
    "UserUpdateResponse",
    "UserDeleteRequest",
    "UserDeleteResponse",
    "UserGetRequest",
    "UserGetResponse",
    "UserGetMeRequest",
    "UserGetMeResponse",
    "UserListPath",
    "UserListFilters",
    "UserListRequest",
    "UserListResponse",
    "user_create",
    "user_update",
    "user_delete",
    "user_get",
    "user_get_me",
    "user_list",
]
