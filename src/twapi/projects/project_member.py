from __future__ import annotations

from typing import ClassVar, FrozenSet, List

from pydantic import BaseModel, Field

from ..client import Engine
from ..contract import V3, Request, Response


class ProjectMemberAddPath(BaseModel):
    project_id: int


class ProjectMemberAddResponse(Response):
    operation = "add project members"


class ProjectMemberAddRequest(Request):
    """Add existing users to a project; the body is not enveloped."""

    method = "PUT"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"user_ids"})
    operation = "add project members"
    response_class = ProjectMemberAddResponse

    path: ProjectMemberAddPath
    user_ids: List[int] = Field(default_factory=list, alias="userIds")

    @classmethod
    def new(cls, project_id: int, *user_ids: int) -> "ProjectMemberAddRequest":
        return cls(path=ProjectMemberAddPath(project_id=project_id), user_ids=list(user_ids))

    def url(self, server: str) -> str:
        return f"{server}{V3}/projects/{self.path.project_id}/people.json"


async def project_member_add(
    engine: Engine, req: ProjectMemberAddRequest
) -> ProjectMemberAddResponse:
    return await engine.execute(req)


__all__ = [
    "ProjectMemberAddPath",
    "ProjectMemberAddRequest",
    "ProjectMemberAddResponse",
    "project_member_add",
]
