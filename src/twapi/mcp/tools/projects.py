from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import project, project_member


async def create_project(
    engine: Engine,
    name: str,
    company_id: int = 0,
    description: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    owner_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Create a project in Teamwork.com.

    Dates are ``YYYY-MM-DD``. Without ``company_id`` the project belongs to
    the site owner's company.
    """
    req = project.ProjectCreateRequest(
        name=name,
        company_id=company_id,
        **present(
            description=description,
            start_at=start_date,
            end_at=end_date,
            owner_id=owner_id,
            tag_ids=tag_ids,
        ),
    )
    resp = await project.project_create(engine, req)
    return ack("Project created successfully", id=resp.created_id())


async def update_project(
    engine: Engine,
    project_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    company_id: Optional[int] = None,
    owner_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """Update an existing project; only the provided fields change."""
    req = project.ProjectUpdateRequest(
        path=IDPath(id=project_id),
        **present(
            name=name,
            description=description,
            start_at=start_date,
            end_at=end_date,
            company_id=company_id,
            owner_id=owner_id,
            tag_ids=tag_ids,
        ),
    )
    await project.project_update(engine, req)
    return ack("Project updated successfully", id=project_id)


async def delete_project(engine: Engine, project_id: int) -> Dict[str, Any]:
    await project.project_delete(engine, project.ProjectDeleteRequest.new(project_id))
    return ack("Project deleted successfully", id=project_id)


async def get_project(engine: Engine, project_id: int) -> Dict[str, Any]:
    resp = await project.project_get(engine, project.ProjectGetRequest.new(project_id))
    return dump(resp)


async def list_projects(
    engine: Engine,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """List projects, optionally filtered by name or tags."""
    filters = project.ProjectListFilters(
        page=page,
        page_size=page_size,
        **present(
            search_term=search_term, tag_ids=tag_ids, match_all_tags=match_all_tags
        ),
    )
    resp = await project.project_list(
        engine, project.ProjectListRequest(filters=filters)
    )
    return dump(resp)


async def add_project_member(
    engine: Engine, project_id: int, user_ids: List[int]
) -> Dict[str, Any]:
    """Add existing users to a project."""
    if not user_ids:
        raise ValueError("user_ids must not be empty")
    req = project_member.ProjectMemberAddRequest.new(project_id, *user_ids)
    await project_member.project_member_add(engine, req)
    return ack("Users added to project successfully", project_id=project_id)
