from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import team


async def create_team(
    engine: Engine,
    name: str,
    handle: Optional[str] = None,
    description: Optional[str] = None,
    parent_team_id: Optional[int] = None,
    company_id: Optional[int] = None,
    project_id: Optional[int] = None,
    user_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Create a team of users.

    A team belongs to the whole site unless ``company_id`` or ``project_id``
    scopes it; ``parent_team_id`` makes it a subteam.
    """
    req = team.TeamCreateRequest(
        name=name,
        **present(
            handle=handle,
            description=description,
            parent_team_id=parent_team_id,
            company_id=company_id,
            project_id=project_id,
            user_ids=user_ids,
        ),
    )
    resp = await team.team_create(engine, req)
    return ack("Team created successfully", id=resp.created_id())


async def update_team(
    engine: Engine,
    team_id: int,
    name: Optional[str] = None,
    handle: Optional[str] = None,
    description: Optional[str] = None,
    company_id: Optional[int] = None,
    project_id: Optional[int] = None,
    user_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """Update a team; ``user_ids`` replaces the member list."""
    req = team.TeamUpdateRequest(
        path=IDPath(id=team_id),
        **present(
            name=name,
            handle=handle,
            description=description,
            company_id=company_id,
            project_id=project_id,
            user_ids=user_ids,
        ),
    )
    await team.team_update(engine, req)
    return ack("Team updated successfully", id=team_id)


async def delete_team(engine: Engine, team_id: int) -> Dict[str, Any]:
    await team.team_delete(engine, team.TeamDeleteRequest.new(team_id))
    return ack("Team deleted successfully", id=team_id)


async def get_team(engine: Engine, team_id: int) -> Dict[str, Any]:
    return dump(await team.team_get(engine, team.TeamGetRequest.new(team_id)))


async def _list(
    engine: Engine,
    path: team.TeamListPath,
    search_term: Optional[str],
    page: int,
    page_size: int,
) -> Dict[str, Any]:
    req = team.TeamListRequest(
        path=path,
        filters=team.TeamListFilters(
            page=page, page_size=page_size, **present(search_term=search_term)
        ),
    )
    resp = await team.team_list(engine, req)
    # Paging comes from headers here, so surface it next to the body.
    return {**dump(resp), "has_more": resp.has_more}


async def list_teams(
    engine: Engine,
    search_term: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(engine, team.TeamListPath(), search_term, page, page_size)


async def list_teams_by_company(
    engine: Engine,
    company_id: int,
    search_term: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine, team.TeamListPath(company_id=company_id), search_term, page, page_size
    )


async def list_teams_by_project(
    engine: Engine,
    project_id: int,
    search_term: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine, team.TeamListPath(project_id=project_id), search_term, page, page_size
    )
