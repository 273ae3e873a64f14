from __future__ import annotations

from typing import Any, Dict, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import tasklist


async def create_tasklist(
    engine: Engine,
    project_id: int,
    name: str,
    description: Optional[str] = None,
    milestone_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Create a tasklist in a project, optionally linked to a milestone."""
    req = tasklist.TasklistCreateRequest(
        path=tasklist.TasklistCreatePath(project_id=project_id),
        name=name,
        **present(description=description, milestone_id=milestone_id),
    )
    resp = await tasklist.tasklist_create(engine, req)
    return ack("Tasklist created successfully", id=resp.created_id())


async def update_tasklist(
    engine: Engine,
    tasklist_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    milestone_id: Optional[int] = None,
) -> Dict[str, Any]:
    req = tasklist.TasklistUpdateRequest(
        path=IDPath(id=tasklist_id),
        **present(name=name, description=description, milestone_id=milestone_id),
    )
    await tasklist.tasklist_update(engine, req)
    return ack("Tasklist updated successfully", id=tasklist_id)


async def delete_tasklist(engine: Engine, tasklist_id: int) -> Dict[str, Any]:
    await tasklist.tasklist_delete(
        engine, tasklist.TasklistDeleteRequest.new(tasklist_id)
    )
    return ack("Tasklist deleted successfully", id=tasklist_id)


async def get_tasklist(engine: Engine, tasklist_id: int) -> Dict[str, Any]:
    resp = await tasklist.tasklist_get(
        engine, tasklist.TasklistGetRequest.new(tasklist_id)
    )
    return dump(resp)


async def list_tasklists(
    engine: Engine,
    project_id: int = 0,
    search_term: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """List tasklists; a non-zero ``project_id`` restricts them to one project."""
    req = tasklist.TasklistListRequest(
        path=tasklist.TasklistListPath(project_id=project_id),
        filters=tasklist.TasklistListFilters(
            page=page, page_size=page_size, **present(search_term=search_term)
        ),
    )
    return dump(await tasklist.tasklist_list(engine, req))
