from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import task
from twapi.types import UserGroups


def _assignees(
    user_ids: Optional[List[int]],
    company_ids: Optional[List[int]],
    team_ids: Optional[List[int]],
) -> Optional[UserGroups]:
    if user_ids is None and company_ids is None and team_ids is None:
        return None
    return UserGroups(
        user_ids=user_ids or [],
        company_ids=company_ids or [],
        team_ids=team_ids or [],
    )


async def create_task(
    engine: Engine,
    tasklist_id: int,
    name: str,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    progress: Optional[int] = None,
    start_date: Optional[str] = None,
    due_date: Optional[str] = None,
    estimated_minutes: Optional[int] = None,
    assignee_user_ids: Optional[List[int]] = None,
    assignee_company_ids: Optional[List[int]] = None,
    assignee_team_ids: Optional[List[int]] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Create a task inside a tasklist.

    ``priority`` is one of low, medium or high. Dates are ``YYYY-MM-DD``.
    Assignees may be users, companies or teams.
    """
    req = task.TaskCreateRequest(
        path=task.TaskCreatePath(tasklist_id=tasklist_id),
        name=name,
        **present(
            description=description,
            priority=priority,
            progress=progress,
            start_at=start_date,
            due_at=due_date,
            estimated_minutes=estimated_minutes,
            assignees=_assignees(
                assignee_user_ids, assignee_company_ids, assignee_team_ids
            ),
            tag_ids=tag_ids,
        ),
    )
    resp = await task.task_create(engine, req)
    return ack("Task created successfully", id=resp.created_id())


async def update_task(
    engine: Engine,
    task_id: int,
    name: Optional[str] = None,
    tasklist_id: Optional[int] = None,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    progress: Optional[int] = None,
    start_date: Optional[str] = None,
    due_date: Optional[str] = None,
    estimated_minutes: Optional[int] = None,
    assignee_user_ids: Optional[List[int]] = None,
    assignee_company_ids: Optional[List[int]] = None,
    assignee_team_ids: Optional[List[int]] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """Update an existing task; ``tasklist_id`` moves it to another tasklist."""
    req = task.TaskUpdateRequest(
        path=IDPath(id=task_id),
        **present(
            name=name,
            tasklist_id=tasklist_id,
            description=description,
            priority=priority,
            progress=progress,
            start_at=start_date,
            due_at=due_date,
            estimated_minutes=estimated_minutes,
            assignees=_assignees(
                assignee_user_ids, assignee_company_ids, assignee_team_ids
            ),
            tag_ids=tag_ids,
        ),
    )
    await task.task_update(engine, req)
    return ack("Task updated successfully", id=task_id)


async def delete_task(engine: Engine, task_id: int) -> Dict[str, Any]:
    await task.task_delete(engine, task.TaskDeleteRequest.new(task_id))
    return ack("Task deleted successfully", id=task_id)


async def get_task(engine: Engine, task_id: int) -> Dict[str, Any]:
    resp = await task.task_get(engine, task.TaskGetRequest.new(task_id))
    return dump(resp)


async def _list(
    engine: Engine,
    path: task.TaskListPath,
    search_term: Optional[str],
    tag_ids: Optional[List[int]],
    match_all_tags: Optional[bool],
    page: int,
    page_size: int,
) -> Dict[str, Any]:
    filters = task.TaskListFilters(
        page=page,
        page_size=page_size,
        **present(
            search_term=search_term, tag_ids=tag_ids, match_all_tags=match_all_tags
        ),
    )
    resp = await task.task_list(engine, task.TaskListRequest(path=path, filters=filters))
    return dump(resp)


async def list_tasks(
    engine: Engine,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """List tasks across all projects."""
    return await _list(
        engine, task.TaskListPath(), search_term, tag_ids, match_all_tags, page, page_size
    )


async def list_tasks_by_tasklist(
    engine: Engine,
    tasklist_id: int,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine,
        task.TaskListPath(tasklist_id=tasklist_id),
        search_term,
        tag_ids,
        match_all_tags,
        page,
        page_size,
    )


async def list_tasks_by_project(
    engine: Engine,
    project_id: int,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine,
        task.TaskListPath(project_id=project_id),
        search_term,
        tag_ids,
        match_all_tags,
        page,
        page_size,
    )
