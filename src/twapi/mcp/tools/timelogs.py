from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import timelog


async def create_timelog(
    engine: Engine,
    date: str,
    time: str,
    task_id: Optional[int] = None,
    project_id: Optional[int] = None,
    is_utc: bool = False,
    hours: int = 0,
    minutes: int = 0,
    billable: bool = False,
    description: Optional[str] = None,
    user_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Log time against a task or a project.

    ``date`` is ``YYYY-MM-DD`` and ``time`` is ``HH:MM:SS``; the time is read
    as UTC only when ``is_utc`` is set. Give exactly one of ``task_id`` or
    ``project_id``.
    """
    if (task_id is None) == (project_id is None):
        raise ValueError("exactly one of task_id or project_id must be provided")
    req = timelog.TimelogCreateRequest(
        path=timelog.TimelogCreatePath(task_id=task_id or 0, project_id=project_id or 0),
        date=date,
        time=time,
        is_utc=is_utc,
        hours=hours,
        minutes=minutes,
        billable=billable,
        description=description,
        user_id=user_id,
        tag_ids=tag_ids,
    )
    resp = await timelog.timelog_create(engine, req)
    return ack("Timelog created successfully", id=resp.created_id())


async def update_timelog(
    engine: Engine,
    timelog_id: int,
    date: Optional[str] = None,
    time: Optional[str] = None,
    is_utc: Optional[bool] = None,
    hours: Optional[int] = None,
    minutes: Optional[int] = None,
    billable: Optional[bool] = None,
    description: Optional[str] = None,
    user_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    req = timelog.TimelogUpdateRequest(
        path=IDPath(id=timelog_id),
        **present(
            date=date,
            time=time,
            is_utc=is_utc,
            hours=hours,
            minutes=minutes,
            billable=billable,
            description=description,
            user_id=user_id,
            tag_ids=tag_ids,
        ),
    )
    await timelog.timelog_update(engine, req)
    return ack("Timelog updated successfully", id=timelog_id)


async def delete_timelog(engine: Engine, timelog_id: int) -> Dict[str, Any]:
    await timelog.timelog_delete(engine, timelog.TimelogDeleteRequest.new(timelog_id))
    return ack("Timelog deleted successfully", id=timelog_id)


async def get_timelog(engine: Engine, timelog_id: int) -> Dict[str, Any]:
    return dump(
        await timelog.timelog_get(engine, timelog.TimelogGetRequest.new(timelog_id))
    )


async def _list(
    engine: Engine,
    path: timelog.TimelogListPath,
    tag_ids: Optional[List[int]],
    match_all_tags: Optional[bool],
    page: int,
    page_size: int,
) -> Dict[str, Any]:
    req = timelog.TimelogListRequest(
        path=path,
        filters=timelog.TimelogListFilters(
            page=page,
            page_size=page_size,
            **present(tag_ids=tag_ids, match_all_tags=match_all_tags),
        ),
    )
    return dump(await timelog.timelog_list(engine, req))


async def list_timelogs(
    engine: Engine,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine, timelog.TimelogListPath(), tag_ids, match_all_tags, page, page_size
    )


async def list_timelogs_by_project(
    engine: Engine,
    project_id: int,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine,
        timelog.TimelogListPath(project_id=project_id),
        tag_ids,
        match_all_tags,
        page,
        page_size,
    )


async def list_timelogs_by_task(
    engine: Engine,
    task_id: int,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    return await _list(
        engine,
        timelog.TimelogListPath(task_id=task_id),
        tag_ids,
        match_all_tags,
        page,
        page_size,
    )
