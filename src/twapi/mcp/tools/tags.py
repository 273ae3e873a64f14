from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import tag


async def create_tag(
    engine: Engine, name: str, project_id: Optional[int] = None
) -> Dict[str, Any]:
    """Create a tag; a ``project_id`` scopes it to that project only."""
    req = tag.TagCreateRequest(name=name, **present(project_id=project_id))
    resp = await tag.tag_create(engine, req)
    return ack("Tag created successfully", id=resp.created_id())


async def update_tag(
    engine: Engine,
    tag_id: int,
    name: Optional[str] = None,
    project_id: Optional[int] = None,
) -> Dict[str, Any]:
    req = tag.TagUpdateRequest(
        path=IDPath(id=tag_id), **present(name=name, project_id=project_id)
    )
    await tag.tag_update(engine, req)
    return ack("Tag updated successfully", id=tag_id)


async def delete_tag(engine: Engine, tag_id: int) -> Dict[str, Any]:
    await tag.tag_delete(engine, tag.TagDeleteRequest.new(tag_id))
    return ack("Tag deleted successfully", id=tag_id)


async def get_tag(engine: Engine, tag_id: int) -> Dict[str, Any]:
    return dump(await tag.tag_get(engine, tag.TagGetRequest.new(tag_id)))


async def list_tags(
    engine: Engine,
    search_term: Optional[str] = None,
    item_type: Optional[str] = None,
    project_ids: Optional[List[int]] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """
    List tags.

    ``item_type`` narrows to tags used on one kind of item: project, task,
    tasklist, milestone, message, timelog, notebook, file, company or link.
    """
    filters = tag.TagListFilters(
        page=page,
        page_size=page_size,
        **present(
            search_term=search_term, item_type=item_type, project_ids=project_ids
        ),
    )
    return dump(await tag.tag_list(engine, tag.TagListRequest(filters=filters)))
