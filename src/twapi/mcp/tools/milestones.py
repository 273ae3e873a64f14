from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import milestone
from twapi.types import LegacyUserGroups


def _responsible(
    user_ids: Optional[List[int]],
    company_ids: Optional[List[int]],
    team_ids: Optional[List[int]],
) -> LegacyUserGroups:
    return LegacyUserGroups(
        user_ids=user_ids or [],
        company_ids=company_ids or [],
        team_ids=team_ids or [],
    )


async def create_milestone(
    engine: Engine,
    project_id: int,
    name: str,
    due_date: str,
    assignee_user_ids: Optional[List[int]] = None,
    assignee_company_ids: Optional[List[int]] = None,
    assignee_team_ids: Optional[List[int]] = None,
    description: Optional[str] = None,
    tasklist_ids: Optional[List[int]] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Create a milestone in a project.

    ``due_date`` is ``YYYY-MM-DD``. At least one responsible user, company or
    team should be given.
    """
    req = milestone.MilestoneCreateRequest(
        path=milestone.MilestoneCreatePath(project_id=project_id),
        name=name,
        due_at=due_date,
        assignees=_responsible(
            assignee_user_ids, assignee_company_ids, assignee_team_ids
        ),
        **present(description=description, tasklist_ids=tasklist_ids, tag_ids=tag_ids),
    )
    resp = await milestone.milestone_create(engine, req)
    return ack("Milestone created successfully", id=resp.created_id())


async def update_milestone(
    engine: Engine,
    milestone_id: int,
    name: Optional[str] = None,
    due_date: Optional[str] = None,
    assignee_user_ids: Optional[List[int]] = None,
    assignee_company_ids: Optional[List[int]] = None,
    assignee_team_ids: Optional[List[int]] = None,
    description: Optional[str] = None,
    tasklist_ids: Optional[List[int]] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    assignees = None
    if any(
        ids is not None
        for ids in (assignee_user_ids, assignee_company_ids, assignee_team_ids)
    ):
        assignees = _responsible(
            assignee_user_ids, assignee_company_ids, assignee_team_ids
        )
    req = milestone.MilestoneUpdateRequest(
        path=IDPath(id=milestone_id),
        **present(
            name=name,
            due_at=due_date,
            assignees=assignees,
            description=description,
            tasklist_ids=tasklist_ids,
            tag_ids=tag_ids,
        ),
    )
    await milestone.milestone_update(engine, req)
    return ack("Milestone updated successfully", id=milestone_id)


async def delete_milestone(engine: Engine, milestone_id: int) -> Dict[str, Any]:
    await milestone.milestone_delete(
        engine, milestone.MilestoneDeleteRequest.new(milestone_id)
    )
    return ack("Milestone deleted successfully", id=milestone_id)


async def get_milestone(engine: Engine, milestone_id: int) -> Dict[str, Any]:
    resp = await milestone.milestone_get(
        engine, milestone.MilestoneGetRequest.new(milestone_id)
    )
    return dump(resp)


async def list_milestones(
    engine: Engine,
    project_id: int = 0,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """List milestones; a non-zero ``project_id`` restricts them to one project."""
    req = milestone.MilestoneListRequest(
        path=milestone.MilestoneListPath(project_id=project_id),
        filters=milestone.MilestoneListFilters(
            page=page,
            page_size=page_size,
            **present(
                search_term=search_term,
                tag_ids=tag_ids,
                match_all_tags=match_all_tags,
            ),
        ),
    )
    return dump(await milestone.milestone_list(engine, req))
