"""
Billable and cost rates. Every amount is an integer number of cents.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import ListFilters
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import rates
from twapi.types import Relationship


async def get_user_rates(
    engine: Engine,
    user_id: int,
    include_installation_rate: bool = False,
    include_user_cost: bool = False,
    include_archived_projects: bool = False,
    include_deleted_projects: bool = False,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """A user's rate in every project, optionally with their site-wide rate and cost."""
    req = rates.RateUserGetRequest(
        path=rates.UserIDPath(user_id=user_id),
        filters=rates.RateUserGetFilters(
            page=page,
            page_size=page_size,
            include_installation_rate=include_installation_rate,
            include_user_cost=include_user_cost,
            include_archived_projects=include_archived_projects,
            include_deleted_projects=include_deleted_projects,
        ),
    )
    return dump(await rates.rate_user_get(engine, req))


async def list_installation_user_rates(
    engine: Engine, page: int = 1, page_size: int = 50
) -> Dict[str, Any]:
    req = rates.RateInstallationUserListRequest(
        filters=ListFilters(page=page, page_size=page_size)
    )
    return dump(await rates.rate_installation_user_list(engine, req))


async def get_installation_user_rate(engine: Engine, user_id: int) -> Dict[str, Any]:
    resp = await rates.rate_installation_user_get(
        engine, rates.RateInstallationUserGetRequest.new(user_id)
    )
    return dump(resp)


async def update_installation_user_rate(
    engine: Engine,
    user_id: int,
    rate: Optional[int] = None,
    currency_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Set a user's site-wide rate; no ``rate`` clears it."""
    req = rates.RateInstallationUserUpdateRequest(
        path=rates.UserIDPath(user_id=user_id),
        user_rate=rate,
        **present(currency_id=currency_id),
    )
    await rates.rate_installation_user_update(engine, req)
    return ack("Installation user rate updated successfully", user_id=user_id)


async def bulk_update_installation_user_rates(
    engine: Engine,
    rate: Optional[int] = None,
    ids: Optional[List[int]] = None,
    all: Optional[bool] = None,
    exclude_ids: Optional[List[int]] = None,
    currency_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Set one site-wide rate for the listed users, or for all users except ``exclude_ids``."""
    if not ids and not all:
        raise ValueError("either ids or all must be provided")
    req = rates.RateInstallationUserBulkUpdateRequest(
        user_rate=rate,
        **present(ids=ids, all=all, exclude_ids=exclude_ids, currency_id=currency_id),
    )
    return dump(await rates.rate_installation_user_bulk_update(engine, req))


async def get_project_rate(engine: Engine, project_id: int) -> Dict[str, Any]:
    resp = await rates.rate_project_get(
        engine, rates.RateProjectGetRequest.new(project_id)
    )
    return dump(resp)


async def update_project_rate(
    engine: Engine, project_id: int, rate: Optional[int] = None
) -> Dict[str, Any]:
    """Set the project's default rate; no ``rate`` clears it."""
    await rates.rate_project_update(
        engine, rates.RateProjectUpdateRequest.new(project_id, rate)
    )
    return ack("Project rate updated successfully", project_id=project_id)


async def update_project_and_user_rates(
    engine: Engine,
    project_id: int,
    project_rate: int,
    user_rates: Optional[Dict[int, int]] = None,
) -> Dict[str, Any]:
    """Set the project rate together with per-user rates (user id -> cents)."""
    members = [
        rates.ProjectUserRateRequest(
            user=Relationship(id=uid, type="users"), user_rate=amount
        )
        for uid, amount in (user_rates or {}).items()
    ]
    req = rates.RateProjectAndUsersUpdateRequest(
        path=rates.ProjectIDPath(project_id=project_id),
        project_rate=project_rate,
        **present(user_rates=members or None),
    )
    await rates.rate_project_and_users_update(engine, req)
    return ack("Project and user rates updated successfully", project_id=project_id)


async def list_project_user_rates(
    engine: Engine,
    project_id: int,
    search_term: Optional[str] = None,
    order_by: Optional[str] = None,
    order_mode: str = "asc",
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """Effective rate of every user in a project."""
    req = rates.RateProjectUserListRequest(
        path=rates.ProjectIDPath(project_id=project_id),
        filters=rates.RateListFilters(
            page=page,
            page_size=page_size,
            order_mode=order_mode,
            **present(search_term=search_term, order_by=order_by),
        ),
    )
    return dump(await rates.rate_project_user_list(engine, req))


async def get_project_user_rate(
    engine: Engine, project_id: int, user_id: int
) -> Dict[str, Any]:
    resp = await rates.rate_project_user_get(
        engine, rates.RateProjectUserGetRequest.new(project_id, user_id)
    )
    return dump(resp)


async def update_project_user_rate(
    engine: Engine,
    project_id: int,
    user_id: int,
    rate: Optional[int] = None,
    currency_id: Optional[int] = None,
) -> Dict[str, Any]:
    req = rates.RateProjectUserUpdateRequest(
        path=rates.ProjectUserPath(project_id=project_id, user_id=user_id),
        user_rate=rate,
        **present(currency_id=currency_id),
    )
    return dump(await rates.rate_project_user_update(engine, req))


async def get_project_user_rate_history(
    engine: Engine,
    project_id: int,
    user_id: int,
    order_by: Optional[str] = None,
    order_mode: str = "asc",
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    req = rates.RateProjectUserHistoryGetRequest(
        path=rates.ProjectUserPath(project_id=project_id, user_id=user_id),
        filters=rates.RateListFilters(
            page=page,
            page_size=page_size,
            order_mode=order_mode,
            **present(order_by=order_by),
        ),
    )
    return dump(await rates.rate_project_user_history_get(engine, req))
