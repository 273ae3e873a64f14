from __future__ import annotations

from typing import Any, Dict, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import user


async def create_user(
    engine: Engine,
    first_name: str,
    last_name: str,
    email: str,
    title: Optional[str] = None,
    admin: Optional[bool] = None,
    type: Optional[str] = None,
    company_id: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create a user.

    ``type`` is one of account, collaborator or contact.
    """
    req = user.UserCreateRequest(
        first_name=first_name,
        last_name=last_name,
        email=email,
        **present(title=title, admin=admin, type=type, company_id=company_id),
    )
    resp = await user.user_create(engine, req)
    return ack("User created successfully", id=resp.created_id())


async def update_user(
    engine: Engine,
    user_id: int,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    title: Optional[str] = None,
    admin: Optional[bool] = None,
    type: Optional[str] = None,
    company_id: Optional[int] = None,
) -> Dict[str, Any]:
    req = user.UserUpdateRequest(
        path=IDPath(id=user_id),
        **present(
            first_name=first_name,
            last_name=last_name,
            email=email,
            title=title,
            admin=admin,
            type=type,
            company_id=company_id,
        ),
    )
    await user.user_update(engine, req)
    return ack("User updated successfully", id=user_id)


async def delete_user(engine: Engine, user_id: int) -> Dict[str, Any]:
    await user.user_delete(engine, user.UserDeleteRequest.new(user_id))
    return ack("User deleted successfully", id=user_id)


async def get_user(engine: Engine, user_id: int) -> Dict[str, Any]:
    return dump(await user.user_get(engine, user.UserGetRequest.new(user_id)))


async def get_user_me(engine: Engine) -> Dict[str, Any]:
    """The user the server is authenticated as."""
    return dump(await user.user_get_me(engine, user.UserGetMeRequest()))


async def list_users(
    engine: Engine,
    search_term: Optional[str] = None,
    type: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    req = user.UserListRequest(
        filters=user.UserListFilters(
            page=page, page_size=page_size, **present(search_term=search_term, type=type)
        )
    )
    return dump(await user.user_list(engine, req))


async def list_users_by_project(
    engine: Engine,
    project_id: int,
    search_term: Optional[str] = None,
    type: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    req = user.UserListRequest(
        path=user.UserListPath(project_id=project_id),
        filters=user.UserListFilters(
            page=page, page_size=page_size, **present(search_term=search_term, type=type)
        ),
    )
    return dump(await user.user_list(engine, req))
