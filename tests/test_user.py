import json

import pytest
import respx
from httpx import Response
from twapi.errors import MissingIdentifierError
from twapi.projects import user

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_user_uses_legacy_person_keys(engine):
    async with respx.mock:
        route = respx.post(f"{SERVER}/people.json").mock(
            return_value=Response(201, json={"id": "55", "STATUS": "OK"})
        )
        req = user.UserCreateRequest(
            first_name="Ann",
            last_name="Lee",
            email="ann@example.com",
            admin=True,
            type="collaborator",
            company_id=3,
        )
        async with engine:
            resp = await user.user_create(engine, req)

    assert resp.created_id() == 55
    assert json.loads(route.calls[0].request.content) == {
        "person": {
            "first-name": "Ann",
            "last-name": "Lee",
            "email-address": "ann@example.com",
            "administrator": True,
            "user-type": "collaborator",
            "company-id": 3,
        }
    }


@pytest.mark.asyncio
async def test_update_and_delete_user(engine):
    async with respx.mock:
        put = respx.put(f"{SERVER}/people/55.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        delete = respx.delete(f"{SERVER}/people/55.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        async with engine:
            await user.user_update(
                engine, user.UserUpdateRequest(path={"id": 55}, title="CTO")
            )
            await user.user_delete(engine, user.UserDeleteRequest.new(55))

    assert json.loads(put.calls[0].request.content) == {"person": {"title": "CTO"}}
    assert delete.called


@pytest.mark.asyncio
async def test_get_user_decodes_person_and_money(engine):
    payload = {
        "person": {
            "id": 55,
            "firstName": "Ann",
            "isAdmin": True,
            "userCost": 1250,
            "userRate": {"amount": 5000, "currency": {"id": 1}},
            "company": {"id": 3, "type": "companies"},
        }
    }
    async with respx.mock:
        respx.get(f"{BASE}/people/55.json").mock(return_value=Response(200, json=payload))
        async with engine:
            resp = await user.user_get(engine, user.UserGetRequest.new(55))

    u = resp.user
    assert u.first_name == "Ann"
    assert u.admin is True
    assert u.cost == 1250
    assert u.cost.value == 12.5
    assert u.rate == 5000
    assert u.company.id == 3


@pytest.mark.asyncio
async def test_get_me(engine):
    async with respx.mock:
        respx.get(f"{BASE}/me.json").mock(
            return_value=Response(200, json={"person": {"id": 9, "email": "me@x.test"}})
        )
        async with engine:
            resp = await user.user_get_me(engine, user.UserGetMeRequest())

    assert resp.user.id == 9


@pytest.mark.asyncio
async def test_list_users_in_project(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/4/people.json").mock(
            return_value=Response(200, json={"people": [{"id": 1}, {"id": 2}]})
        )
        req = user.UserListRequest(
            path=user.UserListPath(project_id=4),
            filters=user.UserListFilters(type="account", search_term="a"),
        )
        async with engine:
            resp = await user.user_list(engine, req)

    params = route.calls[0].request.url.params
    assert params["userType"] == "account"
    assert params["searchTerm"] == "a"
    assert [u.id for u in resp.users] == [1, 2]


@pytest.mark.asyncio
async def test_create_user_without_id(engine):
    async with respx.mock:
        respx.post(f"{SERVER}/people.json").mock(
            return_value=Response(201, json={"id": None})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await user.user_create(
                    engine, user.UserCreateRequest.new("Ann", "Lee", "ann@example.com")
                )


def test_list_users_default_paging():
    params = user.UserListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"
