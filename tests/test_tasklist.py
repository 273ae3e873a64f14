import json

import pytest
import respx
from httpx import Response
from twapi.errors import MissingIdentifierError
from twapi.projects import tasklist

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_tasklist_uses_todo_list_envelope(engine):
    async with respx.mock:
        route = respx.post(f"{SERVER}/projects/4/tasklists.json").mock(
            return_value=Response(201, json={"tasklistId": "77"})
        )
        req = tasklist.TasklistCreateRequest(
            path=tasklist.TasklistCreatePath(project_id=4), name="Sprint", milestone_id=2
        )
        async with engine:
            resp = await tasklist.tasklist_create(engine, req)

    assert resp.created_id() == 77
    assert json.loads(route.calls[0].request.content) == {
        "todo-list": {"name": "Sprint", "milestone-Id": 2}
    }


@pytest.mark.asyncio
async def test_create_tasklist_missing_identifier(engine):
    async with respx.mock:
        respx.post(f"{SERVER}/projects/4/tasklists.json").mock(
            return_value=Response(201, json={"STATUS": "OK"})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await tasklist.tasklist_create(
                    engine, tasklist.TasklistCreateRequest.new(4, "Sprint")
                )


@pytest.mark.asyncio
async def test_update_delete_get_tasklist(engine):
    async with respx.mock:
        put = respx.put(f"{SERVER}/tasklists/77.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        respx.delete(f"{SERVER}/tasklists/77.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        respx.get(f"{BASE}/tasklists/77.json").mock(
            return_value=Response(
                200,
                json={"tasklist": {"id": 77, "name": "Sprint", "project": {"id": 4}}},
            )
        )
        async with engine:
            await tasklist.tasklist_update(
                engine, tasklist.TasklistUpdateRequest(path={"id": 77}, name="Next")
            )
            await tasklist.tasklist_delete(engine, tasklist.TasklistDeleteRequest.new(77))
            got = await tasklist.tasklist_get(engine, tasklist.TasklistGetRequest.new(77))

    assert json.loads(put.calls[0].request.content) == {"todo-list": {"name": "Next"}}
    assert got.tasklist.project.id == 4


@pytest.mark.asyncio
async def test_list_tasklists_by_project(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/4/tasklists.json").mock(
            return_value=Response(200, json={"tasklists": [{"id": 77}]})
        )
        req = tasklist.TasklistListRequest(
            path=tasklist.TasklistListPath(project_id=4),
            filters=tasklist.TasklistListFilters(search_term="spr"),
        )
        async with engine:
            resp = await tasklist.tasklist_list(engine, req)

    assert route.calls[0].request.url.params["searchTerm"] == "spr"
    assert resp.tasklists[0].id == 77


def test_list_tasklists_default_paging():
    params = tasklist.TasklistListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"
