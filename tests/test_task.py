import json
from datetime import date

import pytest
import respx
from httpx import Response
from twapi.errors import MissingIdentifierError
from twapi.projects import task
from twapi.types import UserGroups

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_task_in_tasklist(engine):
    async with respx.mock:
        route = respx.post(f"{BASE}/tasklists/3/tasks.json").mock(
            return_value=Response(201, json={"task": {"id": 11, "name": "Write"}})
        )
        req = task.TaskCreateRequest(
            path=task.TaskCreatePath(tasklist_id=3),
            name="Write",
            due_at=date(2024, 2, 1),
            assignees=UserGroups(user_ids=[1], team_ids=[4]),
        )
        async with engine:
            resp = await task.task_create(engine, req)

    assert resp.created_id() == 11
    assert json.loads(route.calls[0].request.content) == {
        "task": {
            "name": "Write",
            "dueAt": "2024-02-01",
            "assignees": {"userIds": [1], "companyIds": [], "teamIds": [4]},
        }
    }


@pytest.mark.asyncio
async def test_update_task_can_move_tasklist(engine):
    async with respx.mock:
        route = respx.put(f"{BASE}/tasks/11.json").mock(
            return_value=Response(200, json={"task": {"id": 11}})
        )
        req = task.TaskUpdateRequest(path={"id": 11}, tasklist_id=8, progress=50)
        async with engine:
            await task.task_update(engine, req)

    assert json.loads(route.calls[0].request.content) == {
        "task": {"tasklistId": 8, "progress": 50}
    }


@pytest.mark.asyncio
async def test_get_and_delete_task(engine):
    async with respx.mock:
        respx.get(f"{BASE}/tasks/11.json").mock(
            return_value=Response(
                200,
                json={
                    "task": {
                        "id": 11,
                        "name": "Write",
                        "estimateMinutes": 90,
                        "tasklist": {"id": 3, "type": "tasklists"},
                        "assignees": [{"id": 1, "type": "users"}],
                        "dueDate": "2024-02-01T00:00:00Z",
                    }
                },
            )
        )
        delete = respx.delete(f"{BASE}/tasks/11.json").mock(
            return_value=Response(200)
        )
        async with engine:
            got = await task.task_get(engine, task.TaskGetRequest.new(11))
            await task.task_delete(engine, task.TaskDeleteRequest.new(11))

    assert got.task.estimated_minutes == 90
    assert got.task.tasklist.id == 3
    assert got.task.assignees[0].type == "users"
    assert delete.called


@pytest.mark.parametrize(
    "path,url",
    [
        (task.TaskListPath(), f"{BASE}/tasks.json"),
        (task.TaskListPath(project_id=2), f"{BASE}/projects/2/tasks.json"),
        (task.TaskListPath(tasklist_id=3, project_id=2), f"{BASE}/tasklists/3/tasks.json"),
    ],
)
def test_task_list_scope(path, url):
    http = task.TaskListRequest(path=path).http_request(SERVER)
    assert str(http.url).split("?")[0] == url


@pytest.mark.asyncio
async def test_list_tasks_by_project_query(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/2/tasks.json").mock(
            return_value=Response(200, json={"tasks": [{"id": 1}, {"id": 2}]})
        )
        req = task.TaskListRequest(
            path=task.TaskListPath(project_id=2),
            filters=task.TaskListFilters(search_term="bug", tag_ids=[7], match_all_tags=True),
        )
        async with engine:
            resp = await task.task_list(engine, req)

    params = route.calls[0].request.url.params
    assert params["searchTerm"] == "bug"
    assert params["tagIds"] == "7"
    assert params["matchAllTags"] == "true"
    assert len(resp.tasks) == 2


@pytest.mark.asyncio
async def test_create_task_without_id(engine):
    async with respx.mock:
        respx.post(f"{BASE}/tasklists/9/tasks.json").mock(
            return_value=Response(201, json={"task": {"id": 0}})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await task.task_create(engine, task.TaskCreateRequest.new(9, "Write docs"))


def test_list_tasks_default_paging():
    params = task.TaskListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"
