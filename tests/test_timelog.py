import json
from datetime import datetime, timedelta, timezone

import pytest
import respx
from httpx import Response
from twapi.errors import MissingIdentifierError, RequestBuildError
from twapi.projects import timelog

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_timelog_in_task_converts_to_utc(engine):
    when = datetime(2024, 1, 31, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    async with respx.mock:
        route = respx.post(f"{BASE}/tasks/7/time.json").mock(
            return_value=Response(201, json={"timelog": {"id": 90}})
        )
        req = timelog.TimelogCreateRequest.in_task(7, when, timedelta(minutes=45))
        async with engine:
            resp = await timelog.timelog_create(engine, req)

    assert resp.created_id() == 90
    assert json.loads(route.calls[0].request.content) == {
        "timelog": {
            "description": None,
            "date": "2024-02-01",
            "time": "01:30:00",
            "isUTC": True,
            "hours": 0,
            "minutes": 45,
            "isBillable": False,
            "userId": None,
            "tagIds": None,
        }
    }


def test_create_timelog_in_project_url():
    req = timelog.TimelogCreateRequest.in_project(
        3, datetime(2024, 1, 1, tzinfo=timezone.utc), timedelta(hours=1)
    )
    assert str(req.http_request(SERVER).url) == f"{BASE}/projects/3/time.json"


def test_create_timelog_without_parent():
    req = timelog.TimelogCreateRequest(date="2024-01-01", time="10:00:00")
    with pytest.raises(RequestBuildError):
        req.http_request(SERVER)


@pytest.mark.asyncio
async def test_update_get_delete_timelog(engine):
    async with respx.mock:
        patch = respx.patch(f"{BASE}/time/90.json").mock(
            return_value=Response(200, json={"timelog": {"id": 90, "minutes": 60}})
        )
        respx.get(f"{BASE}/time/90.json").mock(
            return_value=Response(
                200,
                json={
                    "timelog": {
                        "id": 90,
                        "minutes": 60,
                        "billable": True,
                        "timeLogged": "2024-01-31T10:00:00Z",
                        "task": {"id": 7, "type": "tasks"},
                    }
                },
            )
        )
        respx.delete(f"{BASE}/time/90.json").mock(return_value=Response(204))
        async with engine:
            await timelog.timelog_update(
                engine,
                timelog.TimelogUpdateRequest(path={"id": 90}, minutes=60, billable=True),
            )
            got = await timelog.timelog_get(engine, timelog.TimelogGetRequest.new(90))
            await timelog.timelog_delete(engine, timelog.TimelogDeleteRequest.new(90))

    assert json.loads(patch.calls[0].request.content) == {
        "timelog": {"minutes": 60, "isBillable": True}
    }
    assert got.timelog.billable is True
    assert got.timelog.task.id == 7


@pytest.mark.asyncio
async def test_list_timelogs_by_task_iterates(engine):
    url = f"{BASE}/tasks/7/time.json"
    async with respx.mock:
        route = respx.get(url).mock(
            side_effect=[
                Response(
                    200,
                    json={"timelogs": [{"id": 1}], "meta": {"page": {"hasMore": True}}},
                ),
                Response(
                    200,
                    json={"timelogs": [{"id": 2}], "meta": {"page": {"hasMore": False}}},
                ),
            ]
        )
        req = timelog.TimelogListRequest(path=timelog.TimelogListPath(task_id=7))
        async with engine:
            first = await timelog.timelog_list(engine, req)
            nxt = first.iterate()
            assert nxt.filters.page == 2
            assert nxt.path.task_id == 7
            second = await timelog.timelog_list(engine, nxt)

    assert route.call_count == 2
    assert route.calls[1].request.url.params["page"] == "2"
    assert str(route.calls[1].request.url).startswith(url)
    assert second.iterate() is None


@pytest.mark.asyncio
async def test_create_timelog_without_id(engine):
    async with respx.mock:
        respx.post(f"{BASE}/projects/3/time.json").mock(
            return_value=Response(201, json={"timelog": {}})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await timelog.timelog_create(
                    engine,
                    timelog.TimelogCreateRequest.in_project(
                        3, datetime(2024, 1, 1, tzinfo=timezone.utc), timedelta(hours=1)
                    ),
                )


def test_list_timelogs_default_paging():
    params = timelog.TimelogListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"


@pytest.mark.asyncio
async def test_get_timelog_tolerates_null_fields(engine):
    payload = {
        "timelog": {"id": 1, "description": None, "minutes": None, "tags": None}
    }
    async with respx.mock:
        respx.get(f"{BASE}/time/1.json").mock(return_value=Response(200, json=payload))
        async with engine:
            resp = await timelog.timelog_get(engine, timelog.TimelogGetRequest.new(1))

    assert resp.timelog.description == ""
    assert resp.timelog.minutes == 0
    assert resp.timelog.tags == []
