import json

import pytest
import respx
from httpx import Response
from twapi.mcp.tools import companies, projects, rates, tasks, teams, timelogs

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_company_tool_maps_arguments(engine):
    async with respx.mock:
        route = respx.post(f"{BASE}/companies.json").mock(
            return_value=Response(201, json={"company": {"id": 42}})
        )
        async with engine:
            result = await companies.create_company(
                engine, "Acme", city="Cork", manager_id=3, tag_ids=[1]
            )

    assert result == {"message": "Company created successfully", "id": 42}
    assert json.loads(route.calls[0].request.content) == {
        "company": {"name": "Acme", "city": "Cork", "clientManagedBy": 3, "tagIds": [1]}
    }


@pytest.mark.asyncio
async def test_get_company_tool_returns_json_safe_dict(engine):
    async with respx.mock:
        respx.get(f"{BASE}/companies/7.json").mock(
            return_value=Response(
                200,
                json={"company": {"id": 7, "name": "Acme", "createdAt": "2024-01-31T10:00:00Z"}},
            )
        )
        async with engine:
            result = await companies.get_company(engine, 7)

    assert result["company"]["name"] == "Acme"
    assert result["company"]["created_at"].startswith("2024-01-31T10:00:00")


@pytest.mark.asyncio
async def test_add_project_member_requires_users(engine):
    with pytest.raises(ValueError):
        await projects.add_project_member(engine, 4, [])


@pytest.mark.asyncio
async def test_create_task_tool_builds_assignees(engine):
    async with respx.mock:
        route = respx.post(f"{BASE}/tasklists/9/tasks.json").mock(
            return_value=Response(201, json={"task": {"id": 100}})
        )
        async with engine:
            result = await tasks.create_task(
                engine, 9, "Write docs", due_date="2024-03-01", assignee_user_ids=[5]
            )

    assert result["id"] == 100
    body = json.loads(route.calls[0].request.content)["task"]
    assert body["name"] == "Write docs"
    assert body["dueAt"] == "2024-03-01"
    assert body["assignees"] == {"userIds": [5], "companyIds": [], "teamIds": []}


@pytest.mark.asyncio
async def test_create_timelog_tool_needs_one_parent(engine):
    with pytest.raises(ValueError):
        await timelogs.create_timelog(engine, "2024-01-31", "10:00:00")
    with pytest.raises(ValueError):
        await timelogs.create_timelog(
            engine, "2024-01-31", "10:00:00", task_id=1, project_id=2
        )


@pytest.mark.asyncio
async def test_list_timelogs_by_task_tool(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/tasks/7/time.json").mock(
            return_value=Response(
                200,
                json={"timelogs": [{"id": 1, "minutes": 30}], "meta": {"page": {"hasMore": True}}},
            )
        )
        async with engine:
            result = await timelogs.list_timelogs_by_task(engine, 7, page_size=10)

    assert route.calls[0].request.url.params["pageSize"] == "10"
    assert result["timelogs"][0]["minutes"] == 30
    assert result["meta"]["page"]["has_more"] is True


@pytest.mark.asyncio
async def test_list_teams_tool_reports_header_paging(engine):
    async with respx.mock:
        respx.get(f"{SERVER}/companies/3/teams.json").mock(
            return_value=Response(
                200, json={"teams": [{"id": "1"}]}, headers={"X-Page": "1", "X-Pages": "3"}
            )
        )
        async with engine:
            result = await teams.list_teams_by_company(engine, 3)

    assert result["teams"][0]["id"] == 1
    assert result["has_more"] is True


@pytest.mark.asyncio
async def test_update_project_and_user_rates_tool(engine):
    async with respx.mock:
        route = respx.put(f"{BASE}/rates/projects/4/actions/update").mock(
            return_value=Response(204)
        )
        async with engine:
            result = await rates.update_project_and_user_rates(
                engine, 4, 3000, user_rates={7: 3500}
            )

    assert result["project_id"] == 4
    assert json.loads(route.calls[0].request.content) == {
        "projectRate": 3000,
        "userRates": [{"user": {"id": 7, "type": "users"}, "userRate": 3500}],
    }


@pytest.mark.asyncio
async def test_bulk_rate_tool_needs_a_target(engine):
    with pytest.raises(ValueError):
        await rates.bulk_update_installation_user_rates(engine, rate=100)
