import json
from datetime import date

import pytest
import respx
from httpx import Response
from twapi.errors import MissingIdentifierError
from twapi.projects import project

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_project_uses_legacy_endpoint(engine):
    async with respx.mock:
        route = respx.post(f"{SERVER}/projects.json").mock(
            return_value=Response(201, json={"id": "1234", "STATUS": "OK"})
        )
        req = project.ProjectCreateRequest(
            name="Launch", start_at=date(2024, 1, 31), tag_ids=[9]
        )
        async with engine:
            resp = await project.project_create(engine, req)

    assert resp.created_id() == 1234
    assert json.loads(route.calls[0].request.content) == {
        "project": {
            "name": "Launch",
            "companyId": 0,
            "start-date": "20240131",
            "tagIds": [9],
        }
    }


@pytest.mark.asyncio
async def test_update_and_delete_project(engine):
    async with respx.mock:
        put = respx.put(f"{SERVER}/projects/5.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        delete = respx.delete(f"{SERVER}/projects/5.json").mock(
            return_value=Response(200, json={"STATUS": "OK"})
        )
        async with engine:
            await project.project_update(
                engine, project.ProjectUpdateRequest(path={"id": 5}, description=None)
            )
            await project.project_delete(engine, project.ProjectDeleteRequest.new(5))

    assert json.loads(put.calls[0].request.content) == {
        "project": {"description": None}
    }
    assert delete.called


@pytest.mark.asyncio
async def test_get_project(engine):
    async with respx.mock:
        respx.get(f"{BASE}/projects/5.json").mock(
            return_value=Response(
                200,
                json={
                    "project": {
                        "id": 5,
                        "name": "Launch",
                        "company": {"id": 2, "type": "companies"},
                        "projectOwner": {"id": 8, "type": "users"},
                        "status": "active",
                    }
                },
            )
        )
        async with engine:
            resp = await project.project_get(engine, project.ProjectGetRequest.new(5))

    assert resp.project.name == "Launch"
    assert resp.project.owner.id == 8
    assert resp.project.company.id == 2


@pytest.mark.asyncio
async def test_list_projects_query(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/projects.json").mock(
            return_value=Response(200, json={"projects": [{"id": 1}]})
        )
        req = project.ProjectListRequest(
            filters=project.ProjectListFilters(tag_ids=[1, 2], match_all_tags=False)
        )
        async with engine:
            resp = await project.project_list(engine, req)

    params = route.calls[0].request.url.params
    assert params["projectTagIds"] == "1,2"
    assert params["matchAllProjectTags"] == "false"
    assert "searchTerm" not in params
    assert resp.has_more is False


@pytest.mark.asyncio
async def test_create_project_without_id(engine):
    async with respx.mock:
        respx.post(f"{SERVER}/projects.json").mock(
            return_value=Response(201, json={"id": "0", "STATUS": "OK"})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await project.project_create(
                    engine, project.ProjectCreateRequest.new("Apollo")
                )


def test_list_projects_default_paging():
    params = project.ProjectListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"
