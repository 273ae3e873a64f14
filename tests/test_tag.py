import json

import pytest
import respx
from httpx import Response
from twapi.errors import HTTPError, MissingIdentifierError
from twapi.projects import tag

SERVER = "https://x.test"
BASE = f"{SERVER}/projects/api/v3"


@pytest.mark.asyncio
async def test_create_tag_scoped_to_project(engine):
    async with respx.mock:
        route = respx.post(f"{BASE}/tags.json").mock(
            return_value=Response(201, json={"tag": {"id": 9, "name": "urgent"}})
        )
        req = tag.TagCreateRequest(name="urgent", project_id=4)
        async with engine:
            resp = await tag.tag_create(engine, req)

    assert resp.created_id() == 9
    assert json.loads(route.calls[0].request.content) == {
        "tag": {"name": "urgent", "projectId": 4}
    }


@pytest.mark.asyncio
async def test_update_get_delete_tag(engine):
    async with respx.mock:
        patch = respx.patch(f"{BASE}/tags/9.json").mock(
            return_value=Response(200, json={"tag": {"id": 9, "name": "later"}})
        )
        respx.get(f"{BASE}/tags/9.json").mock(
            return_value=Response(
                200, json={"tag": {"id": 9, "name": "later", "project": {"id": 4}}}
            )
        )
        respx.delete(f"{BASE}/tags/9.json").mock(return_value=Response(204))
        async with engine:
            updated = await tag.tag_update(
                engine, tag.TagUpdateRequest(path={"id": 9}, name="later")
            )
            got = await tag.tag_get(engine, tag.TagGetRequest.new(9))
            await tag.tag_delete(engine, tag.TagDeleteRequest.new(9))

    assert json.loads(patch.calls[0].request.content) == {"tag": {"name": "later"}}
    assert updated.tag.name == "later"
    assert got.tag.project.id == 4


@pytest.mark.asyncio
async def test_list_tags_query(engine):
    async with respx.mock:
        route = respx.get(f"{BASE}/tags.json").mock(
            return_value=Response(200, json={"tags": [{"id": 9}]})
        )
        req = tag.TagListRequest(
            filters=tag.TagListFilters(item_type="task", project_ids=[1, 2])
        )
        async with engine:
            resp = await tag.tag_list(engine, req)

    params = route.calls[0].request.url.params
    assert params["itemType"] == "task"
    assert params["projectIds"] == "1,2"
    assert resp.tags[0].id == 9


@pytest.mark.asyncio
async def test_tag_not_found(engine):
    async with respx.mock:
        respx.get(f"{BASE}/tags/1.json").mock(
            return_value=Response(404, json={"errors": [{"title": "Not found"}]})
        )
        async with engine:
            with pytest.raises(HTTPError) as exc:
                await tag.tag_get(engine, tag.TagGetRequest.new(1))

    assert exc.value.status_code == 404
    assert "Not found" in exc.value.details


@pytest.mark.asyncio
async def test_create_tag_without_id(engine):
    async with respx.mock:
        respx.post(f"{BASE}/tags.json").mock(
            return_value=Response(201, json={"tag": {"name": "urgent"}})
        )
        async with engine:
            with pytest.raises(MissingIdentifierError):
                await tag.tag_create(engine, tag.TagCreateRequest.new("urgent"))


def test_list_tags_default_paging():
    params = tag.TagListRequest().http_request(SERVER).url.params
    assert params["page"] == "1"
    assert params["pageSize"] == "50"
