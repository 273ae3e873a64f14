import asyncio

import pytest
import respx
from httpx import Response
from twapi.client import Engine
from twapi.errors import MissingBearerTokenError
from twapi.projects.user import UserGetMeRequest
from twapi.session import (
    BearerToken,
    BearerTokenContext,
    current_bearer_token,
    reset_bearer_token,
    use_bearer_token,
)


def test_context_session_without_token_raises():
    session = BearerTokenContext()
    with pytest.raises(MissingBearerTokenError):
        session.server


def test_use_and_reset_bearer_token():
    token = BearerToken("abc", "https://a.test/")
    handle = use_bearer_token(token)
    try:
        assert current_bearer_token() is token
        assert BearerTokenContext().server == "https://a.test"
    finally:
        reset_bearer_token(handle)
    assert current_bearer_token() is None


@pytest.mark.asyncio
async def test_engine_without_context_token_fails_before_sending():
    async with respx.mock(assert_all_called=False) as mock:
        route = mock.get(url__regex=r".*").mock(return_value=Response(200, json={}))
        async with Engine(BearerTokenContext()) as engine:
            with pytest.raises(MissingBearerTokenError):
                await engine.execute(UserGetMeRequest())
        assert not route.called


@pytest.mark.asyncio
async def test_each_task_uses_its_own_token():
    async with respx.mock:
        a = respx.get("https://a.test/projects/api/v3/me.json").mock(
            return_value=Response(200, json={"person": {"id": 1}})
        )
        b = respx.get("https://b.test/projects/api/v3/me.json").mock(
            return_value=Response(200, json={"person": {"id": 2}})
        )

        async with Engine(BearerTokenContext()) as engine:

            async def as_tenant(token: BearerToken) -> int:
                handle = use_bearer_token(token)
                try:
                    resp = await engine.execute(UserGetMeRequest())
                    return resp.user.id
                finally:
                    reset_bearer_token(handle)

            ids = await asyncio.gather(
                as_tenant(BearerToken("ta", "https://a.test")),
                as_tenant(BearerToken("tb", "https://b.test")),
            )

        assert ids == [1, 2]
        assert a.calls[0].request.headers["Authorization"] == "Bearer ta"
        assert b.calls[0].request.headers["Authorization"] == "Bearer tb"
