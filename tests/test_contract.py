import json
from typing import ClassVar, FrozenSet, List, Optional

import httpx
import pytest
from pydantic import Field
from twapi.contract import (
    CreateResponse,
    HeaderPagedListResponse,
    IDPath,
    IncludeFilters,
    ListFilters,
    ListResponse,
    Model,
    NoContentResponse,
    QueryParams,
    Request,
    Response,
)
from twapi.errors import DecodeError, EncodingError, HTTPError, MissingIdentifierError

SERVER = "https://x.test"


class WidgetResponse(Response):
    operation = "retrieve widget"

    name: str = ""


class WidgetCreateResponse(CreateResponse):
    operation = "create widget"

    id: int = 0

    def created_id(self) -> int:
        return self.id


class WidgetFilters(ListFilters):
    search_term: str = ""
    include: List[str] = Field(default_factory=list)

    def query(self) -> QueryParams:
        params: QueryParams = []
        if self.search_term:
            params.append(("searchTerm", self.search_term))
        params.extend(("include", item) for item in self.include)
        return params + self.paging_params()


class WidgetListResponse(ListResponse):
    operation = "list widgets"

    widgets: List[dict] = Field(default_factory=list)


class WidgetListRequest(Request):
    operation = "list widgets"
    response_class = WidgetListResponse

    filters: WidgetFilters = Field(default_factory=WidgetFilters)

    def url(self, server: str) -> str:
        return f"{server}/widgets.json"


class WidgetCreateRequest(Request):
    method = "POST"
    envelope = "widget"
    has_body = True
    always_send: ClassVar[FrozenSet[str]] = frozenset({"name"})
    operation = "create widget"
    response_class = WidgetCreateResponse

    name: str = ""
    color: Optional[str] = None
    owner_id: Optional[int] = Field(None, alias="ownerId")
    extra: Optional[object] = None

    def url(self, server: str) -> str:
        return f"{server}/widgets.json"


class WidgetUpdateRequest(Request):
    method = "PUT"
    has_body = True
    operation = "update widget"
    response_class = NoContentResponse

    path: IDPath
    color: Optional[str] = None

    def url(self, server: str) -> str:
        return f"{server}/widgets/{self.path.id}.json"


def _json(resp_body: Optional[bytes]):
    return json.loads(resp_body) if resp_body else None


# --- request building ------------------------------------------------------ #


def test_only_explicitly_set_fields_are_sent():
    req = WidgetCreateRequest(color="red")
    http = req.http_request(SERVER)

    assert http.method == "POST"
    assert str(http.url) == "https://x.test/widgets.json"
    assert http.headers["Content-Type"] == "application/json"
    # name is always sent, owner_id was never set
    assert _json(http.content) == {"widget": {"name": "", "color": "red"}}


def test_explicit_none_is_sent_as_null():
    req = WidgetCreateRequest(name="w", owner_id=None)
    assert _json(req.http_request(SERVER).content) == {
        "widget": {"name": "w", "ownerId": None}
    }


def test_unwrapped_body_and_path_fields_are_not_sent():
    req = WidgetUpdateRequest(path=IDPath(id=9), color="blue")
    http = req.http_request(SERVER + "/")
    assert str(http.url) == "https://x.test/widgets/9.json"
    assert _json(http.content) == {"color": "blue"}


def test_requests_without_body_send_nothing():
    http = WidgetListRequest().http_request(SERVER)
    assert http.content == b""
    assert "Content-Type" not in http.headers


def test_query_params_sorted_with_repeated_keys_in_order():
    req = WidgetListRequest(
        filters=WidgetFilters(search_term="a b", include=["users", "teams"], page=2)
    )
    http = req.http_request(SERVER)
    assert list(http.url.params.multi_items()) == [
        ("include", "users"),
        ("include", "teams"),
        ("page", "2"),
        ("pageSize", "50"),
        ("searchTerm", "a b"),
    ]


def test_zero_paging_is_omitted():
    req = WidgetListRequest(filters=WidgetFilters(page=0, page_size=0))
    assert "page" not in req.http_request(SERVER).url.params


def test_include_filters_repeat_the_key():
    assert IncludeFilters(include=["a", "b"]).query() == [
        ("include", "a"),
        ("include", "b"),
    ]


def test_unencodable_body_raises_encoding_error():
    req = WidgetCreateRequest(name="w", extra=object())
    with pytest.raises(EncodingError):
        req.http_request(SERVER)


def test_built_through_client_keeps_client_headers():
    client = httpx.AsyncClient(headers={"User-Agent": "ua-test"})
    http = WidgetListRequest().http_request(SERVER, client)
    assert http.headers["User-Agent"] == "ua-test"


# --- response handling ----------------------------------------------------- #


def test_status_mismatch_raises_http_error_without_decoding():
    resp = httpx.Response(404, text="not json at all")
    with pytest.raises(HTTPError) as exc:
        WidgetResponse.handle_http_response(resp)

    assert exc.value.status_code == 404
    assert exc.value.details == "not json at all"
    assert str(exc.value) == "failed to retrieve widget (404): not json at all"


def test_http_error_without_body_says_so():
    resp = httpx.Response(500, headers={"X-Trace": "abc"})
    with pytest.raises(HTTPError) as exc:
        WidgetResponse.handle_http_response(resp)

    assert exc.value.details == "no response body"
    assert exc.value.headers["x-trace"] == "abc"
    assert str(exc.value) == "failed to retrieve widget (500): no response body"


def test_http_error_keeps_json_body():
    resp = httpx.Response(422, json={"errors": [{"detail": "bad"}]})
    with pytest.raises(HTTPError) as exc:
        WidgetResponse.handle_http_response(resp)
    assert exc.value.response_json == {"errors": [{"detail": "bad"}]}


def test_decode_failure_names_operation():
    resp = httpx.Response(200, text="<html>")
    with pytest.raises(DecodeError) as exc:
        WidgetResponse.handle_http_response(resp)
    assert "retrieve widget" in str(exc.value)


def test_wrong_field_type_is_decode_error():
    resp = httpx.Response(200, json={"name": {"nested": True}})
    with pytest.raises(DecodeError):
        WidgetResponse.handle_http_response(resp)


def test_non_object_json_is_decode_error():
    with pytest.raises(DecodeError):
        WidgetResponse.handle_http_response(httpx.Response(200, json=[1, 2]))


def test_empty_success_body_decodes_to_defaults():
    result = WidgetResponse.handle_http_response(httpx.Response(200))
    assert result.name == ""


def test_create_response_requires_identifier():
    with pytest.raises(MissingIdentifierError) as exc:
        WidgetCreateResponse.handle_http_response(httpx.Response(201, json={"id": 0}))
    assert "create widget" in str(exc.value)

    ok = WidgetCreateResponse.handle_http_response(httpx.Response(201, json={"id": 5}))
    assert ok.created_id() == 5


def test_no_content_response_ignores_body():
    assert NoContentResponse.handle_http_response(httpx.Response(204)) is not None
    with pytest.raises(HTTPError):
        NoContentResponse.handle_http_response(httpx.Response(200, json={}))


# --- pagination ------------------------------------------------------------ #


def _page(has_more: bool) -> WidgetListResponse:
    return WidgetListResponse.handle_http_response(
        httpx.Response(200, json={"widgets": [], "meta": {"page": {"hasMore": has_more}}})
    )


def test_iterate_returns_next_page_with_same_filters():
    req = WidgetListRequest(filters=WidgetFilters(search_term="x", page=3))
    page = _page(True)
    page.set_request(req)

    nxt = page.iterate()
    assert nxt is not req
    assert nxt.filters.page == 4
    assert nxt.filters.search_term == "x"
    assert req.filters.page == 3


def test_iterate_stops_without_more_pages_or_request():
    last = _page(False)
    last.set_request(WidgetListRequest())
    assert last.iterate() is None

    detached = _page(True)
    assert detached.iterate() is None


class HeaderPaged(HeaderPagedListResponse):
    operation = "list legacy widgets"


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"X-Page": "1", "X-Pages": "3"}, True),
        ({"X-Page": "3", "X-Pages": "3"}, False),
        ({}, False),
        ({"X-Page": "x", "X-Pages": "2"}, True),
    ],
)
def test_header_paging(headers, expected):
    result = HeaderPaged.handle_http_response(httpx.Response(200, json={}, headers=headers))
    assert result.has_more is expected


class Gadget(Model):
    name: str = Field("", alias="displayName")
    count: int = 7
    tags: List[int] = Field(default_factory=list)
    note: Optional[str] = "unset"


def test_null_on_plain_fields_falls_back_to_defaults():
    g = Gadget.model_validate(
        {"displayName": None, "count": None, "tags": None, "note": None}
    )
    assert g.name == ""
    assert g.count == 7
    assert g.tags == []
    assert g.note is None


def test_null_on_plain_field_by_name():
    assert Gadget.model_validate({"name": None}).name == ""


def test_response_with_null_fields_decodes():
    resp = httpx.Response(200, json={"name": None})
    assert WidgetResponse.handle_http_response(resp).name == ""
