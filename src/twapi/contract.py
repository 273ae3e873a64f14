"""
Request/response contract shared by every endpoint.

A request knows how to become an ``httpx.Request`` against a server; its
response class knows which status code counts as success and how to decode the
body. List responses remember the request that produced them so the next page
can be derived without the caller tracking cursors.
"""

from __future__ import annotations

import json
from types import UnionType
from typing import (
    Annotated,
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    List,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    model_validator,
)
from pydantic_core import PydanticSerializationError

from .errors import DecodeError, EncodingError, HTTPError, MissingIdentifierError

V3 = "/projects/api/v3"

# Fields that carry URL parts rather than body content.
PARAM_FIELDS: FrozenSet[str] = frozenset({"path", "filters"})

QueryParams = List[Tuple[str, str]]


def join_ids(ids: List[int]) -> str:
    return ",".join(str(i) for i in ids)


def bool_param(value: bool) -> str:
    return "true" if value else "false"


def _accepts_none(annotation: Any) -> bool:
    if annotation is None or annotation is Any or annotation is type(None):
        return True
    origin = get_origin(annotation)
    if origin is Annotated:
        return _accepts_none(get_args(annotation)[0])
    if origin is Union or origin is UnionType:
        return any(_accepts_none(arg) for arg in get_args(annotation))
    return False


class Model(BaseModel):
    """
    Base for API entities: tolerant of unknown keys, populated by alias or name.

    A ``null`` on a field that is not Optional leaves the field at its default
    instead of failing the decode.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        dropped = set()
        for name, field in cls.model_fields.items():
            if _accepts_none(field.annotation):
                continue
            for key in (name, field.alias):
                if key is not None and key in data and data[key] is None:
                    dropped.add(key)
        if not dropped:
            return data
        return {k: v for k, v in data.items() if k not in dropped}


class IDPath(BaseModel):
    id: int


class ListFilters(BaseModel):
    """Paging shared by every list filter; zero or negative values are not sent."""

    page: int = 1
    page_size: int = 50

    model_config = ConfigDict(extra="forbid")

    def paging_params(self) -> QueryParams:
        params: QueryParams = []
        if self.page > 0:
            params.append(("page", str(self.page)))
        if self.page_size > 0:
            params.append(("pageSize", str(self.page_size)))
        return params

    def query(self) -> QueryParams:
        return self.paging_params()


class IncludeFilters(BaseModel):
    """Side-loads related data; each entry becomes its own ``include`` parameter."""

    include: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def query(self) -> QueryParams:
        return [("include", item) for item in self.include]


class Response(Model):
    expected_status: ClassVar[int] = 200
    decode_body: ClassVar[bool] = True
    # "create company" -> "failed to create company"
    operation: ClassVar[str] = ""

    @classmethod
    def handle_http_response(cls, resp: httpx.Response) -> "Response":
        if resp.status_code != cls.expected_status:
            raise HTTPError.from_response(resp, f"failed to {cls.operation}")

        payload = decode_json(resp, cls.operation) if cls.decode_body else {}
        try:
            result = cls.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"failed to decode {cls.operation} response: {exc}"
            ) from exc

        result.inspect_http_response(resp)
        result.validate_response()
        return result

    def inspect_http_response(self, resp: httpx.Response) -> None:
        """Hook for responses that read metadata from headers."""

    def validate_response(self) -> None:
        """Hook for post-decode validation."""


class CreateResponse(Response):
    """Create responses must carry a non-zero identifier for the new entity."""

    expected_status = 201

    def created_id(self) -> int:
        raise NotImplementedError

    def validate_response(self) -> None:
        if not self.created_id():
            raise MissingIdentifierError(
                f"{self.operation} response does not contain a valid identifier"
            )


class NoContentResponse(Response):
    expected_status = 204
    decode_body = False


class PageMeta(Model):
    page_offset: int = Field(0, alias="pageOffset")
    page_size: int = Field(0, alias="pageSize")
    count: int = 0
    has_more: bool = Field(False, alias="hasMore")


class ListMeta(Model):
    page: PageMeta = Field(default_factory=PageMeta)


class ListResponse(Response):
    """A page of results that can derive the request for the following page."""

    meta: ListMeta = Field(default_factory=ListMeta)

    _request: Any = PrivateAttr(default=None)

    def set_request(self, request: "Request") -> None:
        self._request = request

    @property
    def request(self) -> Optional["Request"]:
        return self._request

    @property
    def has_more(self) -> bool:
        return self.meta.page.has_more

    def iterate(self) -> Optional["Request"]:
        """Return the request for the next page, or ``None`` when done."""
        if self._request is None or not self.has_more:
            return None
        filters = self._request.filters
        next_filters = filters.model_copy(update={"page": filters.page + 1})
        return self._request.model_copy(update={"filters": next_filters})


class HeaderPagedListResponse(ListResponse):
    """List response paged through ``X-Page``/``X-Pages`` headers (legacy API)."""

    _header_has_more: bool = PrivateAttr(default=False)

    def inspect_http_response(self, resp: httpx.Response) -> None:
        page = _header_int(resp, "X-Page")
        pages = _header_int(resp, "X-Pages")
        self._header_has_more = pages > page

    @property
    def has_more(self) -> bool:
        return self._header_has_more


class Request(BaseModel):
    """
    Base for every operation's request.

    Subclasses declare the HTTP ``method``, an optional ``envelope`` key wrapping
    the body, and implement :meth:`url`. Body fields are the model's own fields
    (minus ``path``/``filters``); only fields the caller explicitly set are sent,
    plus any listed in ``always_send``.
    """

    method: ClassVar[str] = "GET"
    envelope: ClassVar[Optional[str]] = None
    has_body: ClassVar[bool] = False
    always_send: ClassVar[FrozenSet[str]] = frozenset()
    operation: ClassVar[str] = ""
    response_class: ClassVar[Type[Response]]

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def url(self, server: str) -> str:
        raise NotImplementedError

    def query(self) -> QueryParams:
        filters = getattr(self, "filters", None)
        if filters is None:
            return []
        return filters.query()

    def payload(self) -> Dict[str, Any]:
        data = self.model_dump(
            mode="json", by_alias=True, exclude_unset=True, exclude=set(PARAM_FIELDS)
        )
        missing = self.always_send - self.model_fields_set
        if missing:
            data.update(self.model_dump(mode="json", by_alias=True, include=set(missing)))
        return data

    def encode_body(self) -> Optional[bytes]:
        if not self.has_body:
            return None
        try:
            payload: Any = self.payload()
            if self.envelope:
                payload = {self.envelope: payload}
            return json.dumps(payload).encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise EncodingError(
                f"failed to encode {self.operation} request: {exc}"
            ) from exc

    def http_request(
        self, server: str, http: Optional[httpx.AsyncClient] = None
    ) -> httpx.Request:
        """
        Build the outbound request against ``server``.

        When ``http`` is given the request is built through it so the client's
        default headers and timeouts apply.
        """
        url = self.url(server.rstrip("/"))
        # Stable sort: repeated keys keep their relative order.
        params = sorted(self.query(), key=lambda kv: kv[0])
        content = self.encode_body()
        headers = {"Content-Type": "application/json"} if content is not None else {}

        build = http.build_request if http is not None else httpx.Request
        return build(
            self.method,
            url,
            params=params or None,
            content=content,
            headers=headers,
        )


def _header_int(resp: httpx.Response, name: str) -> int:
    try:
        return int(resp.headers.get(name, "0"))
    except ValueError:
        return 0


def decode_json(resp: httpx.Response, operation: str) -> Dict[str, Any]:
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as exc:
        snippet = (resp.text or "")[:500]
        raise DecodeError(
            f"failed to decode {operation} response: non-JSON body {snippet!r}"
        ) from exc
    if not isinstance(data, dict):
        raise DecodeError(
            f"failed to decode {operation} response: expected a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


__all__ = [
    "V3",
    "Model",
    "IDPath",
    "ListFilters",
    "IncludeFilters",
    "QueryParams",
    "Request",
    "Response",
    "CreateResponse",
    "NoContentResponse",
    "ListResponse",
    "HeaderPagedListResponse",
    "PageMeta",
    "ListMeta",
    "join_ids",
    "bool_param",
    "decode_json",
]
