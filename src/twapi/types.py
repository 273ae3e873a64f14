"""
Scalar codecs for the Teamwork API's JSON representations.

The API speaks two generations side by side. The current one (``/projects/api/v3``)
uses ISO dates and JSON numbers; the legacy one uses compact ``YYYYMMDD`` dates,
numbers wrapped in strings and comma-joined ID lists. Every type here is a
pydantic annotated type so request/response models can mix them freely.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_serializer,
    model_validator,
)
from pydantic_core import core_schema

DATE_FORMAT = "%Y-%m-%d"
LEGACY_DATE_FORMAT = "%Y%m%d"
TIME_FORMAT = "%H:%M:%S"


# --- Dates and times ------------------------------------------------------- #


def _parse_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return datetime.strptime(value, DATE_FORMAT).date()
    return value


def _parse_legacy_date(value: Any) -> Any:
    """Accept ``20240131``, ``"20240131"`` or ``"2024-01-31"``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        text = value.strip()
        if "-" in text:
            return datetime.strptime(text, DATE_FORMAT).date()
        return datetime.strptime(text, LEGACY_DATE_FORMAT).date()
    return value


def _parse_time(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, str):
        return datetime.strptime(value, TIME_FORMAT).time()
    return value


def _parse_optional_datetime(value: Any) -> Any:
    if value == "":
        return None
    return value


Date = Annotated[
    date,
    BeforeValidator(_parse_date),
    PlainSerializer(lambda d: d.strftime(DATE_FORMAT), return_type=str),
]
"""Calendar date sent as ``YYYY-MM-DD`` (current API generation)."""

LegacyDate = Annotated[
    date,
    BeforeValidator(_parse_legacy_date),
    PlainSerializer(lambda d: d.strftime(LEGACY_DATE_FORMAT), return_type=str),
]
"""Calendar date sent as ``YYYYMMDD`` (legacy API generation)."""

Time = Annotated[
    time,
    BeforeValidator(_parse_time),
    PlainSerializer(lambda t: t.strftime(TIME_FORMAT), return_type=str),
]
"""Wall-clock time sent as ``HH:MM:SS``."""

OptionalDateTime = Annotated[
    Optional[datetime], BeforeValidator(_parse_optional_datetime)
]
"""RFC 3339 timestamp where the API may send an empty string for "unset"."""


# --- Legacy numbers -------------------------------------------------------- #


def _parse_legacy_number(value: Any) -> Any:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        return int(text)
    return value


def _parse_legacy_numeric_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [int(part) for part in value.split(",") if part.strip()]
    return value


def _join_numbers(values: List[int]) -> str:
    return ",".join(str(v) for v in values)


LegacyNumber = Annotated[int, BeforeValidator(_parse_legacy_number)]
"""Integer that the legacy API may wrap in a string (``"123"``)."""

LegacyNumericList = Annotated[
    List[int],
    BeforeValidator(_parse_legacy_numeric_list),
    PlainSerializer(_join_numbers, return_type=str),
]
"""List of IDs exchanged as a single comma-joined string (``"1,2,3"``)."""


# --- Money ----------------------------------------------------------------- #


def _parse_money(value: Any) -> "Money":
    if isinstance(value, Money):
        return value
    if isinstance(value, bool):
        raise ValueError("money amount cannot be a boolean")
    if isinstance(value, int):
        return Money(value)
    if isinstance(value, float):
        return Money(round(value))
    if isinstance(value, str):
        try:
            return Money(int(Decimal(value.strip())))
        except InvalidOperation as exc:
            raise ValueError(f"invalid money amount {value!r}") from exc
    if isinstance(value, dict):
        amount = value.get("amount", value.get("value"))
        if amount is None:
            raise ValueError("money object without an amount")
        return _parse_money(amount)
    raise ValueError(f"invalid money amount {value!r}")


class Money(int):
    """
    Monetary amount in cents.

    Decodes from a bare JSON number, a numeric string or a currency-aware
    object (``{"amount": 1250, "currency": {...}}``); always encodes back to
    the bare integer.
    """

    @classmethod
    def from_value(cls, value: float) -> "Money":
        return cls(round(value * 100))

    @property
    def value(self) -> float:
        return int(self) / 100

    def __repr__(self) -> str:
        return f"Money({int(self)})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            _parse_money,
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


# --- Relationships --------------------------------------------------------- #


class Relationship(BaseModel):
    """Pointer to a related entity, e.g. ``{"id": 12, "type": "users"}``."""

    id: int
    type: str = ""
    meta: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="ignore")


class LegacyRelationship(BaseModel):
    """Legacy-generation pointer whose identifier may arrive as a string."""

    id: LegacyNumber
    name: Optional[str] = None
    type: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class UserGroups(BaseModel):
    """Users, companies and teams assigned to an item (current generation)."""

    user_ids: List[int] = Field(default_factory=list, alias="userIds")
    company_ids: List[int] = Field(default_factory=list, alias="companyIds")
    team_ids: List[int] = Field(default_factory=list, alias="teamIds")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LegacyUserGroups(BaseModel):
    """
    Users, companies and teams packed into one legacy string.

    Users are bare IDs, companies are prefixed with ``c`` and teams with ``t``:
    ``"1,2,c3,t4"``.
    """

    user_ids: List[int] = Field(default_factory=list)
    company_ids: List[int] = Field(default_factory=list)
    team_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _from_legacy_string(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, str):
            return data
        users: List[int] = []
        companies: List[int] = []
        teams: List[int] = []
        for raw in data.split(","):
            part = raw.strip()
            if not part:
                continue
            if part[0] in ("c", "C"):
                companies.append(int(part[1:]))
            elif part[0] in ("t", "T"):
                teams.append(int(part[1:]))
            else:
                users.append(int(part))
        return {"user_ids": users, "company_ids": companies, "team_ids": teams}

    @model_serializer
    def _to_legacy_string(self) -> str:
        parts = [str(i) for i in self.user_ids]
        parts.extend(f"c{i}" for i in self.company_ids)
        parts.extend(f"t{i}" for i in self.team_ids)
        return ",".join(parts)


__all__ = [
    "Date",
    "LegacyDate",
    "Time",
    "OptionalDateTime",
    "LegacyNumber",
    "LegacyNumericList",
    "Money",
    "Relationship",
    "LegacyRelationship",
    "UserGroups",
    "LegacyUserGroups",
]
