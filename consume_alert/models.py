"""Data records exchanged between the search index, processing and graph services."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")


def _require(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"Missing field {key!r}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"Field {key!r} has invalid type {type(value).__name__}")
    return value


@dataclass
class DocumentWithId(Generic[T]):
    """A stored document together with its index identifier."""

    id: str
    source: T


@dataclass
class AggResultSet(Generic[T]):
    """An aggregated value plus the documents it was computed over."""

    agg_result: float
    source_list: list[DocumentWithId[T]] = field(default_factory=list)


@dataclass
class ConsumeProdtInfo:
    """A single consumption record."""

    timestamp: str
    cur_timestamp: str
    prodt_name: str
    prodt_money: int
    prodt_type: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConsumeProdtInfo":
        """Build a record from a JSON-style mapping, raising ``ValueError`` on bad input."""
        return cls(
            timestamp=_require(data, "timestamp", str),
            cur_timestamp=_require(data, "cur_timestamp", str),
            prodt_name=_require(data, "prodt_name", str),
            prodt_money=_require(data, "prodt_money", int),
            prodt_type=_require(data, "prodt_type", str),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-style mapping."""
        return {
            "timestamp": self.timestamp,
            "cur_timestamp": self.cur_timestamp,
            "prodt_name": self.prodt_name,
            "prodt_money": self.prodt_money,
            "prodt_type": self.prodt_type,
        }


@dataclass
class ConsumeIndexProdtType:
    """A keyword and the consumption category it maps to."""

    consume_keyword_type: str
    consume_keyword: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConsumeIndexProdtType":
        """Build a keyword mapping from a JSON-style mapping, raising ``ValueError`` on bad input."""
        return cls(
            consume_keyword_type=_require(data, "consume_keyword_type", str),
            consume_keyword=_require(data, "consume_keyword", str),
        )


@dataclass(frozen=True)
class PerDatetime:
    """A date range and the same range shifted by some period."""

    date_start: dt.date
    date_end: dt.date
    n_date_start: dt.date
    n_date_end: dt.date


@dataclass
class ConsumeResultByType:
    """Total spending and share of the total for one category."""

    consume_prodt_type: str
    consume_prodt_cost: int
    consume_prodt_per: float


@dataclass
class ToPythonGraphCircle:
    """Payload for drawing a pie chart of spending by category."""

    prodt_type_list: list[str]
    prodt_type_cost_per_list: list[float]
    start_dt: str
    end_dt: str
    total_cost: float

    def to_dict(self) -> dict[str, Any]:
        """Return the payload as a JSON-style mapping."""
        return {
            "prodt_type_list": list(self.prodt_type_list),
            "prodt_type_cost_per_list": list(self.prodt_type_cost_per_list),
            "start_dt": self.start_dt,
            "end_dt": self.end_dt,
            "total_cost": self.total_cost,
        }