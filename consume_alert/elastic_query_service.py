"""Queries against the search index that stores consumption records."""

from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Mapping, Optional, Protocol, TypeVar

from .models import AggResultSet, ConsumeIndexProdtType, DocumentWithId
from .time_utils import get_str_from_naivedate

T = TypeVar("T")

DEFAULT_CONSUME_TYPE = "etc"


class SearchClient(Protocol):
    """The operations the service needs from an index client."""

    def get_search_query(self, query: Mapping[str, Any], index_name: str) -> Any:
        ...

    def delete_query(self, doc_id: str, index_name: str) -> Any:
        ...


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings, counted in characters."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def _lookup(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def get_query_result_vec(
    response_body: Any, factory: Optional[Callable[[Any], T]] = None
) -> list[DocumentWithId[Any]]:
    """Turn the hits of a search response into documents.

    ``factory`` builds each document's source from its raw ``_source`` value;
    without one the raw value is kept. Raises ``ValueError`` on a malformed
    response.
    """
    hits = _lookup(response_body, "hits", "hits")
    if not isinstance(hits, list):
        raise ValueError("'hits' field is not an array")

    results: list[DocumentWithId[Any]] = []
    for hit in hits:
        doc_id = hit.get("_id") if isinstance(hit, Mapping) else None
        if not isinstance(doc_id, str):
            raise ValueError("Missing '_id' field")
        if "_source" not in hit:
            raise ValueError("Missing '_source' field")
        raw = hit["_source"]
        if factory is None:
            source = raw
        else:
            try:
                source = factory(raw)
            except (TypeError, ValueError, KeyError) as exc:
                raise ValueError(f"Failed to deserialize source: {exc}") from exc
        results.append(DocumentWithId(doc_id, source))
    return results


class ElasticQueryService:
    """Higher-level queries built on a search index client."""

    def __init__(self, client: SearchClient, consume_type_index: str) -> None:
        self.client = client
        self.consume_type_index = consume_type_index

    def get_consume_type_judgement(self, prodt_name: str) -> str:
        """Classify a shop name by the closest matching stored keyword.

        Returns ``"etc"`` when the index has no matching keyword.
        """
        query = {"query": {"match": {"consume_keyword": prodt_name}}}
        response = self.client.get_search_query(query, self.consume_type_index)
        results = get_query_result_vec(response, ConsumeIndexProdtType.from_dict)
        if not results:
            return DEFAULT_CONSUME_TYPE

        best = min(
            results,
            key=lambda doc: levenshtein(doc.source.consume_keyword, prodt_name),
        )
        return best.source.consume_keyword_type

    def get_info_orderby_cnt(
        self,
        index_name: str,
        order_by_field: str,
        top_size: int,
        asc: bool,
        factory: Optional[Callable[[Any], T]] = None,
    ) -> list[DocumentWithId[Any]]:
        """Return up to ``top_size`` documents sorted by ``order_by_field``."""
        query = {
            "sort": {order_by_field: "asc" if asc else "desc"},
            "size": top_size,
        }
        response = self.client.get_search_query(query, index_name)
        return get_query_result_vec(response, factory)

    def get_info_orderby_aggs_range(
        self,
        index_name: str,
        range_field: str,
        start_date: dt.date,
        end_date: dt.date,
        order_by_field: str,
        asc: bool,
        aggs_field: str,
        factory: Optional[Callable[[Any], T]] = None,
    ) -> AggResultSet[Any]:
        """Return documents in a date range together with the sum of ``aggs_field``."""
        query = {
            "size": 10000,
            "query": {
                "range": {
                    range_field: {
                        "gte": get_str_from_naivedate(start_date),
                        "lte": get_str_from_naivedate(end_date),
                    }
                }
            },
            "aggs": {"aggs_result": {"sum": {"field": aggs_field}}},
            "sort": {order_by_field: {"order": "asc" if asc else "desc"}},
        }
        response = self.client.get_search_query(query, index_name)

        agg_value = _lookup(response, "aggregations", "aggs_result", "value")
        if isinstance(agg_value, bool) or not isinstance(agg_value, (int, float)):
            raise ValueError("'agg_result' error: aggregation value is missing")

        documents = get_query_result_vec(response, factory)
        return AggResultSet(float(agg_value), documents)

    def delete_es_doc(self, index_name: str, doc: DocumentWithId[Any]) -> None:
        """Delete one document from the index."""
        self.client.delete_query(doc.id, index_name)