"""Parsing of card payment notifications and aggregation of spending."""

from __future__ import annotations

import datetime as dt
import math
from typing import Iterable, Mapping, Sequence

from .io_utils import get_parsed_value_from_vector
from .models import (
    AggResultSet,
    ConsumeProdtInfo,
    ConsumeResultByType,
    PerDatetime,
    ToPythonGraphCircle,
)
from .numeric_utils import is_numeric
from .time_utils import (
    DATETIME_FORMAT,
    get_add_date_from_naivedate,
    get_add_month_from_naivedate,
    get_current_kor_naivedate,
    get_str_curdatetime,
    get_str_from_naivedate,
)

_PRICE_REMOVALS = (",", "원")


def _parse_i64(text: str) -> int:
    if not is_numeric(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _element(values: Sequence[str], index: int, what: str) -> str:
    if index >= len(values):
        raise IndexError(
            f"Invalid index {index} of {what!r} was accessed: {list(values)!r}"
        )
    return values[index]


def _round_half_away(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _percent(cost: int, total_cost: float) -> float:
    if total_cost == 0:
        if cost == 0:
            return math.nan
        return math.copysign(math.inf, cost) * math.copysign(1.0, total_cost)
    return cost / total_cost * 100.0


def get_string_vector_by_replace(
    input_str: str, replacements: Iterable[str]
) -> list[str]:
    """Split on whitespace and strip every replacement from each piece.

    ``"289,545원 일시불"`` with ``[",", "원"]`` gives ``["289545", "일시불"]``.
    """
    removals = list(replacements)
    pieces = []
    for piece in input_str.split():
        for removal in removals:
            piece = piece.replace(removal, "")
        pieces.append(piece)
    return pieces


def get_consume_prodt_money(consume_price_vec: Sequence[str], idx: int) -> int:
    """Parse the amount at ``idx`` as a signed 64-bit integer."""
    return get_parsed_value_from_vector(consume_price_vec, idx, _parse_i64)


def get_consume_time(consume_time_name_vec: Sequence[str]) -> str:
    """Turn ``["11/25", "10:02"]`` into a timestamp in the current Korean year."""
    parsed_date = _element(consume_time_name_vec, 0, "consume_time_name_vec")
    parsed_time = _element(consume_time_name_vec, 1, "consume_time_name_vec")

    year = get_current_kor_naivedate().year
    try:
        date = dt.datetime.strptime(f"{year}/{parsed_date}", "%Y/%m/%d").date()
        time = dt.datetime.strptime(parsed_time, "%H:%M").time()
    except ValueError as exc:
        raise ValueError(
            f"Failed to parse consumption time {parsed_date!r} {parsed_time!r}: {exc}"
        ) from exc
    return dt.datetime.combine(date, time).strftime(DATETIME_FORMAT)


def _build_info(
    price_text: str, time_parts: list[str], name: str, cur_timestamp: str
) -> ConsumeProdtInfo:
    price_vec = get_string_vector_by_replace(price_text, _PRICE_REMOVALS)
    price = get_consume_prodt_money(price_vec, 0)
    consume_time = get_consume_time(time_parts)
    return ConsumeProdtInfo(consume_time, cur_timestamp, name, price, "etc")


def process_by_consume_filter(split_args_vec: Sequence[str]) -> ConsumeProdtInfo:
    """Parse the lines of a card payment notification into a consumption record.

    NH card messages carry price, time and shop on lines 2, 3 and 4; Samsung card
    messages carry price on line 1 and ``date time shop`` on line 2.
    """
    if not split_args_vec:
        raise ValueError(
            f"Invalid format of notification text: {list(split_args_vec)!r}"
        )
    consume_type = split_args_vec[0]
    cur_timestamp = get_str_curdatetime()

    if "nh" in consume_type:
        price_text = _element(split_args_vec, 2, "split_args_vec")
        time_parts = [
            part.strip()
            for part in _element(split_args_vec, 3, "split_args_vec").split(" ")
        ]
        name_index_ok = len(split_args_vec) > 4
        price_vec = get_string_vector_by_replace(price_text, _PRICE_REMOVALS)
        price = get_consume_prodt_money(price_vec, 0)
        consume_time = get_consume_time(time_parts)
        if not name_index_ok:
            _element(split_args_vec, 4, "split_args_vec")
        name = split_args_vec[4]
        return ConsumeProdtInfo(consume_time, cur_timestamp, name, price, "etc")

    if "삼성" in consume_type:
        price_text = _element(split_args_vec, 1, "split_args_vec")
        time_parts = _element(split_args_vec, 2, "split_args_vec").split(" ")
        price_vec = get_string_vector_by_replace(price_text, _PRICE_REMOVALS)
        price = get_consume_prodt_money(price_vec, 0)
        consume_time = get_consume_time(time_parts)
        name = _element(time_parts, 2, "consume_time_vec")
        return ConsumeProdtInfo(consume_time, cur_timestamp, name, price, "etc")

    raise ValueError(f"Card type {consume_type!r} is not supported.")


def get_nmonth_to_current_date(
    date_start: dt.date, date_end: dt.date, nmonth: int
) -> PerDatetime:
    """Pair a date range with the same range shifted by ``nmonth`` months."""
    return PerDatetime(
        date_start,
        date_end,
        get_add_month_from_naivedate(date_start, nmonth),
        get_add_month_from_naivedate(date_end, nmonth),
    )


def get_nday_to_current_date(
    date_start: dt.date, date_end: dt.date, nday: int
) -> PerDatetime:
    """Pair a date range with the same range shifted by ``nday`` days."""
    return PerDatetime(
        date_start,
        date_end,
        get_add_date_from_naivedate(date_start, nday),
        get_add_date_from_naivedate(date_end, nday),
    )


def get_calculate_pie_infos_from_category(
    total_cost: float, type_map: Mapping[str, int]
) -> list[ConsumeResultByType]:
    """Compute each category's share of ``total_cost`` in percent, to one decimal."""
    return [
        ConsumeResultByType(
            prodt_type,
            cost,
            _round_half_away(_percent(cost, total_cost) * 10.0) / 10.0,
        )
        for prodt_type, cost in type_map.items()
    ]


def get_consumption_result_by_category(
    consume_details: AggResultSet[ConsumeProdtInfo],
) -> list[ConsumeResultByType]:
    """Sum spending per category and order the categories by cost, highest first."""
    cost_map: dict[str, int] = {}
    for document in consume_details.source_list:
        detail = document.source
        cost_map[detail.prodt_type] = cost_map.get(detail.prodt_type, 0) + detail.prodt_money

    results = get_calculate_pie_infos_from_category(consume_details.agg_result, cost_map)
    return sorted(results, key=lambda item: item.consume_prodt_cost, reverse=True)


def convert_consume_result_by_type_to_python_graph_circle(
    consume_result_by_types: Sequence[ConsumeResultByType],
    total_cost: float,
    start_dt: dt.date,
    end_dt: dt.date,
) -> ToPythonGraphCircle:
    """Build the pie chart payload from per-category results."""
    return ToPythonGraphCircle(
        [item.consume_prodt_type for item in consume_result_by_types],
        [item.consume_prodt_per for item in consume_result_by_types],
        get_str_from_naivedate(start_dt),
        get_str_from_naivedate(end_dt),
        total_cost,
    )