"""Sending consumption reports through a chat bot, with retries."""

from __future__ import annotations

import datetime as dt
import json
import logging
import math
import time
from typing import Any, Callable, Protocol, Sequence, TypeVar

from .io_utils import convert_json_from_struct, format_number
from .models import ConsumeProdtInfo, ConsumeResultByType, DocumentWithId
from .time_utils import get_str_from_naivedate

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 6
DEFAULT_RETRY_DELAY = 40.0
ITEMS_PER_MESSAGE = 10
ITEM_SEPARATOR = "---------------------------------\n"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class TelebotError(RuntimeError):
    """Raised when the bot fails to deliver a message or photo."""


class Bot(Protocol):
    """The operations the service needs from a chat bot client."""

    def send_message(self, chat_id: Any, text: str) -> Any:
        ...

    def send_photo(self, chat_id: Any, photo_path: str) -> Any:
        ...


def retry_operation(
    operation: Callable[[], Any],
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    sleep: Callable[[float], Any] = time.sleep,
) -> None:
    """Run ``operation`` until it succeeds, retrying at most ``max_retries`` times.

    Waits ``retry_delay`` seconds between attempts and re-raises the last
    error once the retries are used up.
    """
    attempts = 0
    while True:
        try:
            operation()
            return
        except Exception as exc:
            if attempts >= max_retries:
                logger.error("Max attempts reached. : %r", exc)
                raise
            logger.error("%r", exc)
            sleep(retry_delay)
            attempts += 1


def _to_i64(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I64_MAX if value > 0 else _I64_MIN
    return max(_I64_MIN, min(_I64_MAX, int(value)))


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _format_date(value: str | dt.date) -> str:
    if isinstance(value, dt.date):
        return get_str_from_naivedate(value)
    return str(value)


def _struct_value(value: Any) -> str:
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, int):
        return format_number(value) if _I64_MIN <= value <= _I64_MAX else ""
    if isinstance(value, float):
        return ""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _detail_message(item: DocumentWithId[ConsumeProdtInfo]) -> str:
    return (
        f"name : {item.source.prodt_name}\n"
        f"date : {item.source.timestamp}\n"
        f"cost : {format_number(item.source.prodt_money)}\n"
    )


def _category_message(item: ConsumeResultByType) -> str:
    return (
        f"category name : {item.consume_prodt_type}\n"
        f"cost : {format_number(item.consume_prodt_cost)}\n"
        f"cost(%) : {_format_float(item.consume_prodt_per)}%\n"
    )


def _summary_messages(
    start_dt: str | dt.date, end_dt: str | dt.date, total_cost: float
) -> tuple[str, str]:
    head = (
        f"The money you spent from [{_format_date(start_dt)} ~ {_format_date(end_dt)}] "
        f"is [ {format_number(_to_i64(total_cost))} won ]\n"
    )
    empty_msg = head + "There is no consumption history to be viewed during that period."
    title = head + "=========[DETAIL]=========\n"
    return empty_msg, title


class TelebotService:
    """Sends text and photos to one chat on behalf of one incoming message."""

    def __init__(
        self,
        bot: Bot,
        chat_id: Any,
        input_text: str | None = "",
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        if input_text is None:
            logger.error("The entered value does not exist.")
            input_text = ""
        self.bot = bot
        self.chat_id = chat_id
        self.input_text = input_text.lower()
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.sleep = sleep

    def get_input_text(self) -> str:
        """Return the lower-cased text the user entered."""
        return self.input_text

    def _retry(self, operation: Callable[[], Any]) -> None:
        retry_operation(operation, self.max_retries, self.retry_delay, self.sleep)

    def send_message_struct_info(self, obj: Any) -> None:
        """Send the fields of a record as ``key: value`` lines."""
        data = convert_json_from_struct(obj)
        if not isinstance(data, dict):
            raise TypeError("Parsed JSON is not an object")

        lines = [f"{key}: {_struct_value(data[key])}, \n" for key in sorted(data)]
        text = "".join(lines)[:-3] if lines else ""
        self.send_message_confirm(text)

    def tele_bot_send_msg(self, msg: str) -> None:
        """Send one message, without retrying."""
        try:
            self.bot.send_message(self.chat_id, msg)
        except Exception as exc:
            raise TelebotError("Failed to send command response.") from exc

    def send_message_confirm(self, msg: str) -> None:
        """Send one message, retrying on failure."""
        self._retry(lambda: self.tele_bot_send_msg(msg))

    def tele_bot_send_photo(self, image_path: str) -> None:
        """Send one photo file, without retrying."""
        try:
            self.bot.send_photo(self.chat_id, image_path)
        except Exception as exc:
            raise TelebotError("Failed to send Photo.") from exc

    def send_photo_confirm(self, image_paths: Sequence[str]) -> None:
        """Send each photo in turn, retrying each on failure."""
        for image_path in image_paths:
            self._retry(lambda path=image_path: self.tele_bot_send_photo(path))

    def send_consumption_message(
        self,
        items: Sequence[T],
        message_builder: Callable[[T], str],
        empty_flag: bool,
        empty_msg: str,
        msg_title: str,
    ) -> None:
        """Send items in messages of ten, the first headed by ``msg_title``.

        When ``empty_flag`` is set only ``empty_msg`` is sent.
        """
        if empty_flag:
            self.send_message_confirm(empty_msg)
            return

        for start in range(0, len(items), ITEMS_PER_MESSAGE):
            parts = [msg_title] if start == 0 else []
            for item in items[start : start + ITEMS_PER_MESSAGE]:
                parts.append(ITEM_SEPARATOR)
                parts.append(message_builder(item))
            self.send_message_confirm("".join(parts))

    def send_message_consume_split(
        self,
        start_dt: str | dt.date,
        end_dt: str | dt.date,
        total_cost: float,
        consume_detail_list: Sequence[DocumentWithId[ConsumeProdtInfo]],
    ) -> None:
        """Report the total spent over a period followed by each consumption."""
        empty_msg, title = _summary_messages(start_dt, end_dt, total_cost)
        self.send_consumption_message(
            consume_detail_list,
            _detail_message,
            not consume_detail_list,
            empty_msg,
            title,
        )

    def send_message_consume_info_by_typelist(
        self,
        type_consume_info: Sequence[ConsumeResultByType],
        start_dt: dt.date,
        end_dt: dt.date,
        total_cost: float,
    ) -> None:
        """Report the total spent over a period followed by each category's share."""
        empty_msg, title = _summary_messages(start_dt, end_dt, total_cost)
        self.send_consumption_message(
            type_consume_info,
            _category_message,
            not type_consume_info,
            empty_msg,
            title,
        )