import datetime as dt

import pytest

from consume_alert.models import ConsumeProdtInfo, ConsumeResultByType, DocumentWithId
from consume_alert.telebot_service import (
    ITEM_SEPARATOR,
    TelebotError,
    TelebotService,
    retry_operation,
)


class FakeBot:
    def __init__(self, failures=0):
        self.failures = failures
        self.messages = []
        self.photos = []
        self.calls = 0

    def send_message(self, chat_id, text):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("down")
        self.messages.append((chat_id, text))

    def send_photo(self, chat_id, photo_path):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("down")
        self.photos.append((chat_id, photo_path))


def make_service(bot=None, **kwargs):
    sleeps = []
    service = TelebotService(
        bot if bot is not None else FakeBot(),
        42,
        "Hello World",
        sleep=sleeps.append,
        **kwargs,
    )
    return service, sleeps


def test_input_text_is_lowercased():
    service, _ = make_service()
    assert service.get_input_text() == "hello world"


def test_missing_input_text_becomes_empty():
    service = TelebotService(FakeBot(), 1, None)
    assert service.get_input_text() == ""


def test_retry_operation_succeeds_after_failures():
    attempts = []
    sleeps = []

    def operation():
        attempts.append(1)
        if len(attempts) < 3:
            raise ValueError("fail")

    retry_operation(operation, 6, 2.5, sleeps.append)
    assert len(attempts) == 3
    assert sleeps == [2.5, 2.5]


def test_retry_operation_reraises_after_max_retries():
    attempts = []

    def operation():
        attempts.append(1)
        raise ValueError("always")

    with pytest.raises(ValueError, match="always"):
        retry_operation(operation, 2, 0.0, lambda _: None)
    assert len(attempts) == 3


def test_tele_bot_send_msg_wraps_errors():
    service, _ = make_service(FakeBot(failures=1))
    with pytest.raises(TelebotError):
        service.tele_bot_send_msg("hi")


def test_send_message_confirm_retries_until_delivered():
    bot = FakeBot(failures=2)
    service, sleeps = make_service(bot, retry_delay=1.0)
    service.send_message_confirm("hi")
    assert bot.messages == [(42, "hi")]
    assert sleeps == [1.0, 1.0]


def test_send_message_confirm_gives_up():
    bot = FakeBot(failures=100)
    service, _ = make_service(bot, max_retries=3)
    with pytest.raises(TelebotError):
        service.send_message_confirm("hi")
    assert bot.calls == 4


def test_send_photo_confirm_sends_each_path():
    bot = FakeBot(failures=1)
    service, _ = make_service(bot)
    service.send_photo_confirm(["a.png", "b.png"])
    assert bot.photos == [(42, "a.png"), (42, "b.png")]


def test_send_message_struct_info_formats_fields():
    bot = FakeBot()
    service, _ = make_service(bot)
    info = ConsumeProdtInfo("t1", "t2", "coffee", 1234567, "etc")
    service.send_message_struct_info(info)
    text = bot.messages[0][1]
    assert text == (
        'cur_timestamp: "t2", \n'
        'prodt_money: 1,234,567, \n'
        'prodt_name: "coffee", \n'
        'prodt_type: "etc", \n'
        'timestamp: "t1"'
    )


def test_send_message_struct_info_float_value_is_blank():
    bot = FakeBot()
    service, _ = make_service(bot)
    service.send_message_struct_info({"ratio": 0.5})
    assert bot.messages[0][1] == "ratio: "


def test_send_message_struct_info_rejects_non_object():
    service, _ = make_service()
    with pytest.raises(TypeError):
        service.send_message_struct_info([1, 2, 3])


def test_send_consumption_message_chunks_by_ten():
    bot = FakeBot()
    service, _ = make_service(bot)
    items = list(range(25))
    service.send_consumption_message(items, lambda n: f"{n}\n", False, "empty", "TITLE\n")
    texts = [text for _, text in bot.messages]
    assert len(texts) == 3
    assert texts[0].startswith("TITLE\n")
    assert not texts[1].startswith("TITLE\n")
    assert sum(text.count(ITEM_SEPARATOR) for text in texts) == 25
    assert texts[2].count(ITEM_SEPARATOR) == 5


def test_send_consumption_message_empty_flag_sends_only_empty_message():
    bot = FakeBot()
    service, _ = make_service(bot)
    service.send_consumption_message([1, 2], str, True, "nothing", "TITLE")
    assert bot.messages == [(42, "nothing")]


def test_send_message_consume_split_lists_details():
    bot = FakeBot()
    service, _ = make_service(bot)
    docs = [DocumentWithId("id1", ConsumeProdtInfo("2024-01-02T10:00:00Z", "x", "coffee", 5500, "etc"))]
    service.send_message_consume_split("2024-01-01", "2024-01-31", 5500.0, docs)
    text = bot.messages[0][1]
    assert "[2024-01-01 ~ 2024-01-31]" in text
    assert "name : coffee\ndate : 2024-01-02T10:00:00Z\ncost : 5,500\n" in text


def test_send_message_consume_split_empty_list():
    bot = FakeBot()
    service, _ = make_service(bot)
    service.send_message_consume_split("2024-01-01", "2024-01-31", 0.0, [])
    assert len(bot.messages) == 1
    assert bot.messages[0][1].endswith(
        "There is no consumption history to be viewed during that period."
    )


def test_send_message_consume_info_by_typelist():
    bot = FakeBot()
    service, _ = make_service(bot)
    results = [ConsumeResultByType("food", 12000, 50.0), ConsumeResultByType("etc", 12000, 50.0)]
    service.send_message_consume_info_by_typelist(
        results, dt.date(2024, 3, 1), dt.date(2024, 3, 31), 24000.0
    )
    text = bot.messages[0][1]
    assert "[2024-03-01 ~ 2024-03-31]" in text
    assert "category name : food\ncost : 12,000\ncost(%) : 50%\n" in text
    assert text.count(ITEM_SEPARATOR) == 2