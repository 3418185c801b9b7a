# consume_alert

A library for turning card payment notifications into structured spending
records, classifying them by category, summing spending per category and
reporting the results through a chat bot and a chart-drawing HTTP service.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `consume_alert.time_utils`

Date helpers working in Korean Standard Time (UTC+9):

- `get_current_kor_naive_datetime()`, `get_current_kor_naivedate()`,
  `get_current_kor_naivedate_first_date()` – the current Korean time, date and
  first day of the month, without timezone information.
- `get_str_from_naivedate(date)` gives `YYYY-MM-DD`;
  `get_str_from_naive_datetime(datetime)` and `get_str_curdatetime()` give
  `YYYY-MM-DDTHH:MM:SSZ`.
- `get_naive_date_from_str(text, fmt)` and `get_naive_datetime_from_str(text, fmt)`
  parse with a `strptime` format and raise `ValueError` on failure.
- `get_naivedate`, `get_naivetime`, `get_naivedatetime` and
  `get_this_year_naivedatetime` build values from components, raising
  `ValueError` for ones that do not exist.
- `get_lastday_naivedate(date)` – the last day of that date's month.
- `get_add_month_from_naivedate(date, n)` shifts by `n` months, clamping the day
  to the end of the target month (2024-01-31 plus one month is 2024-02-29).
- `get_add_date_from_naivedate(date, n)` shifts by `n` days.
- `validate_date_format(text, pattern)` – whether the regular expression
  `pattern` matches anywhere in `text`.

### `consume_alert.numeric_utils`

- `is_numeric(s)` – whether `s` is a plain signed 64-bit integer literal.
- `convert_numeric(s)` – that integer, or `0` when `s` is not one.

### `consume_alert.io_utils`

- `convert_json_from_struct(obj)` – turns dataclasses, objects with `to_dict()`,
  dates and plain containers into JSON data.
- `format_number(value)` – comma thousands separators (`1234567` → `"1,234,567"`).
- `get_parsed_value_from_vector(values, index, parser)` – parses one element,
  raising `IndexError` when it is missing and `ValueError` when it cannot be parsed.
- `delete_file(paths)` – removes each file, stopping at the first failure.

### `consume_alert.models`

Dataclasses: `DocumentWithId`, `AggResultSet`, `ConsumeProdtInfo`,
`ConsumeIndexProdtType`, `PerDatetime`, `ConsumeResultByType` and
`ToPythonGraphCircle`. `ConsumeProdtInfo` and `ConsumeIndexProdtType` have
`from_dict()`, which raises `ValueError` on missing or mistyped fields;
`ConsumeProdtInfo` and `ToPythonGraphCircle` have `to_dict()`.

### `consume_alert.process_service`

- `process_by_consume_filter(lines)` parses the lines of a notification into a
  `ConsumeProdtInfo` with category `"etc"`. NH card messages (first line
  containing `nh`) carry the price on line 2, `MM/DD HH:MM` on line 3 and the
  shop on line 4. Samsung card messages (first line containing `삼성`) carry the
  price on line 1 and `MM/DD HH:MM shop` on line 2. The date is taken to be in
  the current Korean year. Other card types raise `ValueError`; missing lines
  raise `IndexError`.
- `get_string_vector_by_replace`, `get_consume_prodt_money` and
  `get_consume_time` are the steps it is built from.
- `get_nmonth_to_current_date` and `get_nday_to_current_date` pair a date range
  with the same range shifted by months or days, as a `PerDatetime`.
- `get_consumption_result_by_category(agg_result_set)` sums spending per
  category and returns `ConsumeResultByType` items, highest cost first, each
  with its share of the aggregated total in percent rounded to one decimal
  (`get_calculate_pie_infos_from_category` does the percentages).
- `convert_consume_result_by_type_to_python_graph_circle` builds the pie chart
  payload.

### `consume_alert.elastic_query_service`

- `levenshtein(a, b)` – edit distance in characters.
- `get_query_result_vec(response, factory=None)` – turns the hits of a search
  response into `DocumentWithId` values, raising `ValueError` on a malformed
  response.
- `ElasticQueryService(client, consume_type_index)` wraps a search client that
  has `get_search_query(query, index_name)` and `delete_query(doc_id, index_name)`:
  - `get_consume_type_judgement(name)` picks the category of the stored keyword
    closest to `name` by edit distance, or `"etc"` when nothing matches;
  - `get_info_orderby_cnt(...)` returns the top documents sorted by a field;
  - `get_info_orderby_aggs_range(...)` returns the documents within a date
    range and the sum of a field, as an `AggResultSet`;
  - `delete_es_doc(index_name, doc)` deletes a document.

### `consume_alert.graph_api_service`

`GraphApiService(url, session=None)` posts JSON payloads with `requests` and
returns the response text (the image name). `GraphApiService.from_env()` reads
the base URL from `GRAPH_API_URL`. A non-2xx answer raises `GraphApiError`.
`call_python_matplot_consume_detail_single` and
`call_python_matplot_consume_detail_double` post to `/api/consume_detail`;
`call_python_matplot_consume_type` posts to `/api/category`.

### `consume_alert.telebot_service`

`TelebotService(bot, chat_id, input_text)` sends through a bot object that has
`send_message(chat_id, text)` and `send_photo(chat_id, path)`. Failed sends are
retried by `retry_operation`, by default up to 6 times with 40 seconds between
attempts; a final failure raises `TelebotError`. `send_consumption_message`
sends items ten per message, the first headed by a title.
`send_message_consume_split` and `send_message_consume_info_by_typelist`
report the total spent over a period followed by each record or category;
`send_message_struct_info` sends a record's fields as `key: value` lines.

### `consume_alert.logger_utils`

- `set_global_logger(log_directory="logs")` logs INFO and above to
  `consume_alert.log` in that directory, rotated at midnight, keeping ten old
  files, in the format `[time] [LEVEL] T[thread] message` (`LogFormatter`).
- `errork(err, producer=None)` and `infok(info, producer=None)` log a message
  and, when a producer is given, publish it on the `consume_alert_rust` topic
  through `producer.produce_message(topic, message)`.

## Example

```python
from consume_alert.process_service import process_by_consume_filter

info = process_by_consume_filter([
    "nh카드1*1*승인",
    "홍*동",
    "5,500원 일시불",
    "11/25 10:02",
    "커피전문점 본점",
    "총누적100,000원",
])
print(info.prodt_name, info.prodt_money, info.timestamp)
```

## What it does not do

The package has no command, bot loop or server of its own. It does not include
a search index client, a chat bot client or a message broker producer: these are
passed in as objects with the methods named above. It stores nothing itself, and
it does not draw charts; it only posts chart data to an HTTP service.