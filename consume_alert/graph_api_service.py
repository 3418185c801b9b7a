"""Client for the chart-drawing HTTP service."""

from __future__ import annotations

import os
from typing import Any

import requests

from .io_utils import convert_json_from_struct

GRAPH_API_URL_ENV = "GRAPH_API_URL"
CONSUME_DETAIL_PATH = "/api/consume_detail"
CATEGORY_PATH = "/api/category"


class GraphApiError(RuntimeError):
    """Raised when the chart service answers with a non-success status."""


class GraphApiService:
    """Posts chart payloads and returns the image name the service replies with."""

    def __init__(
        self, graph_api_url: str, session: requests.Session | None = None
    ) -> None:
        self.graph_api_url = graph_api_url
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, session: requests.Session | None = None) -> "GraphApiService":
        """Build the service from the ``GRAPH_API_URL`` environment variable."""
        url = os.environ.get(GRAPH_API_URL_ENV)
        if url is None:
            raise RuntimeError(f"'{GRAPH_API_URL_ENV}' must be set")
        return cls(url, session)

    def post_api(self, uri: str, payload: Any) -> str:
        """POST ``payload`` as JSON to ``uri`` and return the response text."""
        post_uri = f"{self.graph_api_url}{uri}"
        response = self.session.post(post_uri, json=convert_json_from_struct(payload))
        if not 200 <= response.status_code < 300:
            raise GraphApiError(f"Request for '{post_uri}' failed.")
        return response.text

    def call_python_matplot_consume_detail_single(self, python_graph_info: Any) -> str:
        """Request a line chart of one consumption series."""
        return self.post_api(CONSUME_DETAIL_PATH, [python_graph_info])

    def call_python_matplot_consume_detail_double(
        self, cur_python_graph_info: Any, versus_python_graph_info: Any
    ) -> str:
        """Request a line chart comparing two consumption series."""
        return self.post_api(
            CONSUME_DETAIL_PATH, [cur_python_graph_info, versus_python_graph_info]
        )

    def call_python_matplot_consume_type(self, to_python_graph_circle: Any) -> str:
        """Request a pie chart of spending by category."""
        return self.post_api(CATEGORY_PATH, to_python_graph_circle)