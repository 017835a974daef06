import json
import logging
from dataclasses import dataclass
from datetime import timedelta

from jikanwrap.api import (
    APIResponse,
    JsonResponse,
    error,
    error_response,
    logging_middleware,
    success,
)
from jikanwrap.common import Info


@dataclass
class _Item:
    mal_id: int
    name: str


def test_error_envelope_omits_empty_fields():
    assert error("boom").to_dict() == {"success": False, "error": "boom"}


def test_success_formats_query_time():
    response = success({"a": 1}, timedelta(milliseconds=1500))
    assert response.query_time == "1.500 seconds"
    assert response.to_dict()["data"] == {"a": 1}
    assert response.success is True


def test_success_accepts_seconds():
    assert success(None, 0.25).query_time.endswith(" seconds")
    assert "data" not in success(None, 0.25).to_dict()


def test_to_dict_converts_dataclasses_and_lists():
    response = APIResponse(success=True, data=[_Item(1, "x")], count=1, page=2)
    assert response.to_dict() == {
        "success": True,
        "data": [{"mal_id": 1, "name": "x"}],
        "count": 1,
        "page": 2,
    }


def test_to_dict_uses_json_aliases():
    body = APIResponse(success=True, data=Info(info="text")).to_dict()
    assert body["data"]["moreinfo"] == "text"


def test_empty_list_data_is_kept():
    assert APIResponse(success=True, data=[]).to_dict()["data"] == []


def test_error_response_body_and_status():
    response = error_response("Method not allowed", 405)
    assert response.status_code == 405
    assert response.body == {"error": "Method not allowed"}
    assert response.headers["Content-Type"] == "application/json"


def test_to_bytes_escapes_html_and_ends_with_newline():
    raw = JsonResponse(body={"error": "a<b"}).to_bytes()
    assert raw == b'{"error":"a\\u003cb"}\n'
    assert json.loads(raw) == {"error": "a<b"}


def test_to_bytes_round_trips_unicode():
    raw = JsonResponse(body={"title": "メイドインアビス"}).to_bytes()
    assert json.loads(raw.decode("utf-8")) == {"title": "メイドインアビス"}


def test_logging_middleware_passes_through_and_logs(caplog):
    def inner(environ, start_response):
        start_response("200 OK", [])
        return [b"ok"]

    statuses = []
    app = logging_middleware(inner)
    caplog.set_level(logging.INFO, logger="jikanwrap.api")
    result = app(
        {"REQUEST_METHOD": "GET", "PATH_INFO": "/ping", "QUERY_STRING": "x=1"},
        lambda status, headers: statuses.append(status),
    )
    assert result == [b"ok"]
    assert statuses == ["200 OK"]
    assert any("GET /ping?x=1" in record.getMessage() for record in caplog.records)