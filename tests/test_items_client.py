"""Tests for the items HTTP client and the retry decorator behind it."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from jobportal.items_client import add_item, format_item, get_items
from jobportal.retry import retry


def _response(payload, status=200):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("jobportal.retry.time.sleep"):
        yield


class TestGetItems:
    def test_uses_configured_url(self, monkeypatch):
        monkeypatch.setenv("ITEMS_API_URL", "http://api.test/api/items")
        with patch("jobportal.items_client.requests.get", return_value=_response([{"name": "Pen"}])) as get:
            assert get_items() == [{"name": "Pen"}]
        assert get.call_args[0][0] == "http://api.test/api/items"

    def test_retries_connection_errors(self):
        calls = [requests.ConnectionError("down"), _response([])]
        with patch("jobportal.items_client.requests.get", side_effect=calls) as get:
            assert get_items("http://api.test") == []
        assert get.call_count == 2

    def test_http_error_not_retried(self):
        with patch("jobportal.items_client.requests.get", return_value=_response({}, 500)) as get:
            with pytest.raises(requests.HTTPError):
                get_items("http://api.test")
        assert get.call_count == 1

    def test_gives_up_after_max_attempts(self):
        with patch("jobportal.items_client.requests.get", side_effect=requests.ConnectionError("down")) as get:
            with pytest.raises(requests.ConnectionError):
                get_items("http://api.test")
        assert get.call_count == 3


class TestAddItem:
    def test_posts_json(self):
        saved = {"_id": "1", "name": "Pen", "quantity": 2}
        with patch("jobportal.items_client.requests.post", return_value=_response(saved, 201)) as post:
            assert add_item({"name": "Pen", "quantity": 2}, url="http://api.test") == saved
        assert post.call_args.kwargs["json"] == {"name": "Pen", "quantity": 2}

    def test_dropped_connection_not_retried(self):
        with patch("jobportal.items_client.requests.post", side_effect=requests.ConnectionError("reset")) as post:
            with pytest.raises(requests.ConnectionError):
                add_item({"name": "Pen"}, url="http://api.test")
        assert post.call_count == 1

    def test_connect_timeout_retried(self):
        calls = [requests.exceptions.ConnectTimeout("slow"), _response({"_id": "1"}, 201)]
        with patch("jobportal.items_client.requests.post", side_effect=calls) as post:
            assert add_item({"name": "Pen"}, url="http://api.test") == {"_id": "1"}
        assert post.call_count == 2


def test_format_item():
    assert format_item({"name": "Pen", "quantity": 3}) == "Pen (Qty: 3)"
    assert format_item({"name": "Pen"}) == "Pen (Qty: -)"


class TestRetryDecorator:
    def test_only_retryable_errors_are_retried(self):
        sleeps = []
        attempts = {"n": 0}

        @retry(max_attempts=4, base_delay=1.0, jitter=False, retryable=(KeyError,), sleep=sleeps.append)
        def flaky():
            attempts["n"] += 1
            if attempts["n"] < 3:
                raise KeyError("x")
            return "ok"

        assert flaky() == "ok"
        assert sleeps == [1.0, 2.0]

    def test_other_errors_propagate_immediately(self):
        @retry(max_attempts=3, retryable=(KeyError,), sleep=lambda _: None)
        def broken():
            raise ValueError("bad")

        with pytest.raises(ValueError):
            broken()

    def test_delay_capped(self):
        sleeps = []

        @retry(max_attempts=4, base_delay=5.0, max_delay=6.0, jitter=False, sleep=sleeps.append)
        def always():
            raise RuntimeError("x")

        with pytest.raises(RuntimeError):
            always()
        assert sleeps == [5.0, 6.0, 6.0]
