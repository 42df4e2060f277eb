"""
Tests for request ids and log formatting.
"""

import json
import logging

from jobly.core.logging_config import CustomJsonFormatter, RequestIdFilter, request_id_var


class TestRequestIdMiddleware:

    def test_response_carries_request_id(self, client):
        response = client.get("/health")

        assert len(response.headers["x-request-id"]) == 32

    def test_caller_request_id_is_reused(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"

    def test_request_id_is_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="jobly.api.middleware"):
            client.get("/health", headers={"X-Request-ID": "trace-me"})

        assert any("GET /health 200" in r.getMessage() for r in caplog.records)

    def test_context_is_reset_after_request(self, client):
        client.get("/health", headers={"X-Request-ID": "abc123"})

        assert request_id_var.get() == "-"


class TestFormatting:

    def make_record(self, level=logging.INFO):
        return logging.LogRecord("jobly.test", level, __file__, 10, "hello %s", ("world",), None)

    def test_filter_adds_request_id(self):
        record = self.make_record()
        token = request_id_var.set("req-1")
        try:
            assert RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-1"

    def test_json_formatter(self):
        record = self.make_record()
        RequestIdFilter().filter(record)

        output = json.loads(CustomJsonFormatter('%(message)s').format(record))

        assert output["message"] == "hello world"
        assert output["level"] == "INFO"
        assert output["logger"] == "jobly.test"
        assert output["request_id"] == "-"
        assert "line" not in output

    def test_json_formatter_adds_location_for_warnings(self):
        record = self.make_record(logging.WARNING)

        output = json.loads(CustomJsonFormatter('%(message)s').format(record))

        assert output["line"] == 10
