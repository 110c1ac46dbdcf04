"""Tests for logging setup."""

import json
import logging

import pytest

from trade_pager.config.settings import LoggingConfig
from trade_pager.utils.logging import JSONFormatter, TextFormatter, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(message="hello", **extra):
    record = logging.LogRecord("trade_pager.test", logging.WARNING, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestFormatters:

    def test_json_formatter_includes_context(self):
        record = make_record("retrying", ctx_attempt=2, service="trade-pager")

        data = json.loads(JSONFormatter().format(record))

        assert data['message'] == "retrying"
        assert data['level'] == "WARNING"
        assert data['logger'] == "trade_pager.test"
        assert data['ctx_attempt'] == 2
        assert data['service'] == "trade-pager"
        assert data['timestamp'].endswith("Z")

    def test_json_formatter_skips_unrelated_attributes(self):
        record = make_record("retrying", ctx_cursor=5701, payload={"tid": 1})

        data = json.loads(JSONFormatter().format(record))

        assert data["ctx_cursor"] == 5701
        assert "payload" not in data
        assert "service" not in data
        assert "lineno" not in data

    def test_text_formatter(self):
        line = TextFormatter().format(make_record("page fetched"))

        assert "[WARNING] trade_pager.test: page fetched" in line


@pytest.mark.unit
class TestSetupLogging:

    def test_file_output_in_json(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "pager.log"
        config = LoggingConfig(level="debug", format="json", output=str(log_file))

        handler = setup_logging(config, service_name="pager-test")
        log_with_context(logging.getLogger("trade_pager.test"), logging.INFO, "fetched", cursor=5701)
        handler.flush()

        assert restore_root_logger.level == logging.DEBUG
        assert restore_root_logger.handlers == [handler]

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        fetched = [line for line in lines if line['message'] == "fetched"]
        assert fetched[0]['ctx_cursor'] == 5701
        assert fetched[0]['service'] == "pager-test"
