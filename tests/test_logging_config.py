"""
Tests for logging_config.py and paths.validate_paths().
"""
import json
import logging

import pytest

from torquehub.core.logging_config import JSONFormatter, HumanFormatter, setup_logging
from torquehub.core.paths import validate_paths


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="hello %s", args=("world",), level=logging.INFO, **extra):
    rec = logging.LogRecord("torquehub.quote_pdf", level, __file__, 10, msg, args, None)
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


class TestFormatters:

    def test_json_line(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["msg"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "torquehub.quote_pdf"

    def test_json_extra_fields(self):
        entry = json.loads(JSONFormatter().format(
            _record(order_id="ord-1", pages=2, photos=3, duration_ms=41)))
        assert entry["order_id"] == "ord-1"
        assert entry["pages"] == 2
        assert entry["photos"] == 3
        assert entry["duration_ms"] == 41

    def test_json_ignores_unknown_extra(self):
        entry = json.loads(JSONFormatter().format(_record(secret="x")))
        assert "secret" not in entry

    def test_human_line(self):
        line = HumanFormatter().format(_record(level=logging.WARNING))
        assert "[W] torquehub.quote_pdf: hello world" in line


class TestSetupLogging:

    def test_file_handler_writes_json(self, tmp_path, restore_root_logger):
        setup_logging(level="DEBUG", json_logs=True, log_dir=str(tmp_path))
        logging.getLogger("torquehub.test").info("rendered", extra={"pages": 1})
        for h in logging.getLogger().handlers:
            h.flush()

        lines = (tmp_path / "torquehub.log").read_text().strip().splitlines()
        last = json.loads(lines[-1])
        assert last["msg"] == "rendered"
        assert last["pages"] == 1

    def test_level_from_env(self, tmp_path, monkeypatch, restore_root_logger):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging(json_logs=False, log_dir=str(tmp_path))
        assert logging.getLogger().level == logging.WARNING

    def test_noisy_libs_quieted(self, tmp_path, restore_root_logger):
        setup_logging(level="DEBUG", json_logs=False, log_dir=str(tmp_path))
        assert logging.getLogger("PIL").level == logging.WARNING


class TestValidatePaths:

    def test_shape(self):
        result = validate_paths()
        assert set(result) == {"ok", "errors", "warnings", "resolved"}
        assert "MEDIA_ROOT" in result["resolved"]
        assert "IMAGE_FETCH_TIMEOUT" in result["resolved"]
