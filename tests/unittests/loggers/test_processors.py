import json
import logging
import re
from pathlib import Path

import pytest

from endodcm.loggers import temporary_log_level
from endodcm.loggers.logging_config import LoggingManager
from endodcm.loggers.processors import (
    CallPrettifier,
    PathPrettifier,
    ZonedTimeStamper,
)


def test_path_prettifier_relative_inside_base(tmp_path: Path) -> None:
    processor = PathPrettifier(base_dir=tmp_path)
    event = {"path": tmp_path / "case01" / "capture.xml", "other": "text"}
    result = processor(None, None, event)
    assert result["path"] == str(Path("case01") / "capture.xml")
    assert result["other"] == "text"


def test_path_prettifier_leaves_outside_paths(tmp_path: Path) -> None:
    processor = PathPrettifier(base_dir=tmp_path / "base")
    outside = tmp_path / "elsewhere" / "capture.xml"
    assert processor(None, None, {"path": outside})["path"] == outside


def test_call_prettifier() -> None:
    event = {"module": "mapper", "func_name": "map_fields", "lineno": 42}
    assert CallPrettifier(concise=True)(None, None, dict(event))["call"] == "mapper.map_fields:42"
    assert CallPrettifier(concise=False)(None, None, dict(event))["call"] == event


def test_zoned_time_stamper() -> None:
    result = ZonedTimeStamper(fmt="%H:%M:%S %Z", zone="UTC")(None, None, {})
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2} UTC", result["timestamp"])


@pytest.mark.parametrize(
    "processor",
    [PathPrettifier(), CallPrettifier(), ZonedTimeStamper()],
)
def test_processors_reject_non_dict(processor) -> None:
    with pytest.raises(TypeError, match="event_dict must be a dictionary"):
        processor(None, None, ["not", "a", "dict"])


def test_logging_manager_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENDODCM_TEST_LOG_LEVEL", "debug")
    manager = LoggingManager("endodcm_test")
    assert manager.env_level == "DEBUG"
    assert manager.timezone == "UTC"


def test_logging_manager_rejects_bad_level() -> None:
    manager = LoggingManager("endodcm_test")
    with pytest.raises(ValueError, match="Invalid logging level"):
        manager.configure_logging("LOUD")


def test_logging_manager_unknown_timezone_falls_back(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.setenv("ENDODCM_TEST_LOG_TIMEZONE", "Mars/Olympus")
    manager = LoggingManager("endodcm_test")
    assert manager.timezone == "UTC"
    assert "Mars/Olympus" in capsys.readouterr().err


def test_logging_manager_json_handler(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENDODCM_TEST_ENABLE_JSON_LOGGING", "1")
    manager = LoggingManager("endodcm_test")
    manager.get_logger().warning("json handler check", path=tmp_path / "a.xml")

    log_dir = tmp_path / ".endodcm" / "logs"
    latest = log_dir / "latest.log"
    assert latest.is_symlink()
    assert latest.resolve() == manager.json_logfile.resolve()
    assert [p.name for p in log_dir.glob("endodcm_test_*.log")] == [
        manager.json_logfile.name
    ]

    for handler in logging.getLogger("endodcm_test").handlers:
        handler.flush()
    record = json.loads(manager.json_logfile.read_text())
    assert record["event"] == "json handler check"
    assert record["level"] == "warning"
    assert record["path"] == "a.xml"
    assert set(record["call"]) == {"module", "func_name", "lineno"}


def test_logging_manager_reconfigure_keeps_json_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ENDODCM_TEST_ENABLE_JSON_LOGGING", "1")
    manager = LoggingManager("endodcm_test", base_dir=tmp_path)
    logfile = manager.json_logfile
    manager.configure_logging("INFO")
    assert manager.json_logfile == logfile
    assert len(list((tmp_path / ".endodcm" / "logs").glob("*.log"))) == 2


class TestTemporaryLogLevel:
    name = "endodcm_temporary_level"

    def test_sets_level_inside_block(self) -> None:
        stdlib_logger = logging.getLogger(self.name)
        stdlib_logger.setLevel(logging.INFO)
        with temporary_log_level("error", self.name):
            assert stdlib_logger.level == logging.ERROR
        assert stdlib_logger.level == logging.INFO

    def test_restores_level_after_exception(self) -> None:
        stdlib_logger = logging.getLogger(self.name)
        stdlib_logger.setLevel(logging.DEBUG)
        with pytest.raises(RuntimeError, match="conversion aborted"):
            with temporary_log_level("CRITICAL", self.name):
                assert stdlib_logger.level == logging.CRITICAL
                raise RuntimeError("conversion aborted")
        assert stdlib_logger.level == logging.DEBUG
