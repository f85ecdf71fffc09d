import io
import re

import pytest

from sensorcli import logger
from sensorcli.logger import DeviceLogger, Level, Logger

LINE = re.compile(
    r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2} "
    r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (DEBUG|INFO|WARN|ERROR): (.*)$"
)

ALL_LEVELS = [Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR]


@pytest.mark.parametrize(
    "threshold, expected",
    [
        (Level.DEBUG, ["DEBUG", "INFO", "WARN", "ERROR"]),
        (Level.INFO, ["INFO", "WARN", "ERROR"]),
        (Level.WARN, ["WARN", "ERROR"]),
        (Level.ERROR, ["ERROR"]),
    ],
)
def test_level_ordering(threshold, expected):
    buf = io.StringIO()
    log = Logger(threshold, buf)
    for level in ALL_LEVELS:
        log.log(level, "message")
    names = [LINE.match(line).group(1) for line in buf.getvalue().splitlines()]
    assert names == expected


def test_logger_line_format():
    buf = io.StringIO()
    Logger(Level.DEBUG, buf).log(Level.INFO, "value %d at 0x%02X", 5, 0x48)
    match = LINE.match(buf.getvalue().rstrip("\n"))
    assert match is not None
    assert match.group(1) == "INFO"
    assert match.group(2) == "value 5 at 0x48"


def test_logger_filters_below_threshold():
    buf = io.StringIO()
    log = Logger(Level.WARN, buf)
    log.log(Level.INFO, "hidden")
    log.log(Level.ERROR, "shown")
    lines = buf.getvalue().splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("ERROR: shown")


def test_message_without_args_is_literal():
    buf = io.StringIO()
    Logger(Level.DEBUG, buf).log(Level.DEBUG, "100% done")
    assert buf.getvalue().rstrip().endswith("DEBUG: 100% done")


def test_init_with_file_appends(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("existing\n")
    logger.init(Level.INFO, str(path))
    logger.debug("skip")
    logger.info("hello %s", "world")
    logger.warn("careful")
    logger.error("broken")
    lines = path.read_text().splitlines()
    assert lines[0] == "existing"
    assert [LINE.match(line).group(1) for line in lines[1:]] == ["INFO", "WARN", "ERROR"]
    assert lines[1].endswith("INFO: hello world")


def test_set_level_changes_threshold(tmp_path):
    path = tmp_path / "app.log"
    logger.init(Level.ERROR, str(path))
    logger.info("first")
    logger.set_level(Level.DEBUG)
    logger.debug("second")
    lines = path.read_text().splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("DEBUG: second")


def test_init_without_file_writes_stdout(capsys):
    logger.init(Level.DEBUG, None)
    logger.info("to stdout")
    out = capsys.readouterr().out
    assert out.rstrip().endswith("INFO: to stdout")


def test_init_bad_path_raises(tmp_path):
    with pytest.raises(OSError):
        logger.init(Level.INFO, str(tmp_path / "missing" / "app.log"))


def test_device_logger_read_success_and_failure(tmp_path):
    path = tmp_path / "dev.log"
    logger.init(Level.DEBUG, str(path))
    dl = DeviceLogger(1, 0x48)
    dl.log_read(0x01, 0x55, None)
    dl.log_read(0x02, 0, OSError("timeout"))
    lines = path.read_text().splitlines()
    assert LINE.match(lines[0]).group(1) == "DEBUG"
    assert "0x48" in lines[0] and "0x01" in lines[0] and "0x55" in lines[0]
    assert LINE.match(lines[1]).group(1) == "ERROR"
    assert "timeout" in lines[1]


def test_device_logger_write(tmp_path):
    path = tmp_path / "dev.log"
    logger.init(Level.DEBUG, str(path))
    dl = DeviceLogger(2, 0x20)
    dl.log_write(0x03, 0x7F, None)
    dl.log_write(0x03, 0x7F, RuntimeError("nack"))
    lines = path.read_text().splitlines()
    assert [LINE.match(line).group(1) for line in lines] == ["DEBUG", "ERROR"]
    assert "bus 2" in lines[0]
    assert "nack" in lines[1]


def test_device_logger_scan_levels(tmp_path):
    path = tmp_path / "dev.log"
    logger.init(Level.INFO, str(path))
    dl = DeviceLogger(1, 0x48)
    dl.log_scan(False)
    dl.log_scan(True)
    lines = path.read_text().splitlines()
    assert len(lines) == 1
    assert LINE.match(lines[0]).group(1) == "INFO"
    assert "0x48" in lines[0]