import json
import logging

from oshiv_installer.installer_logger import InstallerLogger


def test_log_emits_json_line(caplog):
    logger = InstallerLogger()

    with caplog.at_level(logging.INFO, logger="oshiv_installer"):
        logger.log("Downloading\nsomething", logging.INFO)

    record = json.loads(caplog.records[-1].getMessage())
    assert record["level"] == "INFO"
    assert record["message"] == "Downloading something"
    assert record["caller_name"] == "test_log_emits_json_line"
    assert record["caller_file"] == "test_installer_logger.py"


def test_level_filters_debug(caplog):
    logger = InstallerLogger(logging.INFO)

    with caplog.at_level(logging.INFO, logger="oshiv_installer"):
        logger.log("hidden", logging.DEBUG)

    assert not any("hidden" in r.getMessage() for r in caplog.records)
