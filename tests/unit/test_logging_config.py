"""
Unit Tests for Logging Configuration
"""

import json
import logging

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from hfprop.common.logging_config import JSONFormatter, ServiceLogger, setup_logging


def make_record(**extra):
    record = logging.LogRecord(
        name="hfprop", level=logging.INFO, pathname=__file__, lineno=10,
        msg="fetched %d samples", args=(3,), exc_info=None, func="fetch"
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data['level'] == 'INFO'
        assert data['logger'] == 'hfprop'
        assert data['message'] == 'fetched 3 samples'
        assert data['function'] == 'fetch'
        assert data['line'] == 10
        assert data['timestamp'].endswith('Z')

    def test_context_fields(self):
        record = make_record(service='hfprop', component='giro_client')
        data = json.loads(JSONFormatter().format(record))

        assert data['service'] == 'hfprop'
        assert data['component'] == 'giro_client'


class TestSetupLogging:

    def test_level_and_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "hfprop.log"
        logger = setup_logging("hfprop-test", log_level="debug", log_file=str(log_file))

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert log_file.parent.exists()

        for handler in logger.handlers:
            handler.close()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("hfprop-test2")
        logger = setup_logging("hfprop-test2", json_format=True)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)


class TestServiceLogger:

    def test_context_attached(self, caplog):
        log = ServiceLogger("hfprop-svc", "decoder")
        with caplog.at_level(logging.INFO, logger="hfprop-svc"):
            log.info("decoded", extra={'samples': 3})

        record = caplog.records[0]
        assert record.service == "hfprop-svc"
        assert record.component == "decoder"
        assert record.samples == 3
