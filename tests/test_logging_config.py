"""
Tests for structured logging setup
"""

import json
import logging

from home_banking.logging_config import JSONFormatter, setup_logging, log_action


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestJSONFormatter:
    """Test the JSON record layout"""

    def test_format(self):
        record = logging.LogRecord(
            "home_banking.ledger", logging.INFO, __file__, 1, "Account created", (), None
        )
        record.action = "create_account"
        record.resource = "account:1001"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Account created"
        assert entry["action"] == "create_account"
        assert entry["resource"] == "account:1001"
        assert "extra" not in entry


class TestSetupLogging:
    """Test handler configuration"""

    def test_json_to_file(self, tmp_path):
        log_file = tmp_path / "ledger.log"
        logger = setup_logging("INFO", "home_banking_test_file", log_file=str(log_file))

        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        assert json.loads(log_file.read_text().splitlines()[0])["message"] == "hello"
        assert not logger.propagate

    def test_text_format_and_no_duplicate_handlers(self):
        setup_logging("DEBUG", "home_banking_test_text", log_format="text")
        logger = setup_logging("DEBUG", "home_banking_test_text", log_format="text")

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.DEBUG


class TestLogAction:
    """Test structured action records"""

    def test_fields_attached(self):
        logger = logging.getLogger("home_banking_test_action")
        logger.setLevel(logging.INFO)
        handler = ListHandler()
        logger.addHandler(handler)

        try:
            log_action(logger, "info", "Deposit posted", action="deposit",
                       resource="account:1001", extra={"amount": "5.00"})
            log_action(logger, "debug", "ignored")
        finally:
            logger.removeHandler(handler)

        (record,) = handler.records
        assert record.action == "deposit"
        assert record.resource == "account:1001"
        assert record.extra == {"amount": "5.00"}
