"""
Tests for configuration loading
"""

from home_banking.config import BankingConfig, get_config, reload_config


class TestBankingConfig:
    """Test defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        """Test the program needs no environment"""
        for name in ("DATA_FILE", "FIRST_ACCOUNT_NUMBER", "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE"):
            monkeypatch.delenv(f"HOME_BANKING_{name}", raising=False)

        config = BankingConfig(_env_file=None)

        assert config.data_file == "bank_data.txt"
        assert config.first_account_number == 1001
        assert config.log_level == "WARNING"
        assert config.log_format == "json"
        assert config.log_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("HOME_BANKING_DATA_FILE", "/tmp/other.txt")
        monkeypatch.setenv("HOME_BANKING_FIRST_ACCOUNT_NUMBER", "2001")

        config = BankingConfig(_env_file=None)

        assert config.data_file == "/tmp/other.txt"
        assert config.first_account_number == 2001

    def test_reload(self, monkeypatch):
        monkeypatch.setenv("HOME_BANKING_LOG_LEVEL", "DEBUG")

        try:
            assert reload_config().log_level == "DEBUG"
            assert get_config().log_level == "DEBUG"
        finally:
            monkeypatch.delenv("HOME_BANKING_LOG_LEVEL")
            reload_config()
