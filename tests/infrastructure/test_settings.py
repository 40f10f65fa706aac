"""Tests for environment-driven settings."""

from decimal import Decimal
from pathlib import Path

import pytest

from storeops.config import ConfigurationError, Settings, load_settings


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(env={})
        assert settings == Settings()
        assert settings.backend == "sql"
        assert settings.atomic_confirmation is True
        assert settings.delivery_charge_inside == Decimal("60")
        assert settings.delivery_charge_outside == Decimal("120")

    def test_overrides(self):
        settings = load_settings(env={
            "STOREOPS_BACKEND": "JSON",
            "STOREOPS_DATA_FILE": "/tmp/shop.json",
            "STOREOPS_ATOMIC_CONFIRMATION": "no",
            "STOREOPS_INVOICE_PREFIX": "SALE",
            "STOREOPS_DOCUMENT_NUMBER_RETRIES": "5",
            "STOREOPS_DELIVERY_CHARGE_OUTSIDE": "150.50",
            "STOREOPS_LOG_LEVEL": "debug",
        })
        assert settings.backend == "json"
        assert settings.data_file == Path("/tmp/shop.json")
        assert settings.atomic_confirmation is False
        assert settings.invoice_prefix == "SALE"
        assert settings.document_number_retries == 5
        assert settings.delivery_charge_outside == Decimal("150.50")
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STOREOPS_ORDER_PREFIX", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("STOREOPS_ORDER_PREFIX=WEB\n")
        settings = load_settings(dotenv_path=env_file)
        assert settings.order_prefix == "WEB"

    @pytest.mark.parametrize(
        ("name", "value", "message"),
        [
            ("STOREOPS_BACKEND", "mongo", "STOREOPS_BACKEND must be one of"),
            ("STOREOPS_ISOLATION_LEVEL", "CHAOS", "STOREOPS_ISOLATION_LEVEL"),
            ("STOREOPS_ATOMIC_CONFIRMATION", "maybe", "must be a boolean"),
            ("STOREOPS_DOCUMENT_NUMBER_RETRIES", "x", "must be an integer"),
            ("STOREOPS_DOCUMENT_NUMBER_RETRIES", "-1", "cannot be negative"),
            ("STOREOPS_DELIVERY_CHARGE_INSIDE", "cheap", "must be a decimal"),
            ("STOREOPS_INVOICE_PREFIX", "inv-", "uppercase letters only"),
            ("STOREOPS_LOG_LEVEL", "LOUD", "STOREOPS_LOG_LEVEL"),
        ],
    )
    def test_invalid_values(self, name, value, message):
        with pytest.raises(ConfigurationError, match=message):
            load_settings(env={name: value})
