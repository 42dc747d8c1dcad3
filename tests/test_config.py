"""Tests for configuration defaults and logging setup"""

import logging

import config
from config import ApplicationConfig, configure_logging


def test_invoice_defaults():
    assert ApplicationConfig.INVOICE_PREFIX == "SIT"
    assert ApplicationConfig.INVOICE_SEQUENCE_WIDTH == 3
    assert ApplicationConfig.PAYMENT_DUE_DAYS == 30


def test_company_info_has_required_fields():
    assert {"name", "address", "gstin", "state", "signatory"} <= set(ApplicationConfig.COMPANY_INFO)


def test_configure_logging_uses_configured_level(monkeypatch):
    calls = []
    monkeypatch.setattr(config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging()
    configure_logging(logging.DEBUG)

    assert calls[0]["level"] == ApplicationConfig.LOG_LEVEL
    assert calls[1]["level"] == logging.DEBUG
