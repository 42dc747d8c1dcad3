import logging
import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = data.get("LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Invoice numbering: SIT-003-24-25
    INVOICE_PREFIX = data.get("INVOICE_PREFIX", "SIT")
    INVOICE_SEQUENCE_WIDTH = int(data.get("INVOICE_SEQUENCE_WIDTH", 3))
    FISCAL_YEAR_START_MONTH = int(data.get("FISCAL_YEAR_START_MONTH", 1))  # 4 for April-March

    # New invoice drafts
    PAYMENT_DUE_DAYS = int(data.get("PAYMENT_DUE_DAYS", 30))
    DEFAULT_TERMS = data.get("DEFAULT_TERMS", "Payment due within 30 days of issue.")
    DEFAULT_PAYMENT_TERMS = data.get("DEFAULT_PAYMENT_TERMS", "Net 30")

    # Reports
    SEARCH_SCORE_CUTOFF = data.get("SEARCH_SCORE_CUTOFF", 80)
    REPORT_MONTHS = int(data.get("REPORT_MONTHS", 6))

    COMPANY_INFO = {
        "name": "Friends Group Company Pvt. Ltd.",
        "address": "Wiman Nagar, Pune, Maharashtra",
        "gstin": "27ABCDE1234F1Z5",
        "state": "Maharashtra",
        "signatory": "Authorised Signatory",
        **data.get("COMPANY_INFO", {}),
    }


def configure_logging(level=None):
    logging.basicConfig(
        level=level or ApplicationConfig.LOG_LEVEL,
        format=ApplicationConfig.LOG_FORMAT,
    )
