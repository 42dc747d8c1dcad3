import logging
from datetime import date
from typing import Optional

from config import ApplicationConfig

logger = logging.getLogger(__name__)


def fiscal_year_label(today: Optional[date] = None, start_month: Optional[int] = None) -> str:
    """
    "24-25" style label. With start_month=4 the year runs April to March, so
    2025-02-10 still belongs to 24-25.
    """
    today = today or date.today()
    if start_month is None:
        start_month = ApplicationConfig.FISCAL_YEAR_START_MONTH
    year = today.year if today.month >= start_month else today.year - 1
    return f"{year % 100:02d}-{(year + 1) % 100:02d}"


def parse_sequence(number, prefix: str) -> Optional[int]:
    """Sequence part of PREFIX-NNN-YY-YY, or None when the number doesn't parse."""
    if not isinstance(number, str) or not number.startswith(prefix + "-"):
        return None
    segment = number[len(prefix) + 1:].split("-", 1)[0]
    # isdigit() alone admits digits like "²" that int() rejects
    if not (segment.isascii() and segment.isdigit()):
        return None
    return int(segment)


def _sort_key(created_at, position):
    if hasattr(created_at, "isoformat"):
        created_at = created_at.isoformat()
    return ("" if created_at is None else str(created_at), position)


def latest_sequence(existing_numbers, prefix: str) -> Optional[int]:
    """
    Sequence of the most recently created valid number for the prefix.

    Entries are plain strings in creation order, or (number, created_at) pairs
    where the greatest created_at wins.
    """
    latest_key = None
    latest = None
    for position, entry in enumerate(existing_numbers or []):
        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            number, created_at = entry
        else:
            number, created_at = entry, None

        if not isinstance(number, str) or not number.startswith(prefix + "-"):
            continue
        sequence = parse_sequence(number, prefix)
        if sequence is None:
            logger.warning("Skipping malformed invoice number %r", number)
            continue

        key = _sort_key(created_at, position)
        if latest_key is None or key > latest_key:
            latest_key, latest = key, sequence
    return latest


def generate_invoice_number(existing_numbers, prefix: Optional[str] = None,
                            today: Optional[date] = None) -> str:
    """
    Next invoice number after the most recently issued one for this prefix,
    e.g. SIT-003-24-25 -> SIT-004-24-25. Starts at 1 when there is no usable
    history.

    Only numbers starting with ``prefix + "-"`` count for the prefix, so
    "SITE-004-24-25" is not part of the "SIT" series.
    """
    prefix = prefix or ApplicationConfig.INVOICE_PREFIX
    last = latest_sequence(existing_numbers, prefix)
    sequence = 1 if last is None else last + 1
    width = ApplicationConfig.INVOICE_SEQUENCE_WIDTH
    return f"{prefix}-{sequence:0{width}d}-{fiscal_year_label(today)}"
