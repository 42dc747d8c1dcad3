import logging
import math
from typing import Iterable, Mapping, Union

from models import CalculationResult, LineBreakdown, LineItem, round_half_up, to_percent
from number_words import number_to_words

logger = logging.getLogger(__name__)


def money(val):
    """Round to 2 decimals consistently for money values."""
    return round_half_up(val, 2)


def is_same_state(company_state, client_state) -> bool:
    """
    Company and client in the same state → CGST + SGST
    Else (or state unknown) → IGST
    """
    company_state = (company_state or "").strip().lower()
    client_state = (client_state or "").strip().lower()
    return bool(company_state) and company_state == client_state


def as_line_item(item: Union[LineItem, Mapping]) -> LineItem:
    if isinstance(item, LineItem):
        return item
    return LineItem.from_dict(item)


def compute_line(item: LineItem, same_state: bool) -> LineBreakdown:
    """
    Tax breakdown for one invoice line, on the item-discounted amount.
    Invoice-level discount does not reduce the GST base.
    """
    taxable = item.taxable_amount
    gst = taxable * item.gst_rate / 100
    if not math.isfinite(taxable + gst):
        logger.warning("Line %r overflows, counting it as zero", item.id or item.description)
        return LineBreakdown()
    if same_state:
        return LineBreakdown(taxable=taxable, gst=gst, cgst=gst / 2, sgst=gst / 2)
    return LineBreakdown(taxable=taxable, gst=gst, igst=gst)


def calculate(items: Iterable[Union[LineItem, Mapping]], invoice_discount_percent=0,
              same_state: bool = True) -> CalculationResult:
    """
    Compute invoice totals from line items.

    subtotal is the sum of item-discounted amounts; the invoice discount is taken
    off that, and GST from each line is added on top. Bad numeric input never
    raises, it is counted as zero.
    """
    line_items = [as_line_item(it) for it in items]
    discount_percent = to_percent(invoice_discount_percent)

    subtotal = total_cgst = total_sgst = total_igst = 0.0
    lines = []
    for it in line_items:
        if it.is_stale:
            logger.debug("Ignoring stale amount %s on item %r, recomputed %s",
                         it.amount, it.id or it.description, it.taxable_amount)
        line = compute_line(it, same_state)
        sums = (subtotal + line.taxable, total_cgst + line.cgst,
                total_sgst + line.sgst, total_igst + line.igst)
        if not math.isfinite(sum(sums)):
            logger.warning("Invoice total overflows at item %r, counting it as zero", it.id or it.description)
            line = LineBreakdown()
        else:
            subtotal, total_cgst, total_sgst, total_igst = sums
        lines.append(line)

    discount_amount = subtotal * discount_percent / 100
    taxable_amount = subtotal - discount_amount
    total_gst = total_cgst + total_sgst + total_igst
    total = taxable_amount + total_gst
    rounded_total = round_half_up(total)

    return CalculationResult(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        total_cgst=total_cgst,
        total_sgst=total_sgst,
        total_igst=total_igst,
        total_gst=total_gst,
        total=total,
        rounded_total=rounded_total,
        amount_in_words=number_to_words(rounded_total),
        lines=tuple(lines),
    )
