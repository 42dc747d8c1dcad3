import math
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional


def round_half_up(value, places=0):
    """Commercial rounding, ties away from zero. Whole units come back as int."""
    quantum = Decimal(1).scaleb(-places)
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # quantize needs every integer digit plus the kept places
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def to_number(value) -> float:
    """Parse a form value into a finite float; anything unusable becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_percent(value) -> float:
    """Like to_number, clamped to [0, 100]."""
    return min(max(to_number(value), 0.0), 100.0)


@dataclass(frozen=True)
class LineItem:
    """
    One invoice row. Numeric fields are sanitized on construction, so an
    incomplete or garbled row contributes zero instead of poisoning totals.
    `amount` is the stored display value and is never trusted for math.
    """
    description: str = ""
    hsn_code: str = ""
    quantity: float = 0.0
    rate: float = 0.0
    discount_percent: float = 0.0
    gst_rate: float = 0.0
    amount: Optional[float] = None
    id: str = ""

    def __post_init__(self):
        for name in ("quantity", "rate", "gst_rate"):
            object.__setattr__(self, name, max(to_number(getattr(self, name)), 0.0))
        object.__setattr__(self, "discount_percent", to_percent(self.discount_percent))
        if self.amount is not None:
            object.__setattr__(self, "amount", to_number(self.amount))

    @property
    def base_amount(self) -> float:
        base = self.quantity * self.rate
        # finite inputs can still overflow, e.g. 1e200 * 1e200
        return base if math.isfinite(base) else 0.0

    @property
    def discount_amount(self) -> float:
        return self.base_amount * self.discount_percent / 100

    @property
    def taxable_amount(self) -> float:
        return self.base_amount - self.discount_amount

    @property
    def is_stale(self) -> bool:
        if self.amount is None:
            return False
        return not math.isclose(self.amount, self.taxable_amount, rel_tol=1e-9, abs_tol=1e-9)

    @classmethod
    def from_dict(cls, data):
        """Accept the stored camelCase shape as well as snake_case keys."""
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        return cls(
            description=str(pick("description", default="")),
            hsn_code=str(pick("hsnCode", "hsn_code", "hsn", default="")),
            quantity=pick("quantity", "qty", default=0),
            rate=pick("rate", "unit_price", default=0),
            discount_percent=pick("discountPercent", "discount_percent", default=0),
            gst_rate=pick("gstRate", "gst_rate", default=0),
            amount=pick("amount"),
            id=str(pick("id", default="")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "description": self.description,
            "hsnCode": self.hsn_code,
            "quantity": self.quantity,
            "rate": self.rate,
            "discountPercent": self.discount_percent,
            "gstRate": self.gst_rate,
            "amount": self.taxable_amount,
        }


@dataclass(frozen=True)
class ItemPatch:
    """Fields changed by a single edit of an item row; None means unchanged."""
    description: Optional[str] = None
    hsn_code: Optional[str] = None
    quantity: Optional[float] = None
    rate: Optional[float] = None
    discount_percent: Optional[float] = None
    gst_rate: Optional[float] = None


def apply_patch(item: LineItem, patch: ItemPatch) -> LineItem:
    changes = {f.name: getattr(patch, f.name) for f in fields(patch) if getattr(patch, f.name) is not None}
    updated = replace(item, **changes)
    return replace(updated, amount=updated.taxable_amount)


@dataclass(frozen=True)
class LineBreakdown:
    taxable: float = 0.0
    gst: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0

    @property
    def line_total(self) -> float:
        return self.taxable + self.gst


@dataclass(frozen=True)
class CalculationResult:
    subtotal: float = 0.0
    discount_amount: float = 0.0
    taxable_amount: float = 0.0
    total_cgst: float = 0.0
    total_sgst: float = 0.0
    total_igst: float = 0.0
    total_gst: float = 0.0
    total: float = 0.0
    rounded_total: int = 0
    amount_in_words: str = "Zero Rupees Only"
    lines: tuple = field(default=(), repr=False)

    def to_dict(self):
        """Column names as persisted alongside the raw items."""
        return {
            "subtotal": self.subtotal,
            "totalCGST": self.total_cgst,
            "totalSGST": self.total_sgst,
            "totalIGST": self.total_igst,
            "totalGST": self.total_gst,
            "total": self.total,
            "roundedTotal": self.rounded_total,
            "amountInWords": self.amount_in_words,
        }
