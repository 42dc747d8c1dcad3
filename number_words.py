import math

from models import round_half_up

UNITS = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
         "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen",
         "Eighteen", "Nineteen"]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1000


def convert_less_than_one_thousand(num: int) -> str:
    if num == 0:
        return ""
    if num < 20:
        return UNITS[num]
    if num < 100:
        digit = num % 10
        return TENS[num // 10] + (" " + UNITS[digit] if digit else "")
    rest = num % 100
    return UNITS[num // 100] + " Hundred" + (" and " + convert_less_than_one_thousand(rest) if rest else "")


def _rupees_in_words(rupees: int) -> str:
    crore, rest = divmod(rupees, CRORE)
    lakh, rest = divmod(rest, LAKH)
    thousand, remaining = divmod(rest, THOUSAND)

    parts = []
    if crore:
        # crore counts use the same grouping: 150 crore -> "One Hundred and Fifty Crore"
        parts.append(_rupees_in_words(crore) + " Crore")
    if lakh:
        parts.append(convert_less_than_one_thousand(lakh) + " Lakh")
    if thousand:
        parts.append(convert_less_than_one_thousand(thousand) + " Thousand")
    if remaining:
        parts.append(convert_less_than_one_thousand(remaining))
    return " ".join(parts)


def number_to_words(amount) -> str:
    """
    Render a rupee amount in words with Indian grouping (crore, lakh, thousand),
    e.g. 1234.56 -> "One Thousand Two Hundred and Thirty Four Rupees and
    Fifty Six Paise Only".
    """
    amount = float(amount)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"Cannot express {amount!r} in words; amount must be a non-negative finite number")
    if amount == 0:
        return "Zero Rupees Only"

    rupees = math.floor(amount)
    paise = round_half_up((amount - rupees) * 100)
    if paise == 100:
        rupees += 1
        paise = 0

    words = ""
    if rupees:
        words = _rupees_in_words(rupees) + " Rupees"
    if paise:
        paise_words = convert_less_than_one_thousand(paise) + " Paise"
        words = words + " and " + paise_words if words else paise_words
    if not words:
        return "Zero Rupees Only"
    return words + " Only"


def format_indian(amount, decimals=2) -> str:
    """Digits grouped the Indian way: 1234567.5 -> '12,34,567.50'."""
    value = round_half_up(amount, decimals)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.{decimals}f}".partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return sign + whole + ("." + fraction if fraction else "")
