import re
from enum import Enum


class SeparatorPolicy(Enum):
    # How to read a literal that carries only one kind of separator.
    GROUPS_OF_THREE = "groups_of_three"
    COMMA_DECIMAL = "comma_decimal"


def _single_separator(clean_str: str, sep: str, policy: SeparatorPolicy) -> str:
    if policy is SeparatorPolicy.COMMA_DECIMAL:
        if sep == ".":
            return clean_str.replace(".", "")
        return clean_str.replace(",", ".")

    # "1.234.567", "10,000" or "1,2345" -> thousands; "12,50" or "500.00" -> decimal
    if clean_str.count(sep) > 1 or re.search(rf"\{sep}\d{{3,}}$", clean_str):
        return clean_str.replace(sep, "")
    return clean_str.replace(sep, ".")


def clean_amount(amount_str, policy: SeparatorPolicy = SeparatorPolicy.GROUPS_OF_THREE) -> float:
    if not amount_str:
        return 0.0

    # Keep digits, dots, commas, minus
    clean_str = re.sub(r"[^\d.,-]", "", str(amount_str))

    is_negative = "-" in clean_str
    clean_str = clean_str.replace("-", "")

    if not re.search(r"\d", clean_str):
        return 0.0

    if "." in clean_str and "," in clean_str:
        # Whichever separator comes last is the decimal point
        if clean_str.rfind(",") > clean_str.rfind("."):
            val = clean_str.replace(".", "").replace(",", ".")
        else:
            val = clean_str.replace(",", "")
    elif "," in clean_str:
        val = _single_separator(clean_str, ",", policy)
    elif "." in clean_str:
        val = _single_separator(clean_str, ".", policy)
    else:
        val = clean_str

    try:
        amount = float(val)
    except ValueError:
        return 0.0
    return -amount if is_negative else amount
