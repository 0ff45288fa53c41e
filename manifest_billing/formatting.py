"""
Number Formatting

Display helpers shared by breakdown text and exports.
"""


def format_number(n: float) -> str:
    """
    Format a weight, rate or amount without a trailing '.0'.
    Example: 30.0 -> "30", 12.5 -> "12.5"
    """
    if float(n).is_integer():
        return str(int(n))
    return f"{n:.2f}".rstrip("0").rstrip(".")


def format_rupees(n: float) -> str:
    """
    Format an amount with thousands separators for printed totals.
    Example: 1234567 -> "Rs.1,234,567"
    """
    if float(n).is_integer():
        return f"Rs.{n:,.0f}"
    return f"Rs.{n:,.2f}"
