from __future__ import annotations

import math
import re

from arf.core.config import settings

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def parse_amount(value: str | int | float | None) -> float:
    """Parse an operator-typed amount ("35", "35,50", 35.5).

    Raises ``ValueError`` when the value is not a number; callers must not
    fall back to zero.
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Valor inválido")
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = str(value).strip().replace(",", ".", 1)
        if not text:
            raise ValueError("Valor inválido")
        try:
            amount = float(text)
        except ValueError as exc:
            raise ValueError(f"Valor inválido: {value!r}") from exc
    if not math.isfinite(amount):
        raise ValueError(f"Valor inválido: {value!r}")
    return amount


def parse_loose_amount(value: object) -> float | None:
    """Lenient parsing for spreadsheet cells ("R$ 35,00" -> 35.0)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value or "").strip()
    if not text:
        return None
    cleaned = _NON_NUMERIC.sub("", text.replace(",", ".", 1))
    try:
        return float(cleaned)
    except ValueError:
        return None


def format_currency(value: float) -> str:
    """Format as Brazilian currency: 1234.5 -> "R$ 1.234,50"."""
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{settings.currency_symbol} {localized}"


def digits_only(value: str | None) -> str:
    return "".join(filter(str.isdigit, value or ""))
