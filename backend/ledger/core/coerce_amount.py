"""Amount Coercion — permissive conversion of update values to a numeric amount.

Invariants:
    - Numbers and numeric strings (surrounding whitespace ignored) parse to float
    - Empty strings, None, non-numeric text, NaN and infinities fall back to 0.0
    - bool maps to 1.0 / 0.0
    - parse_amount raises ValueError instead of falling back (strict mode)

Design Decisions:
    - Fallback to 0 is the historical behaviour of the update endpoint; strict mode
      is opt-in via settings.strict_amount_updates
"""

import math


def parse_amount(value: object) -> float:
    """Strict parse. Raises ValueError for anything that is not a finite number."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty amount")
        number = float(text)
    else:
        raise ValueError(f"unsupported amount type: {type(value).__name__}")
    if not math.isfinite(number):
        raise ValueError("amount must be finite")
    return number


def coerce_amount(value: object, default: float = 0.0) -> float:
    """Permissive parse: any value that does not parse becomes `default`."""
    try:
        return parse_amount(value)
    except ValueError:
        return default
