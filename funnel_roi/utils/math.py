# funnel_roi/utils/math.py
import math
from fractions import Fraction
from typing import Optional

def safe_div(n: Optional[float], d: Optional[float], default: Optional[float] = 0.0) -> Optional[float]:
    if n is None or d in (None, 0):
        return default
    try:
        out = n / d
    except ZeroDivisionError:
        return default
    return out if math.isfinite(out) else default

def r2(x):
    return None if x is None else round(float(x), 2)

def ceil_units(x: float) -> int:
    """Smallest whole unit >= x (exact on the float's value), 0 for x <= 0."""
    if x <= 0:
        return 0
    return math.ceil(Fraction(x))

def required_units(volume: float, rate: float) -> int:
    """
    Whole upstream units needed so that units * (rate / 100) >= volume.
    Evaluated exactly as volume * 100 / rate; rate must be > 0.
    """
    if volume <= 0:
        return 0
    return math.ceil(Fraction(volume) * 100 / Fraction(rate))
