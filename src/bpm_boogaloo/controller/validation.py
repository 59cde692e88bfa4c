import math


def ensure_finite(value: float) -> None:
    """Ensure value is finite.

    Args:
        value: Value to check.

    Raises:
        ValueError: If value is not finite.
    """
    if not math.isfinite(value):
        msg = f"value must be finite, got {value!r}"
        raise ValueError(msg)


def normalize_bpm(bpm: float | None) -> float | None:
    if bpm is None:
        return None
    if not math.isfinite(bpm) or bpm <= 0:
        return None
    return float(bpm)


def parse_bpm(text: str | None) -> float | None:
    """Parse user-entered BPM text.

    Args:
        text: Raw text from the BPM entry field.

    Returns:
        The BPM as a float, or None when the text is not a positive finite number.
    """
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return normalize_bpm(value)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
