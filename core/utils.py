"""Utility functions for monstruo application."""

import math
import random
import unicodedata


def normalize_spanish(text) -> str:
    """Lower-case text and strip combining diacritics so 'Adiós' matches 'adios'."""
    if text is None:
        return ''
    decomposed = unicodedata.normalize('NFD', str(text).lower())
    return ''.join(ch for ch in decomposed if not '\u0300' <= ch <= '\u036f')


def shuffle_words(items: list, rng: random.Random = None) -> list:
    """Return a Fisher-Yates shuffled copy of items."""
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


def clamp(value, low: float, high: float) -> float:
    """Clamp value to [low, high]. Non-numeric or NaN values clamp to low."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return low
    if math.isnan(value):
        return low
    return max(low, min(high, value))
