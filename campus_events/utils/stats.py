"""
Zero-safe arithmetic for report figures.

Every rate and average in the reports goes through these so an empty
denominator yields 0 instead of a ZeroDivisionError or NaN.
"""

from typing import Iterable, Union

Number = Union[int, float]


def safe_divide(numerator: Number, denominator: Number) -> float:
    if not denominator:
        return 0
    return numerator / denominator


def safe_percentage(part: Number, whole: Number, digits: int = 2) -> float:
    return round(safe_divide(part, whole) * 100, digits)


def safe_average(values: Iterable[Number], digits: int = 2) -> float:
    values = list(values)
    return round(safe_divide(sum(values), len(values)), digits)
