from __future__ import annotations
from datetime import date
from typing import Union


def format_date(value: Union[date, str]) -> str:
    """2024-06-01 -> 'Jun 1, 2024'."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{value:%b} {value.day}, {value.year}"


def count_label(n: int, noun: str = "task") -> str:
    return f"{n} {noun if n == 1 else noun + 's'}"
