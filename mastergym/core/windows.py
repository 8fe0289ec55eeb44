"""Timestamp range predicates.

Day windows used for session deduplication are half-open, so consecutive
days never share a session. Comparison ranges are inclusive at both ends.
The repository applies the same bounds in SQL.
"""
from datetime import datetime


def in_day_window(value: datetime, start: datetime, end: datetime) -> bool:
    return start <= value < end


def in_range(value: datetime, start: datetime, end: datetime) -> bool:
    return start <= value <= end
