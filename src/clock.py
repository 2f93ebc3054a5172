from __future__ import annotations

import calendar
import datetime as dt

WEEKDAY_HEADERS: tuple[str, ...] = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


def greeting_for_hour(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def format_clock(value: dt.datetime | dt.time) -> str:
    return f"{int(value.hour):02d}:{int(value.minute):02d}"


def format_long_date(value: dt.date) -> str:
    """Format like `Monday, October 19`."""
    return f"{calendar.day_name[value.weekday()]}, {calendar.month_name[value.month]} {value.day}"


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def month_grid(year: int, month: int) -> list[list[int]]:
    """Sunday-first weeks of the month; 0 marks padding days outside the month."""
    return calendar.Calendar(firstweekday=calendar.SUNDAY).monthdayscalendar(year, month)
