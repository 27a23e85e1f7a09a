# services/schedule/parsing.py - time label and academic week helpers
import re
from datetime import date, timedelta
from typing import Optional

# Academic week runs Saturday..Thursday
WEEK_DAYS = ["Saturday", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]

# The grid has 13 one-hour rows, 09:00 through 21:00
DAY_START_HOUR = 9
LAST_ROW = 12

_TIME_RE = re.compile(r'(\d{1,2}):\d{2}\s*(AM|PM)?', re.IGNORECASE)

def parse_start_hour(time_label: str) -> Optional[int]:
    """24-hour start hour of a label such as "1:00 PM - 3:00 PM", or None"""
    match = _TIME_RE.search(time_label or "")
    if not match:
        return None
    hour = int(match.group(1))
    meridiem = (match.group(2) or "").upper()
    if meridiem == "PM" and hour != 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0
    return hour

def grid_row(time_label: str) -> int:
    """Zero-based grid row; unparseable labels land on row 0"""
    hour = parse_start_hour(time_label)
    if hour is None:
        return 0
    return max(0, min(LAST_ROW, hour - DAY_START_HOUR))

def week_start_for(day: date) -> date:
    """The Saturday on or before day"""
    return day - timedelta(days=(day.weekday() - 5) % 7)

def day_index(day_name: str) -> int:
    try:
        return WEEK_DAYS.index(day_name)
    except ValueError:
        return len(WEEK_DAYS)
