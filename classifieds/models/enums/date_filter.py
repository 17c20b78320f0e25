from enum import Enum


class DateFilter(str, Enum):
    NONE = "none"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
