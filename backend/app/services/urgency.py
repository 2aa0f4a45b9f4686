"""Urgency tiers for due dates.

Two boundaries are in use on purpose: calendar/assignment cards flag anything
due within DUE_SOON_DAYS, while the notification list only highlights items
due within IMMEDIATE_DAYS.
"""

from enum import Enum

DUE_SOON_DAYS = 3
IMMEDIATE_DAYS = 1

class Urgency(str, Enum):
    NORMAL = "normal"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"

def classify(days_until: int) -> Urgency:
    if days_until < 0:
        return Urgency.OVERDUE
    if days_until <= DUE_SOON_DAYS:
        return Urgency.DUE_SOON
    return Urgency.NORMAL

def is_immediate(days_until: int) -> bool:
    """Notification-list urgency flag (stricter than `classify`)."""
    return days_until <= IMMEDIATE_DAYS

def within_window(days_until: int, window_days: int) -> bool:
    """True when the date is today or at most `window_days` ahead."""
    return 0 <= days_until <= window_days

def days_label(days_until: int) -> str:
    if days_until < 0:
        return f"{-days_until}日超過"
    if days_until == 0:
        return "今日締切"
    if days_until == 1:
        return "明日締切"
    return f"{days_until}日後"
