"""Reminder domain types and the failures raised while resolving them."""

from dataclasses import dataclass
from datetime import date as Date, datetime
from enum import Enum

from backend.app.services.date_resolver import from_storage, to_calendar_date

class QueryFailure(Exception):
    """The store could not be queried; the whole tick is abandoned."""

class ResolutionFailure(Exception):
    """A single reminder's linked entity is missing or unreadable."""

class AnnouncementKind(str, Enum):
    ASSIGNMENT = "assignment"
    TEST = "test"
    GENERAL_NOTICE = "general_notice"

@dataclass(frozen=True)
class AnnouncementLink:
    announcement_id: int

@dataclass(frozen=True)
class ScheduleLink:
    schedule_id: int

ReminderLink = AnnouncementLink | ScheduleLink

@dataclass(frozen=True)
class Reminder:
    id: int
    owner_id: int
    fires_at: datetime
    link: ReminderLink

    def __post_init__(self):
        if not isinstance(self.link, (AnnouncementLink, ScheduleLink)):
            raise TypeError(f"reminder {self.id}: link must be AnnouncementLink or ScheduleLink")

    @classmethod
    def from_row(cls, row) -> "Reminder":
        """Build from a `reminders` row; exactly one foreign key must be set."""
        announcement_id = row["announcement_id"]
        schedule_id = row["schedule_id"]
        if (announcement_id is None) == (schedule_id is None):
            raise ValueError(
                f"reminder {row['id']} must link exactly one of announcement/schedule"
            )
        if announcement_id is not None:
            link = AnnouncementLink(int(announcement_id))
        else:
            link = ScheduleLink(int(schedule_id))
        return cls(
            id=int(row["id"]),
            owner_id=int(row["user_id"]),
            fires_at=from_storage(row["remind_at"]),
            link=link,
        )

@dataclass(frozen=True)
class Announcement:
    id: int
    kind: AnnouncementKind
    title: str
    description: str
    due_date: Date | None
    subject_name: str = ""
    subsubject_name: str = ""
    subject_color: str | None = None

    @property
    def display_subject(self) -> str:
        if self.subsubject_name:
            return f"{self.subject_name} ({self.subsubject_name})"
        return self.subject_name

    @classmethod
    def from_row(cls, row) -> "Announcement":
        raw_due = row["due_date"]
        return cls(
            id=int(row["id"]),
            kind=AnnouncementKind(row["type"]),
            title=row["title"],
            description=row["description"] or "",
            due_date=to_calendar_date(raw_due) if raw_due else None,
            subject_name=row["subject_name"] or "",
            subsubject_name=row["subsubject_name"] or "",
            subject_color=row["subject_color"],
        )

@dataclass(frozen=True)
class ScheduleEntry:
    id: int
    owner_id: int
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    subject_name: str = ""
    subject_color: str | None = None

    @classmethod
    def from_row(cls, row) -> "ScheduleEntry":
        return cls(
            id=int(row["id"]),
            owner_id=int(row["user_id"]),
            title=row["title"],
            description=row["description"] or "",
            start_time=from_storage(row["start_time"]),
            end_time=from_storage(row["end_time"]),
            subject_name=row["subject_name"] or "",
            subject_color=row["subject_color"],
        )

@dataclass(frozen=True)
class NotificationPayload:
    reminder_id: int
    title: str
    body: str
    icon: str
    category: str

@dataclass(frozen=True)
class MatchedReminder:
    reminder: Reminder
    entity: Announcement | ScheduleEntry
    payload: NotificationPayload
