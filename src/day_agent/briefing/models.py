"""Data models for the daily briefing.

Every record converts to and from the backend's camelCase JSON form via
``to_dict()`` / ``from_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SuggestionType(str, Enum):
    PRIORITY = "priority"
    TIME_BLOCK = "time_block"
    EMAIL_ACTION = "email_action"
    TASK_REMINDER = "task_reminder"
    MEETING_PREP = "meeting_prep"


class TargetType(str, Enum):
    """Item kinds a suggestion can point at."""

    EMAIL = "email"
    TASK = "task"
    EVENT = "event"


# ---- Provider records ----


@dataclass
class CalendarConfig:
    """Which calendars to read, plus credentials forwarded to remote backends."""

    calendar_ids: list[str] = field(default_factory=lambda: ["primary"])
    host: str | None = None
    username: str | None = None
    password: str | None = None

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "username": self.username,
            "password": self.password,
            "calendarIds": list(self.calendar_ids),
        }


@dataclass
class CalendarEvent:
    """A raw calendar entry as returned by a calendar provider."""

    id: str
    calendar_id: str
    summary: str
    start: str  # ISO 8601
    end: str  # ISO 8601
    location: str | None = None
    all_day: bool = False
    attendees: list[str] = field(default_factory=list)


@dataclass
class Task:
    """A raw task as returned by a task provider."""

    id: str
    calendar_id: str
    summary: str
    description: str | None = None
    due: str | None = None  # ISO 8601 date or datetime
    priority: int | None = None  # 1 (highest) .. 9
    completed: bool = False
    completed_at: str | None = None  # ISO 8601


# ---- Email ----


@dataclass
class ImportantEmail:
    uid: str
    folder: str
    subject: str
    sender: str
    date: str
    is_read: bool = False
    importance_reason: str | None = None

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "folder": self.folder,
            "subject": self.subject,
            "from": self.sender,
            "date": self.date,
            "isRead": self.is_read,
            "importanceReason": self.importance_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ImportantEmail:
        return cls(
            uid=str(data["uid"]),
            folder=data.get("folder", "INBOX"),
            subject=data.get("subject", ""),
            sender=data.get("from", ""),
            date=data.get("date", ""),
            is_read=bool(data.get("isRead", False)),
            importance_reason=data.get("importanceReason"),
        )


@dataclass
class EmailDeadline:
    email_uid: str
    email_subject: str
    deadline_date: str
    deadline_description: str
    is_urgent: bool = False

    def to_dict(self) -> dict:
        return {
            "emailUid": self.email_uid,
            "emailSubject": self.email_subject,
            "deadlineDate": self.deadline_date,
            "deadlineDescription": self.deadline_description,
            "isUrgent": self.is_urgent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> EmailDeadline:
        return cls(
            email_uid=str(data["emailUid"]),
            email_subject=data.get("emailSubject", ""),
            deadline_date=data.get("deadlineDate", ""),
            deadline_description=data.get("deadlineDescription", ""),
            is_urgent=bool(data.get("isUrgent", False)),
        )


@dataclass
class EmailDaySummary:
    unread_count: int = 0
    important_emails: list[ImportantEmail] = field(default_factory=list)
    emails_read_today: int = 0
    emails_with_deadlines: list[EmailDeadline] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "unreadCount": self.unread_count,
            "importantEmails": [e.to_dict() for e in self.important_emails],
            "emailsReadToday": self.emails_read_today,
            "emailsWithDeadlines": [d.to_dict() for d in self.emails_with_deadlines],
        }

    @classmethod
    def from_dict(cls, data: dict) -> EmailDaySummary:
        return cls(
            unread_count=int(data.get("unreadCount", 0)),
            important_emails=[
                ImportantEmail.from_dict(e) for e in data.get("importantEmails", [])
            ],
            emails_read_today=int(data.get("emailsReadToday", 0)),
            emails_with_deadlines=[
                EmailDeadline.from_dict(d) for d in data.get("emailsWithDeadlines", [])
            ],
        )


# ---- Calendar ----


@dataclass
class CalendarEventSummary:
    id: str
    calendar_id: str
    summary: str
    start: str
    end: str
    location: str | None = None
    all_day: bool = False
    is_past: bool = False
    attendee_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "calendarId": self.calendar_id,
            "summary": self.summary,
            "location": self.location,
            "start": self.start,
            "end": self.end,
            "allDay": self.all_day,
            "isPast": self.is_past,
            "attendeeCount": self.attendee_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CalendarEventSummary:
        return cls(
            id=data["id"],
            calendar_id=data.get("calendarId", ""),
            summary=data.get("summary", ""),
            start=data.get("start", ""),
            end=data.get("end", ""),
            location=data.get("location"),
            all_day=bool(data.get("allDay", False)),
            is_past=bool(data.get("isPast", False)),
            attendee_count=int(data.get("attendeeCount", 0)),
        )


@dataclass
class CalendarDaySummary:
    today_events: list[CalendarEventSummary] = field(default_factory=list)
    next_event: CalendarEventSummary | None = None
    minutes_until_next: int | None = None
    total_events_today: int = 0
    events_completed: int = 0
    events_remaining: int = 0

    def to_dict(self) -> dict:
        return {
            "todayEvents": [e.to_dict() for e in self.today_events],
            "nextEvent": self.next_event.to_dict() if self.next_event else None,
            "minutesUntilNext": self.minutes_until_next,
            "totalEventsToday": self.total_events_today,
            "eventsCompleted": self.events_completed,
            "eventsRemaining": self.events_remaining,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CalendarDaySummary:
        next_event = data.get("nextEvent")
        return cls(
            today_events=[
                CalendarEventSummary.from_dict(e) for e in data.get("todayEvents", [])
            ],
            next_event=CalendarEventSummary.from_dict(next_event) if next_event else None,
            minutes_until_next=data.get("minutesUntilNext"),
            total_events_today=int(data.get("totalEventsToday", 0)),
            events_completed=int(data.get("eventsCompleted", 0)),
            events_remaining=int(data.get("eventsRemaining", 0)),
        )


# ---- Tasks ----


@dataclass
class TaskSummary:
    id: str
    calendar_id: str
    summary: str
    description: str | None = None
    due: str | None = None
    priority: int | None = None
    priority_label: str = "medium"
    is_overdue: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "calendarId": self.calendar_id,
            "summary": self.summary,
            "description": self.description,
            "due": self.due,
            "priority": self.priority,
            "priorityLabel": self.priority_label,
            "isOverdue": self.is_overdue,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TaskSummary:
        return cls(
            id=data["id"],
            calendar_id=data.get("calendarId", ""),
            summary=data.get("summary", ""),
            description=data.get("description"),
            due=data.get("due"),
            priority=data.get("priority"),
            priority_label=data.get("priorityLabel", "medium"),
            is_overdue=bool(data.get("isOverdue", False)),
        )


@dataclass
class TaskDaySummary:
    due_today: list[TaskSummary] = field(default_factory=list)
    overdue: list[TaskSummary] = field(default_factory=list)
    due_this_week: list[TaskSummary] = field(default_factory=list)
    completed_today: int = 0
    high_priority_pending: list[TaskSummary] = field(default_factory=list)
    total_open: int = 0

    def to_dict(self) -> dict:
        return {
            "dueToday": [t.to_dict() for t in self.due_today],
            "overdue": [t.to_dict() for t in self.overdue],
            "dueThisWeek": [t.to_dict() for t in self.due_this_week],
            "completedToday": self.completed_today,
            "highPriorityPending": [t.to_dict() for t in self.high_priority_pending],
            "totalOpen": self.total_open,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TaskDaySummary:
        def tasks(key: str) -> list[TaskSummary]:
            return [TaskSummary.from_dict(t) for t in data.get(key, [])]

        return cls(
            due_today=tasks("dueToday"),
            overdue=tasks("overdue"),
            due_this_week=tasks("dueThisWeek"),
            completed_today=int(data.get("completedToday", 0)),
            high_priority_pending=tasks("highPriorityPending"),
            total_open=int(data.get("totalOpen", 0)),
        )


# ---- Suggestions ----


@dataclass(frozen=True)
class SuggestedAction:
    """Reference from a suggestion to the item it is about.

    ``target_type`` is a ``TargetType`` when recognised; unknown values are
    kept as the raw string.
    """

    target_type: TargetType | str
    target_id: str
    action_type: str = ""

    def to_dict(self) -> dict:
        target_type = self.target_type
        if isinstance(target_type, TargetType):
            target_type = target_type.value
        return {
            "actionType": self.action_type,
            "targetId": self.target_id,
            "targetType": target_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SuggestedAction:
        raw_type = data.get("targetType", "")
        try:
            target_type: TargetType | str = TargetType(raw_type)
        except ValueError:
            target_type = raw_type
        return cls(
            target_type=target_type,
            target_id=str(data.get("targetId", "")),
            action_type=data.get("actionType", ""),
        )


@dataclass(frozen=True)
class Suggestion:
    """Recommendation shown with the briefing.

    ``suggestion_type`` is a ``SuggestionType`` when recognised; unknown values
    are kept as the raw string.
    """

    suggestion_type: SuggestionType | str
    title: str
    description: str
    action: SuggestedAction | None = None

    def to_dict(self) -> dict:
        return {
            "suggestionType": (
                self.suggestion_type.value
                if isinstance(self.suggestion_type, SuggestionType)
                else self.suggestion_type
            ),
            "title": self.title,
            "description": self.description,
            "action": self.action.to_dict() if self.action else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Suggestion:
        action = data.get("action")
        raw_type = data.get("suggestionType") or "priority"
        try:
            suggestion_type: SuggestionType | str = SuggestionType(raw_type)
        except ValueError:
            suggestion_type = raw_type
        return cls(
            suggestion_type=suggestion_type,
            title=data.get("title", ""),
            description=data.get("description", ""),
            action=SuggestedAction.from_dict(action) if action else None,
        )


# ---- Progress & state ----


@dataclass(frozen=True)
class DayProgress:
    """Morning counts plus cumulative deltas since the morning."""

    morning_unread: int = 0
    morning_open_tasks: int = 0
    morning_events: int = 0
    emails_processed: int = 0
    tasks_completed: int = 0
    events_attended: int = 0
    overall_progress_percent: int = 0

    def to_dict(self) -> dict:
        return {
            "morningUnread": self.morning_unread,
            "morningOpenTasks": self.morning_open_tasks,
            "morningEvents": self.morning_events,
            "emailsProcessed": self.emails_processed,
            "tasksCompleted": self.tasks_completed,
            "eventsAttended": self.events_attended,
            "overallProgressPercent": self.overall_progress_percent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DayProgress:
        return cls(
            morning_unread=int(data["morningUnread"]),
            morning_open_tasks=int(data["morningOpenTasks"]),
            morning_events=int(data["morningEvents"]),
            emails_processed=int(data.get("emailsProcessed", 0)),
            tasks_completed=int(data.get("tasksCompleted", 0)),
            events_attended=int(data.get("eventsAttended", 0)),
            overall_progress_percent=int(data.get("overallProgressPercent", 0)),
        )


@dataclass(frozen=True)
class DayCounts:
    """The current counts a baseline is compared against."""

    unread: int = 0
    open_tasks: int = 0
    events_today: int = 0
    events_completed: int = 0

    @classmethod
    def from_state(cls, state: DayState) -> DayCounts:
        return cls(
            unread=state.email_summary.unread_count,
            open_tasks=state.task_summary.total_open,
            events_today=state.calendar_summary.total_events_today,
            events_completed=state.calendar_summary.events_completed,
        )


@dataclass(frozen=True)
class DayState:
    """One complete snapshot of the day. Replaced wholesale on refresh."""

    generated_at: str  # ISO 8601
    email_summary: EmailDaySummary
    calendar_summary: CalendarDaySummary
    task_summary: TaskDaySummary
    progress: DayProgress
    ai_briefing: str | None = None
    ai_suggestions: tuple[Suggestion, ...] = ()

    def to_dict(self) -> dict:
        return {
            "generatedAt": self.generated_at,
            "emailSummary": self.email_summary.to_dict(),
            "calendarSummary": self.calendar_summary.to_dict(),
            "taskSummary": self.task_summary.to_dict(),
            "aiBriefing": self.ai_briefing,
            "aiSuggestions": [s.to_dict() for s in self.ai_suggestions],
            "progress": self.progress.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> DayState:
        return cls(
            generated_at=data["generatedAt"],
            email_summary=EmailDaySummary.from_dict(data.get("emailSummary") or {}),
            calendar_summary=CalendarDaySummary.from_dict(data.get("calendarSummary") or {}),
            task_summary=TaskDaySummary.from_dict(data.get("taskSummary") or {}),
            ai_briefing=data.get("aiBriefing"),
            ai_suggestions=tuple(
                Suggestion.from_dict(s) for s in data.get("aiSuggestions") or []
            ),
            progress=DayProgress.from_dict(data["progress"]),
        )
