"""Exceptions raised by the tracker service."""


class TrackerError(Exception):
    """Base class for tracker failures shown to the user."""


class DayNotFoundError(TrackerError):
    """No document exists for the requested metric and date."""

    def __init__(self, metric: str, day: str):
        self.metric = metric
        self.day = day
        super().__init__(f"No {metric} data logged for {day}")


class EntryNotFoundError(TrackerError):
    """The requested entry id is not part of the day's entries."""

    def __init__(self, metric: str, day: str, entry_id: str):
        self.metric = metric
        self.day = day
        self.entry_id = entry_id
        super().__init__(f"No {metric} entry '{entry_id}' on {day}")
