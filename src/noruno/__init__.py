"""Noruno - tasks, memos, reading log and calendar with email reminders."""

__version__ = "0.4.0"
