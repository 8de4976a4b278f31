"""Database schema definitions for the Noruno SQLite store.

Each entity kind gets one table keyed by its id. Embedded lists (subtasks,
tags, notes, sessions...) are stored as JSON text columns.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Tasks table - integer ids assigned by the application
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    start_date TEXT,
    due_date TEXT NOT NULL,
    group_name TEXT NOT NULL DEFAULT '',
    details TEXT NOT NULL DEFAULT '',
    completed BOOLEAN NOT NULL DEFAULT 0,
    notified BOOLEAN NOT NULL DEFAULT 0,
    notification_minutes INTEGER,
    subtasks TEXT NOT NULL DEFAULT '[]',
    dependencies TEXT
)
"""

# Task groups - position keeps creation order
CREATE_GROUPS_TABLE = """
CREATE TABLE IF NOT EXISTS groups (
    name TEXT PRIMARY KEY,
    position INTEGER NOT NULL
)
"""

# Key/value settings (mail settings stored as JSON under 'mail_settings')
CREATE_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

CREATE_MEMOS_TABLE = """
CREATE TABLE IF NOT EXISTS memos (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    folder_id TEXT,
    tags TEXT NOT NULL DEFAULT '[]',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# No foreign key to memos: folder deletion clears references in the service
CREATE_FOLDERS_TABLE = """
CREATE TABLE IF NOT EXISTS folders (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    parent_id TEXT
)
"""

CREATE_READING_BOOKS_TABLE = """
CREATE TABLE IF NOT EXISTS reading_books (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    author TEXT,
    isbn TEXT,
    publisher TEXT,
    published_year INTEGER,
    cover_image_url TEXT,
    genres TEXT NOT NULL DEFAULT '[]',
    status TEXT NOT NULL DEFAULT 'want_to_read',
    start_date DATETIME,
    finish_date DATETIME,
    progress_percent INTEGER,
    total_pages INTEGER,
    current_page INTEGER,
    rating INTEGER,
    summary TEXT NOT NULL DEFAULT '',
    notes TEXT NOT NULL DEFAULT '[]',
    reading_sessions TEXT NOT NULL DEFAULT '[]',
    tags TEXT NOT NULL DEFAULT '[]',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

CREATE_CALENDAR_EVENTS_TABLE = """
CREATE TABLE IF NOT EXISTS calendar_events (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    start_datetime TEXT NOT NULL,
    end_datetime TEXT,
    all_day BOOLEAN NOT NULL DEFAULT 0,
    color TEXT,
    recurrence_rule TEXT,
    reminder_minutes INTEGER,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_GROUPS_TABLE,
    CREATE_SETTINGS_TABLE,
    CREATE_MEMOS_TABLE,
    CREATE_FOLDERS_TABLE,
    CREATE_READING_BOOKS_TABLE,
    CREATE_CALENDAR_EVENTS_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_memos_folder ON memos(folder_id)",
    "CREATE INDEX IF NOT EXISTS idx_events_start ON calendar_events(start_datetime)",
]
