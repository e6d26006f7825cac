"""Taskboard: a task-management HTTP API."""

__version__ = "0.1.0"
