"""
Domain services for the time tracking engine.
This module exports all domain services for complex business logic.
"""

from .timer_service import TimerService
from .time_report_service import TimeReportService

__all__ = [
    "TimerService",
    "TimeReportService",
]
