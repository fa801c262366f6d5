"""Application services wrapping Google OAuth and the Calendar API."""

from __future__ import annotations

from .auth import CALENDAR_SCOPE, AuthenticationRequiredError, CredentialManager
from .calendar import CalendarService
from .context import ServiceContext

__all__ = [
    "CALENDAR_SCOPE",
    "AuthenticationRequiredError",
    "CalendarService",
    "CredentialManager",
    "ServiceContext",
]
