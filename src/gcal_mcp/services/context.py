from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import AppSettings, get_settings
from .auth import CredentialManager
from .calendar import CalendarService


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root handed to every tool handler."""

    credentials: CredentialManager
    settings: AppSettings = field(default_factory=get_settings)
    calendar: CalendarService = field(init=False)

    def __post_init__(self) -> None:
        self.calendar = CalendarService(self.credentials)

    @classmethod
    def from_settings(cls, settings: AppSettings, **credential_options: Any) -> "ServiceContext":
        credentials = CredentialManager.from_settings(settings.google, **credential_options)
        return cls(credentials=credentials, settings=settings)
