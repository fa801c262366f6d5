from __future__ import annotations

from enum import Enum


class CredentialState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    AUTHORIZED = "authorized"
