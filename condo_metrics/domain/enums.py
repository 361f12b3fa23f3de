"""Controlled enumerations for the condo-metrics domain.

Every categorical field in the domain MUST reference an enum defined here.
The string values match the document store's stored values.
"""

from __future__ import annotations

from enum import Enum


class MovementType(str, Enum):
    """Direction of a vehicle movement through the gate."""

    ENTRY = "entry"
    EXIT = "exit"


class IncidentStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "inProgress"
    RESOLVED = "resolved"


class IncidentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(str, Enum):
    """Roles carried on a user profile."""

    SUPER_ADMIN = "superAdmin"
    ADMIN = "admin"
    EMPLOYEE = "employee"
