"""Role and company predicates over a denormalized user profile.

Authentication happens upstream; these checks only decide what an already
identified profile may see or do.  A superAdmin belongs to every company.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from condo_metrics.domain.enums import UserRole


class UserProfile(BaseModel):
    uid: str = Field(..., min_length=1, max_length=128)
    role: UserRole
    company_id: Optional[str] = Field(
        default=None,
        description="Organization the user works for (unset for superAdmin)",
    )

    model_config = {"frozen": True}


def has_role(profile: UserProfile | None, roles: UserRole | Iterable[UserRole]) -> bool:
    if profile is None:
        return False
    if isinstance(roles, UserRole):
        return profile.role == roles
    return profile.role in set(roles)


def belongs_to_company(profile: UserProfile | None, company_id: str) -> bool:
    if profile is None:
        return False
    if profile.role == UserRole.SUPER_ADMIN:
        return True
    return profile.company_id == company_id


def can_view_dashboard(profile: UserProfile | None, company_id: str) -> bool:
    return belongs_to_company(profile, company_id)


def can_record_movement(profile: UserProfile | None, company_id: str) -> bool:
    return belongs_to_company(profile, company_id)


def can_manage_incidents(profile: UserProfile | None, company_id: str) -> bool:
    return (
        has_role(profile, (UserRole.SUPER_ADMIN, UserRole.ADMIN))
        and belongs_to_company(profile, company_id)
    )
