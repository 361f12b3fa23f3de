"""FastAPI dependencies: the caller's profile and access enforcement.

Authentication happens in front of this service; the gateway forwards the
authenticated profile as headers (WebSocket clients may use query params).
"""

from __future__ import annotations

from typing import Annotated, Callable, Optional

from fastapi import Header, HTTPException, Path, WebSocket
from pydantic import ValidationError

from condo_metrics.domain.access import UserProfile
from condo_metrics.domain.enums import UserRole

AccessPredicate = Callable[[Optional[UserProfile], str], bool]

# Same bounds as the company_id field on stored records
CompanyId = Annotated[str, Path(min_length=1, max_length=128)]


def _build_profile(uid: str | None, role: str | None, company_id: str | None) -> UserProfile | None:
    if not uid or not role:
        return None
    try:
        return UserProfile(uid=uid, role=UserRole(role), company_id=company_id or None)
    except (ValueError, ValidationError):
        return None


def current_profile(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
    x_company_id: Optional[str] = Header(default=None),
) -> UserProfile:
    profile = _build_profile(x_user_id, x_user_role, x_company_id)
    if profile is None:
        raise HTTPException(status_code=401, detail="Missing or invalid user profile headers")
    return profile


def websocket_profile(websocket: WebSocket) -> UserProfile | None:
    headers = websocket.headers
    params = websocket.query_params
    return _build_profile(
        headers.get("x-user-id") or params.get("uid"),
        headers.get("x-user-role") or params.get("role"),
        headers.get("x-company-id") or params.get("company_id"),
    )


def enforce(predicate: AccessPredicate, profile: UserProfile, company_id: str) -> None:
    """Raise 403 unless *predicate* allows *profile* on *company_id*."""
    if not predicate(profile, company_id):
        raise HTTPException(
            status_code=403,
            detail=f"Role '{profile.role.value}' may not access company {company_id}",
        )
