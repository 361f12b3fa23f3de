"""Tests for role and company access predicates."""

import pytest

from condo_metrics.domain.access import (
    UserProfile,
    belongs_to_company,
    can_manage_incidents,
    can_record_movement,
    can_view_dashboard,
    has_role,
)
from condo_metrics.domain.enums import UserRole


_SUPER = UserProfile(uid="root", role=UserRole.SUPER_ADMIN)
_ADMIN = UserProfile(uid="u1", role=UserRole.ADMIN, company_id="acme")
_EMPLOYEE = UserProfile(uid="u2", role=UserRole.EMPLOYEE, company_id="acme")


class TestHasRole:
    def test_single_role(self) -> None:
        assert has_role(_ADMIN, UserRole.ADMIN)
        assert not has_role(_EMPLOYEE, UserRole.ADMIN)

    def test_any_of_roles(self) -> None:
        assert has_role(_EMPLOYEE, [UserRole.ADMIN, UserRole.EMPLOYEE])

    def test_no_profile(self) -> None:
        assert not has_role(None, UserRole.EMPLOYEE)


class TestCompanyScope:
    def test_super_admin_belongs_everywhere(self) -> None:
        assert belongs_to_company(_SUPER, "acme")
        assert belongs_to_company(_SUPER, "anything")

    def test_members_only_their_company(self) -> None:
        assert belongs_to_company(_EMPLOYEE, "acme")
        assert not belongs_to_company(_EMPLOYEE, "other")

    def test_no_profile(self) -> None:
        assert not belongs_to_company(None, "acme")

    @pytest.mark.parametrize("profile", [_SUPER, _ADMIN, _EMPLOYEE])
    def test_any_member_views_and_records(self, profile: UserProfile) -> None:
        assert can_view_dashboard(profile, "acme")
        assert can_record_movement(profile, "acme")

    def test_incident_management_needs_admin(self) -> None:
        assert can_manage_incidents(_SUPER, "acme")
        assert can_manage_incidents(_ADMIN, "acme")
        assert not can_manage_incidents(_EMPLOYEE, "acme")
        assert not can_manage_incidents(_ADMIN, "other")
