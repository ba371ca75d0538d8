import dataclasses
import logging

import pytest

from bankops.access.permissions import (
    AuthorizationSession,
    Capability,
    CapabilityVector,
    Role,
    UnknownCapabilityError,
    available_views,
    build_permission_table,
    denial_message,
    permission_matrix,
)

GRANTED = {
    Role.ADMIN: set(Capability),
    Role.RELATIONSHIP_MANAGER: {Capability.EDIT_CUSTOMERS, Capability.VIEW_SENSITIVE_DATA},
    Role.CUSTOMER_SERVICE: {
        Capability.VIEW_ALL_CUSTOMERS,
        Capability.VIEW_SENSITIVE_DATA,
        Capability.CHANGE_CONSENT,
    },
    Role.MARKETING: {
        Capability.VIEW_ALL_CUSTOMERS,
        Capability.MANAGE_CAMPAIGNS,
        Capability.EXPORT_DATA,
    },
    Role.VIEWER: set(),
}

MATRIX_CASES = [(role, capability) for role in Role for capability in Capability]


@pytest.fixture
def table():
    return build_permission_table()


@pytest.mark.parametrize("role,capability", MATRIX_CASES)
def test_has_capability_matches_reference_matrix(table, role, capability):
    session = AuthorizationSession(table, role=role)
    assert session.has_capability(capability) is (capability in GRANTED[role])


def test_only_admin_requires_step_up(table):
    assert {role for role in Role if table[role].requires_step_up_auth} == {Role.ADMIN}


def test_table_is_total_and_read_only(table):
    assert set(table) == set(Role)
    with pytest.raises(TypeError):
        table[Role.VIEWER] = CapabilityVector(manage_roles=True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        table[Role.VIEWER].manage_roles = True


def test_marketing_cannot_change_consent(table):
    session = AuthorizationSession(table, role=Role.MARKETING)
    assert not session.has_capability(Capability.CHANGE_CONSENT)


def test_session_defaults_to_admin_unverified(table):
    session = AuthorizationSession(table)
    assert session.get_current_role() == Role.ADMIN
    assert session.is_step_up_verified() is False


@pytest.mark.parametrize(
    "role", [r for r in Role if r is not Role.ADMIN]
)
def test_switch_to_non_step_up_role_clears_verification(table, role):
    session = AuthorizationSession(table)
    session.set_step_up_verified(True)
    session.set_role(role)
    assert session.is_step_up_verified() is False


def test_switch_to_step_up_role_keeps_existing_verification(table):
    session = AuthorizationSession(table)
    session.set_step_up_verified(True)
    session.set_role(Role.ADMIN)
    assert session.is_step_up_verified() is True


def test_switching_back_does_not_grant_verification(table):
    session = AuthorizationSession(table)
    session.set_role(Role.MARKETING)
    session.set_role(Role.ADMIN)
    assert session.is_step_up_verified() is False


def test_string_role_and_capability_names(table):
    session = AuthorizationSession(table, role="Marketing")
    assert session.get_current_role() == Role.MARKETING
    assert session.has_capability("export_data")
    session.set_role("CustomerService")
    assert session.has_capability("change_consent")


def test_unknown_capability_fails_loudly(table):
    session = AuthorizationSession(table)
    with pytest.raises(UnknownCapabilityError):
        session.has_capability("launch_rockets")
    with pytest.raises(ValueError):
        session.has_capability("requires_step_up_auth")


def test_unknown_role_string_raises(table):
    session = AuthorizationSession(table)
    with pytest.raises(ValueError):
        session.set_role("Director")
    assert session.get_current_role() == Role.ADMIN


def test_is_authorized_requires_step_up_for_admin(table):
    session = AuthorizationSession(table)
    assert session.has_capability(Capability.EXPORT_DATA)
    assert not session.is_authorized(Capability.EXPORT_DATA)
    session.set_step_up_verified(True)
    assert session.is_authorized(Capability.EXPORT_DATA)


def test_is_authorized_without_step_up_role(table):
    session = AuthorizationSession(table, role=Role.MARKETING)
    assert session.is_authorized(Capability.EXPORT_DATA)
    assert not session.is_authorized(Capability.VIEW_SENSITIVE_DATA)


def test_permission_matrix_frame(table):
    matrix = permission_matrix(table)
    assert list(matrix.index) == [role.value for role in Role]
    assert matrix.shape == (5, 10)
    assert matrix.loc["Marketing", "change_consent"] == False  # noqa: E712
    assert matrix.loc["Admin", "requires_step_up_auth"] == True  # noqa: E712


def test_denial_message_names_role_and_action():
    message = denial_message(Role.MARKETING, Capability.CHANGE_CONSENT)
    assert message == "Your role (Marketing) doesn't have permission to change consent settings."


def test_available_views(table):
    assert available_views(table[Role.ADMIN]) == ["executive", "portfolio", "access_control"]
    assert available_views(table[Role.RELATIONSHIP_MANAGER]) == ["portfolio"]
    assert available_views(table[Role.MARKETING]) == ["executive", "portfolio"]
    assert available_views(table[Role.VIEWER]) == []


def test_role_change_is_logged(table, caplog):
    caplog.set_level(logging.INFO, logger="bankops.access.permissions")
    session = AuthorizationSession(table)
    session.set_role(Role.VIEWER)
    assert any("ROLE_CHANGE from=Admin to=Viewer" in r.getMessage() for r in caplog.records)
