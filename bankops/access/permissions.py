"""
Role-based permission model.

The Role -> CapabilityVector table is built once by ``build_permission_table``
and handed to every ``AuthorizationSession`` that needs authorization
decisions. Sessions track the active role and whether step-up (MFA)
verification has been completed by an external flow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Union

import pandas as pd

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "Admin"
    RELATIONSHIP_MANAGER = "RelationshipManager"
    CUSTOMER_SERVICE = "CustomerService"
    MARKETING = "Marketing"
    VIEWER = "Viewer"


class Capability(str, Enum):
    VIEW_ALL_CUSTOMERS = "view_all_customers"
    EDIT_CUSTOMERS = "edit_customers"
    MANAGE_CAMPAIGNS = "manage_campaigns"
    VIEW_SENSITIVE_DATA = "view_sensitive_data"
    MANAGE_USERS = "manage_users"
    VIEW_AUDIT_LOG = "view_audit_log"
    EXPORT_DATA = "export_data"
    CHANGE_CONSENT = "change_consent"
    MANAGE_ROLES = "manage_roles"


class UnknownCapabilityError(ValueError):
    """Raised when a capability name outside the closed Capability set is queried."""


@dataclass(frozen=True)
class CapabilityVector:
    view_all_customers: bool = False
    edit_customers: bool = False
    manage_campaigns: bool = False
    view_sensitive_data: bool = False
    manage_users: bool = False
    view_audit_log: bool = False
    export_data: bool = False
    change_consent: bool = False
    manage_roles: bool = False
    requires_step_up_auth: bool = False

    def allows(self, capability: Capability) -> bool:
        return getattr(self, capability.value)


@dataclass(frozen=True)
class RoleMetadata:
    label: str
    description: str


PermissionTable = Mapping[Role, CapabilityVector]

ROLE_METADATA: Mapping[Role, RoleMetadata] = MappingProxyType({
    Role.ADMIN: RoleMetadata("Admin", "Full access across organization"),
    Role.RELATIONSHIP_MANAGER: RoleMetadata("Relationship Manager", "Customer portfolio management"),
    Role.CUSTOMER_SERVICE: RoleMetadata("Customer Service", "Customer support handling"),
    Role.MARKETING: RoleMetadata("Marketing", "Campaign & segment management"),
    Role.VIEWER: RoleMetadata("Viewer", "Read-only access"),
})

CAPABILITY_LABELS: Mapping[Capability, str] = MappingProxyType({
    Capability.VIEW_ALL_CUSTOMERS: "view all customers",
    Capability.EDIT_CUSTOMERS: "edit customer data",
    Capability.MANAGE_CAMPAIGNS: "manage campaigns",
    Capability.VIEW_SENSITIVE_DATA: "view sensitive data",
    Capability.MANAGE_USERS: "manage users",
    Capability.VIEW_AUDIT_LOG: "view audit logs",
    Capability.EXPORT_DATA: "export data",
    Capability.CHANGE_CONSENT: "change consent settings",
    Capability.MANAGE_ROLES: "manage roles",
})


def build_permission_table() -> PermissionTable:
    """Return the read-only Role -> CapabilityVector matrix."""
    table: Dict[Role, CapabilityVector] = {
        Role.ADMIN: CapabilityVector(
            view_all_customers=True,
            edit_customers=True,
            manage_campaigns=True,
            view_sensitive_data=True,
            manage_users=True,
            view_audit_log=True,
            export_data=True,
            change_consent=True,
            manage_roles=True,
            requires_step_up_auth=True,
        ),
        # Own portfolio only; scoping happens in the data layer
        Role.RELATIONSHIP_MANAGER: CapabilityVector(
            edit_customers=True,
            view_sensitive_data=True,
        ),
        Role.CUSTOMER_SERVICE: CapabilityVector(
            view_all_customers=True,
            view_sensitive_data=True,  # masked version
            change_consent=True,
        ),
        # No PII, and never consent changes (conflict of interest)
        Role.MARKETING: CapabilityVector(
            view_all_customers=True,
            manage_campaigns=True,
            export_data=True,
        ),
        Role.VIEWER: CapabilityVector(),
    }
    missing = [role.value for role in Role if role not in table]
    if missing:
        raise ValueError(f"Permission table missing roles: {missing}")
    return MappingProxyType(table)


def parse_role(role: Union[Role, str]) -> Role:
    if isinstance(role, Role):
        return role
    return Role(role)


def parse_capability(name: Union[Capability, str]) -> Capability:
    if isinstance(name, Capability):
        return name
    try:
        return Capability(name)
    except ValueError:
        raise UnknownCapabilityError(
            f"Unknown capability {name!r}; expected one of {[c.value for c in Capability]}"
        ) from None


def permission_matrix(table: PermissionTable) -> pd.DataFrame:
    """Roles x capabilities booleans, with the step-up flag as the last column."""
    columns = [f.name for f in fields(CapabilityVector)]
    rows = [
        {"role": role.value, **{col: getattr(table[role], col) for col in columns}}
        for role in Role
    ]
    return pd.DataFrame(rows, columns=["role"] + columns).set_index("role")


def denial_message(role: Role, capability: Union[Capability, str]) -> str:
    capability = parse_capability(capability)
    return (
        f"Your role ({ROLE_METADATA[role].label}) doesn't have permission to "
        f"{CAPABILITY_LABELS[capability]}."
    )


def available_views(vector: CapabilityVector) -> List[str]:
    views: List[str] = []
    if vector.view_all_customers or vector.export_data:
        views.append("executive")
    if vector.view_all_customers or vector.edit_customers:
        views.append("portfolio")
    if vector.manage_roles or vector.view_audit_log:
        views.append("access_control")
    return views


class AuthorizationSession:
    """Active role plus step-up verification state for a single actor.

    Not thread-safe: callers sharing a session across threads must serialise
    access themselves.
    """

    def __init__(self, table: PermissionTable, role: Union[Role, str] = Role.ADMIN):
        self._table = table
        self._role = parse_role(role)
        self._step_up_verified = False

    @property
    def table(self) -> PermissionTable:
        return self._table

    @property
    def capabilities(self) -> CapabilityVector:
        return self._table[self._role]

    def get_current_role(self) -> Role:
        return self._role

    def set_role(self, role: Union[Role, str]) -> None:
        new_role = parse_role(role)
        previous = self._role
        self._role = new_role
        if not self._table[new_role].requires_step_up_auth:
            self._step_up_verified = False
        logger.info(
            "ROLE_CHANGE from=%s to=%s step_up_verified=%s",
            previous.value,
            new_role.value,
            self._step_up_verified,
        )

    def has_capability(self, name: Union[Capability, str]) -> bool:
        return self._table[self._role].allows(parse_capability(name))

    def requires_step_up(self) -> bool:
        return self._table[self._role].requires_step_up_auth

    def is_step_up_verified(self) -> bool:
        return self._step_up_verified

    def set_step_up_verified(self, verified: bool) -> None:
        self._step_up_verified = bool(verified)
        logger.info(
            "STEP_UP_VERIFY role=%s verified=%s", self._role.value, self._step_up_verified
        )

    def is_authorized(self, name: Union[Capability, str]) -> bool:
        """Capability granted and, for step-up roles, verification completed."""
        if not self.has_capability(name):
            return False
        return not self.requires_step_up() or self._step_up_verified
