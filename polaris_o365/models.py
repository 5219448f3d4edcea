"""
Record types returned by the client, and the pure projections that build
them from raw GraphQL nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, TypeVar


def _nested(node: dict, key: str, field_name: str) -> Any:
    """node[key][field_name], or None when the nested object is absent or null."""
    inner = node.get(key)
    if isinstance(inner, dict):
        return inner.get(field_name)
    return None


@dataclass(frozen=True)
class PageInfo:
    """Cursor state reported by a connection page."""
    end_cursor: Optional[str]
    has_next_page: bool


@dataclass(frozen=True)
class SlaDomain:
    """A named protection policy."""
    id: str
    name: str
    description: Optional[str] = None

    @classmethod
    def from_node(cls, node: dict) -> "SlaDomain":
        return cls(
            id=node.get("id"),
            name=node.get("name"),
            description=node.get("description"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }


@dataclass(frozen=True)
class SlaAssignment:
    """Translated (globalSlaAssignType, globalSlaOptionalFid) pair for AssignSLA."""
    assign_type: str
    optional_fid: Optional[str]


@dataclass(frozen=True)
class O365Subscription:
    """An Office 365 organization as shown on its detail card."""
    id: str
    name: str
    status: Optional[str] = None
    users_count: Optional[int] = None
    unprotected_users_count: Optional[int] = None
    effective_sla_domain_name: Optional[str] = None
    configured_sla_domain_name: Optional[str] = None
    effective_sla_domain_id: Optional[str] = None
    configured_sla_domain_id: Optional[str] = None

    @classmethod
    def from_node(cls, node: dict) -> "O365Subscription":
        return cls(
            id=node.get("id"),
            name=node.get("name"),
            status=node.get("status"),
            users_count=node.get("usersCount"),
            unprotected_users_count=node.get("unprotectedUsersCount"),
            effective_sla_domain_name=_nested(node, "effectiveSlaDomain", "name"),
            configured_sla_domain_name=_nested(node, "configuredSlaDomain", "name"),
            effective_sla_domain_id=_nested(node, "effectiveSlaDomain", "id"),
            configured_sla_domain_id=_nested(node, "configuredSlaDomain", "id"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "usersCount": self.users_count,
            "unprotectedUsersCount": self.unprotected_users_count,
            "effectiveSlaDomainName": self.effective_sla_domain_name,
            "configuredSlaDomainName": self.configured_sla_domain_name,
            "effectiveSlaDomainId": self.effective_sla_domain_id,
            "configuredSlaDomainId": self.configured_sla_domain_id,
        }


@dataclass(frozen=True)
class O365User:
    """A user under an Office 365 organization."""
    id: str
    name: Optional[str] = None
    email_address: Optional[str] = None
    sla_assignment: Optional[str] = None       # Direct, Derived, Unassigned
    effective_sla_domain_name: Optional[str] = None

    @classmethod
    def from_node(cls, node: dict) -> "O365User":
        return cls(
            id=node.get("id"),
            name=node.get("name"),
            email_address=node.get("emailAddress"),
            sla_assignment=node.get("slaAssignment"),
            effective_sla_domain_name=_nested(node, "effectiveSlaDomain", "name"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "emailAddress": self.email_address,
            "slaAssignment": self.sla_assignment,
            "effectiveSlaDomainName": self.effective_sla_domain_name,
        }


RecordT = TypeVar("RecordT", SlaDomain, O365Subscription, O365User)


def project(nodes: Iterable[dict], record_type: type[RecordT]) -> list[RecordT]:
    """Map raw nodes to records, keeping order and duplicates."""
    return [record_type.from_node(node) for node in nodes]
