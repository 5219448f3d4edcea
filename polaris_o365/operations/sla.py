"""
SLA domain operations: listing global SLA domains and assigning one to objects.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from ..config import (
    ASSIGN_DO_NOT_PROTECT,
    ASSIGN_NO_ASSIGNMENT,
    ASSIGN_PROTECT_WITH_SLA_ID,
    SLA_DO_NOT_PROTECT,
    SLA_UNPROTECTED,
)
from ..errors import PolarisError
from ..graph.client import AsyncPolarisClient, PolarisClient
from ..graph.pagination import CancelSignal, collect_nodes, collect_nodes_async, connection_at
from ..graph.queries import assign_sla_request, sla_list_request
from ..models import SlaAssignment, SlaDomain, project

logger = logging.getLogger("polaris_o365.operations.sla")

_SLA_CONNECTION = connection_at("globalSlaConnection")


class AssignmentError(PolarisError):
    """Raised when AssignSLA does not report success; carries the raw payload."""
    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)


def resolve_sla_assignment(sla_id: str) -> SlaAssignment:
    """
    Translate an SLA id into the AssignSLA (type, fid) pair.

    UNPROTECTED  -> (noAssignment, None)
    DONOTPROTECT -> (doNotProtect, None)
    anything else, including "" -> (protectWithSlaId, sla_id)
    """
    if sla_id == SLA_UNPROTECTED:
        return SlaAssignment(ASSIGN_NO_ASSIGNMENT, None)
    if sla_id == SLA_DO_NOT_PROTECT:
        return SlaAssignment(ASSIGN_DO_NOT_PROTECT, None)
    return SlaAssignment(ASSIGN_PROTECT_WITH_SLA_ID, sla_id)


def _object_id_list(object_ids: Union[str, Sequence[str]]) -> list[str]:
    if isinstance(object_ids, str):
        object_ids = [object_ids]
    ids = list(object_ids)
    if not ids:
        raise ValueError("object_ids must contain at least one id.")
    return ids


def _assign_result(payload: Any) -> dict:
    """Return data.assignSla when success is exactly True, else raise AssignmentError."""
    result = None
    if isinstance(payload, dict) and not payload.get("errors"):
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("assignSla"), dict):
            result = data["assignSla"]
    if result is None or result.get("success") is not True:
        raise AssignmentError(f"SLA assignment was not successful: {payload}", payload)
    return result


def assign_sla(
    client: PolarisClient,
    object_ids: Union[str, Sequence[str]],
    sla_id: str,
) -> dict:
    """Attach, detach, or deny an SLA domain on one or more objects with a single mutation."""
    ids = _object_id_list(object_ids)
    assignment = resolve_sla_assignment(sla_id)
    request = assign_sla_request(ids, assignment.assign_type, assignment.optional_fid)

    payload = client.execute(request.query, request.variables, request.operation_name)
    result = _assign_result(payload)
    logger.info(f"Assigned {assignment.assign_type} ({sla_id}) to {len(ids)} object(s)")
    return result


async def assign_sla_async(
    client: AsyncPolarisClient,
    object_ids: Union[str, Sequence[str]],
    sla_id: str,
) -> dict:
    ids = _object_id_list(object_ids)
    assignment = resolve_sla_assignment(sla_id)
    request = assign_sla_request(ids, assignment.assign_type, assignment.optional_fid)

    payload = await client.execute(request.query, request.variables, request.operation_name)
    result = _assign_result(payload)
    logger.info(f"Assigned {assignment.assign_type} ({sla_id}) to {len(ids)} object(s)")
    return result


def list_slas(
    client: PolarisClient,
    name: Optional[str] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> list[SlaDomain]:
    """List global SLA domains, optionally filtered by name."""
    request = sla_list_request(name, first=client.config.sla_page_size)
    nodes = collect_nodes(
        client.execute_data,
        request,
        _SLA_CONNECTION,
        max_pages=client.config.max_pages,
        cancel_event=cancel_event,
    )
    return project(nodes, SlaDomain)


async def list_slas_async(
    client: AsyncPolarisClient,
    name: Optional[str] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> list[SlaDomain]:
    request = sla_list_request(name, first=client.config.sla_page_size)
    nodes = await collect_nodes_async(
        client.execute_data,
        request,
        _SLA_CONNECTION,
        max_pages=client.config.max_pages,
        cancel_event=cancel_event,
    )
    return project(nodes, SlaDomain)
