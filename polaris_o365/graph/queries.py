"""
GraphQL operation definitions and variable builders.

Operation names, field selections, and enum literals must match what the
Polaris server expects; do not rename them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import (
    FILTER_IS_RELIC,
    FILTER_NAME_OR_EMAIL,
    SLA_PAGE_SIZE,
    USER_PAGE_SIZE,
    USER_SORT_BY,
    USER_SORT_ORDER,
)


@dataclass(frozen=True)
class GraphQLRequest:
    """A fixed query plus the variables for one call."""
    operation_name: str
    query: str
    variables: dict[str, Any] = field(default_factory=dict)


# ─── SLA ─────────────────────────────────────────────────────────────────────

SLA_LIST_QUERY = """query SLAList($after: String, $first: Int, $name: String) {
  globalSlaConnection(after: $after, first: $first, filter: [{field: NAME, text: $name}]) {
    edges {
      node {
        id
        name
        description
      }
    }
    pageInfo {
      endCursor
      hasNextPage
    }
  }
}"""

ASSIGN_SLA_MUTATION = """mutation AssignSLA($globalSlaOptionalFid: UUID, $globalSlaAssignType: SlaAssignTypeEnum!, $objectIds: [UUID!]!) {
  assignSla(globalSlaOptionalFid: $globalSlaOptionalFid, globalSlaAssignType: $globalSlaAssignType, objectIds: $objectIds) {
    success
  }
}"""


# ─── Office 365 ──────────────────────────────────────────────────────────────

O365_ORG_LIST_QUERY = """query O365OrgList($first: Int, $after: String) {
  o365Orgs(first: $first, after: $after) {
    edges {
      node {
        id
      }
    }
    pageInfo {
      endCursor
      hasNextPage
    }
  }
}"""

O365_ORG_CARD_QUERY = """query o365OrgCard($id: UUID!) {
  o365Org(fid: $id) {
    id
    name
    status
    usersCount
    unprotectedUsersCount
    effectiveSlaDomain {
      id
      name
    }
    configuredSlaDomain {
      id
      name
    }
  }
}"""

O365_USER_LIST_QUERY = """query O365UserList($first: Int!, $after: String, $orgId: UUID!, $filter: [Filter!]!, $sortBy: HierarchySortByField, $sortOrder: HierarchySortOrder) {
  o365Org(fid: $orgId) {
    childConnection(first: $first, filter: $filter, sortBy: $sortBy, sortOrder: $sortOrder, after: $after) {
      edges {
        node {
          id
          name
          emailAddress
          slaAssignment
          effectiveSlaDomain {
            id
            name
          }
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}"""


# ─── Builders ───────────────────────────────────────────────────────────────

def sla_list_request(name: Optional[str] = None, first: int = SLA_PAGE_SIZE) -> GraphQLRequest:
    variables: dict[str, Any] = {"first": first}
    if name:
        variables["name"] = name
    return GraphQLRequest("SLAList", SLA_LIST_QUERY, variables)


def assign_sla_request(
    object_ids: list[str],
    assign_type: str,
    optional_fid: Optional[str],
) -> GraphQLRequest:
    return GraphQLRequest(
        "AssignSLA",
        ASSIGN_SLA_MUTATION,
        {
            "globalSlaOptionalFid": optional_fid,
            "globalSlaAssignType": assign_type,
            "objectIds": list(object_ids),
        },
    )


def o365_org_list_request(first: Optional[int] = None) -> GraphQLRequest:
    # first=None lets the server pick its default page size
    return GraphQLRequest("O365OrgList", O365_ORG_LIST_QUERY, {"first": first})


def o365_org_card_request(org_id: str) -> GraphQLRequest:
    return GraphQLRequest("o365OrgCard", O365_ORG_CARD_QUERY, {"id": org_id})


def o365_user_list_request(
    org_id: str,
    search: Optional[str] = None,
    first: int = USER_PAGE_SIZE,
) -> GraphQLRequest:
    filters: list[dict[str, Any]] = [{"field": FILTER_IS_RELIC, "texts": ["false"]}]
    if search:
        filters.append({"field": FILTER_NAME_OR_EMAIL, "texts": [search]})
    return GraphQLRequest(
        "O365UserList",
        O365_USER_LIST_QUERY,
        {
            "first": first,
            "orgId": org_id,
            "filter": filters,
            "sortBy": USER_SORT_BY,
            "sortOrder": USER_SORT_ORDER,
        },
    )
