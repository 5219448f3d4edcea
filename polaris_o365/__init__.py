"""
Polaris Office 365 Client
=========================
A thin client for the Polaris GraphQL API: session-token authentication,
SLA domain lookup and assignment, and enumeration of protected Office 365
organizations (subscriptions) and users.

Every call is a plain request/response against the server; nothing is cached
and nothing is retried.
"""

__version__ = "1.0.0"

from .config import ClientConfig
from .errors import PolarisError
from .auth import Authenticator, AuthenticationError, get_token
from .graph import (
    PolarisClient,
    AsyncPolarisClient,
    TransportError,
    GraphQLError,
    PaginationError,
    PaginationCancelled,
)
from .models import SlaDomain, SlaAssignment, O365Subscription, O365User, PageInfo
from .operations import (
    AssignmentError,
    resolve_sla_assignment,
    assign_sla,
    assign_sla_async,
    list_slas,
    list_slas_async,
    list_subscriptions,
    list_subscriptions_async,
    get_subscription,
    get_subscription_async,
    list_users,
    list_users_async,
)

__all__ = [
    "__version__",
    "ClientConfig",
    "PolarisError",
    "Authenticator",
    "AuthenticationError",
    "get_token",
    "PolarisClient",
    "AsyncPolarisClient",
    "TransportError",
    "GraphQLError",
    "PaginationError",
    "PaginationCancelled",
    "SlaDomain",
    "SlaAssignment",
    "O365Subscription",
    "O365User",
    "PageInfo",
    "AssignmentError",
    "resolve_sla_assignment",
    "assign_sla",
    "assign_sla_async",
    "list_slas",
    "list_slas_async",
    "list_subscriptions",
    "list_subscriptions_async",
    "get_subscription",
    "get_subscription_async",
    "list_users",
    "list_users_async",
]
