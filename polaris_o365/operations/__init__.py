from .sla import (
    AssignmentError,
    resolve_sla_assignment,
    assign_sla,
    assign_sla_async,
    list_slas,
    list_slas_async,
)
from .o365 import (
    list_subscriptions,
    list_subscriptions_async,
    get_subscription,
    get_subscription_async,
    list_users,
    list_users_async,
)

__all__ = [
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
