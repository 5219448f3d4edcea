from .client import (
    PolarisClient,
    AsyncPolarisClient,
    TransportError,
    GraphQLError,
    build_headers,
)
from .pagination import (
    PaginationError,
    PaginationCancelled,
    paginate,
    paginate_async,
    collect_nodes,
    collect_nodes_async,
    connection_at,
    parse_connection,
)
from .queries import GraphQLRequest

__all__ = [
    "PolarisClient",
    "AsyncPolarisClient",
    "TransportError",
    "GraphQLError",
    "build_headers",
    "PaginationError",
    "PaginationCancelled",
    "paginate",
    "paginate_async",
    "collect_nodes",
    "collect_nodes_async",
    "connection_at",
    "parse_connection",
    "GraphQLRequest",
]
