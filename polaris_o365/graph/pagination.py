"""
Cursor pagination over GraphQL connections (edges[].node + pageInfo).

Pages are fetched strictly in sequence: the cursor for page N+1 is only known
once page N has arrived. Nodes are yielded lazily in server order.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Iterator, Optional, Protocol

from ..errors import PolarisError
from ..models import PageInfo
from .queries import GraphQLRequest

logger = logging.getLogger("polaris_o365.pagination")

ExecuteFn = Callable[[str, Optional[dict], Optional[str]], dict]
AsyncExecuteFn = Callable[[str, Optional[dict], Optional[str]], Awaitable[dict]]
ConnectionExtractor = Callable[[dict], Any]


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


class PaginationError(PolarisError):
    """Raised when a connection response is missing or has a malformed edges/pageInfo shape."""
    pass


class PaginationCancelled(PaginationError):
    """Raised when the caller's cancel signal is set between page fetches."""
    pass


def connection_at(*path: str) -> ConnectionExtractor:
    """Build an extractor that walks `path` keys from the `data` object to a connection."""
    def extract(data: dict) -> Any:
        node: Any = data
        for key in path:
            if not isinstance(node, dict) or node.get(key) is None:
                raise PaginationError(f"Connection not found at data.{'.'.join(path)}")
            node = node[key]
        return node
    return extract


def parse_connection(connection: Any) -> tuple[list[dict], PageInfo]:
    """Split a connection object into its nodes and validated PageInfo."""
    if not isinstance(connection, dict):
        raise PaginationError(f"Connection is not an object: {type(connection).__name__}")

    edges = connection.get("edges")
    if not isinstance(edges, list):
        raise PaginationError("Connection has no 'edges' list")
    nodes = []
    for idx, edge in enumerate(edges):
        if not isinstance(edge, dict) or not isinstance(edge.get("node"), dict):
            raise PaginationError(f"Edge {idx} has no 'node' object")
        nodes.append(edge["node"])

    page_info = connection.get("pageInfo")
    if not isinstance(page_info, dict):
        raise PaginationError("Connection has no 'pageInfo' object")
    has_next = page_info.get("hasNextPage")
    if not isinstance(has_next, bool):
        raise PaginationError(f"pageInfo.hasNextPage is not a boolean: {has_next!r}")
    end_cursor = page_info.get("endCursor")
    if has_next and not end_cursor:
        raise PaginationError("pageInfo.hasNextPage is true but endCursor is empty")

    return nodes, PageInfo(end_cursor=end_cursor, has_next_page=has_next)


def _page_variables(variables: dict, cursor: Optional[str]) -> dict:
    # First page omits `after`; the caller's dict is never mutated
    page_vars = dict(variables)
    if cursor is not None:
        page_vars["after"] = cursor
    return page_vars


def _check_cancel(cancel_event: Optional[CancelSignal], operation_name: str, pages: int):
    if cancel_event is not None and cancel_event.is_set():
        raise PaginationCancelled(f"{operation_name} cancelled after {pages} page(s)")


def _cap_reached(max_pages: Optional[int], pages: int, operation_name: str) -> bool:
    if max_pages is not None and pages >= max_pages:
        logger.warning(
            f"Pagination cap reached ({max_pages} pages) for {operation_name}; "
            f"further pages not fetched"
        )
        return True
    return False


def paginate(
    execute: ExecuteFn,
    request: GraphQLRequest,
    extract_connection: ConnectionExtractor,
    *,
    max_pages: Optional[int] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> Iterator[dict]:
    """
    Lazily yield every node of a connection, following cursors until the
    server reports hasNextPage=false.

    `execute(query, variables, operation_name)` must return the `data` object.
    `max_pages` caps the number of requests (None = unbounded).
    `cancel_event` is checked before each request.
    """
    cursor: Optional[str] = None
    pages = 0

    while True:
        _check_cancel(cancel_event, request.operation_name, pages)
        data = execute(request.query, _page_variables(request.variables, cursor), request.operation_name)
        nodes, page_info = parse_connection(extract_connection(data))
        pages += 1
        logger.debug(
            f"{request.operation_name} page {pages}: {len(nodes)} nodes, "
            f"hasNextPage={page_info.has_next_page}"
        )
        yield from nodes

        if not page_info.has_next_page:
            return
        if _cap_reached(max_pages, pages, request.operation_name):
            return
        cursor = page_info.end_cursor


async def paginate_async(
    execute: AsyncExecuteFn,
    request: GraphQLRequest,
    extract_connection: ConnectionExtractor,
    *,
    max_pages: Optional[int] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> AsyncIterator[dict]:
    """Async twin of paginate(); `execute` is awaited once per page."""
    cursor: Optional[str] = None
    pages = 0

    while True:
        _check_cancel(cancel_event, request.operation_name, pages)
        data = await execute(
            request.query, _page_variables(request.variables, cursor), request.operation_name
        )
        nodes, page_info = parse_connection(extract_connection(data))
        pages += 1
        logger.debug(
            f"{request.operation_name} page {pages}: {len(nodes)} nodes, "
            f"hasNextPage={page_info.has_next_page}"
        )
        for node in nodes:
            yield node

        if not page_info.has_next_page:
            return
        if _cap_reached(max_pages, pages, request.operation_name):
            return
        cursor = page_info.end_cursor


def collect_nodes(
    execute: ExecuteFn,
    request: GraphQLRequest,
    extract_connection: ConnectionExtractor,
    **kwargs,
) -> list[dict]:
    """Fetch all pages into a list. Use paginate() to stream instead."""
    return list(paginate(execute, request, extract_connection, **kwargs))


async def collect_nodes_async(
    execute: AsyncExecuteFn,
    request: GraphQLRequest,
    extract_connection: ConnectionExtractor,
    **kwargs,
) -> list[dict]:
    items = []
    async for node in paginate_async(execute, request, extract_connection, **kwargs):
        items.append(node)
    return items
