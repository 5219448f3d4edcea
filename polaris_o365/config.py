"""
Configuration module for the Polaris Office 365 client.
Defines API paths, page sizes, SLA sentinels, and per-client settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Optional


# ─── API Endpoints ───────────────────────────────────────────────────────────

SESSION_PATH = "/api/session"
GRAPHQL_PATH = "/api/graphql"


# ─── Transport Settings ──────────────────────────────────────────────────────

DEFAULT_TIMEOUT_SECONDS = 60.0          # Whole-request timeout
DEFAULT_CONNECT_TIMEOUT_SECONDS = 30.0  # TCP/TLS connect timeout


# ─── Pagination ─────────────────────────────────────────────────────────────

SLA_PAGE_SIZE = 20     # `first` for SLAList
USER_PAGE_SIZE = 100   # `first` for O365UserList


# ─── SLA Assignment ─────────────────────────────────────────────────────────

# Sentinel SLA ids accepted in place of a UUID
SLA_UNPROTECTED = "UNPROTECTED"      # Remove any directly assigned SLA
SLA_DO_NOT_PROTECT = "DONOTPROTECT"  # Explicitly block protection/inheritance

# globalSlaAssignType enum literals
ASSIGN_NO_ASSIGNMENT = "noAssignment"
ASSIGN_DO_NOT_PROTECT = "doNotProtect"
ASSIGN_PROTECT_WITH_SLA_ID = "protectWithSlaId"


# ─── O365 Listing ───────────────────────────────────────────────────────────

USER_SORT_BY = "EMAIL_ADDRESS"
USER_SORT_ORDER = "Asc"
FILTER_IS_RELIC = "IS_RELIC"
FILTER_NAME_OR_EMAIL = "NAME_OR_EMAIL_ADDRESS"


# ─── Client Configuration ───────────────────────────────────────────────────

@dataclass
class ClientConfig:
    """Per-client settings. Credentials are never part of the config."""
    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    sla_page_size: int = SLA_PAGE_SIZE
    user_page_size: int = USER_PAGE_SIZE
    max_pages: Optional[int] = None   # None = follow cursors until exhausted

    def __post_init__(self):
        self.base_url = normalize_base_url(self.base_url)

    @property
    def session_url(self) -> str:
        return f"{self.base_url}{SESSION_PATH}"

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}{GRAPHQL_PATH}"

    @classmethod
    def from_file(cls, path: str) -> "ClientConfig":
        """Load configuration from a JSON file. Unknown keys are ignored."""
        with open(path, "r") as f:
            data = json.load(f)
        config = cls()
        for k, v in data.items():
            if hasattr(config, k):
                setattr(config, k, v)
        config.base_url = normalize_base_url(config.base_url)
        return config

    @classmethod
    def from_env(cls, prefix: str = "POLARIS_") -> "ClientConfig":
        """
        Build configuration from environment variables:
        <prefix>BASE_URL, <prefix>TIMEOUT, <prefix>CONNECT_TIMEOUT, <prefix>MAX_PAGES.
        """
        max_pages = os.environ.get(f"{prefix}MAX_PAGES")
        return cls(
            base_url=os.environ.get(f"{prefix}BASE_URL", ""),
            timeout=float(os.environ.get(f"{prefix}TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
            connect_timeout=float(
                os.environ.get(f"{prefix}CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT_SECONDS)
            ),
            max_pages=int(max_pages) if max_pages else None,
        )


def normalize_base_url(base_url: Optional[str]) -> str:
    """Strip whitespace and trailing slashes from a base URL."""
    return (base_url or "").strip().rstrip("/")
