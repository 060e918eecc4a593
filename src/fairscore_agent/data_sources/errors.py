"""
Data-source error taxonomy.

``DataSourceUnavailable`` is raised by a single endpoint client when its one
HTTP attempt fails (network error, non-2xx status, RPC ``error`` field).
``GatewayUnavailable`` is raised by the gateway once every configured
endpoint has failed for the same logical call.  The core services catch
both and treat them as "no data".
"""

from __future__ import annotations


class DataSourceUnavailable(Exception):
    """One endpoint could not answer a call."""

    def __init__(self, source: str, detail: str = "") -> None:
        super().__init__(f"{source} unavailable{': ' + detail if detail else ''}")
        self.source = source
        self.detail = detail


class GatewayUnavailable(DataSourceUnavailable):
    """Every endpoint in the gateway's list failed for a call."""

    def __init__(self, call: str, attempted: int) -> None:
        super().__init__(call, f"all {attempted} endpoint(s) failed")
        self.call = call
        self.attempted = attempted
