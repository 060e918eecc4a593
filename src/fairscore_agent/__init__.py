"""
FairScore deployer check package.

Exposes the entry points for external usage: the full ``check_token``
pipeline and the three on-chain lookups it is built from.  The API and CLI
should be imported explicitly from their respective modules.
"""

from .deployer_resolver import resolve_deployer  # noqa: F401
from .provenance_service import get_provenance  # noqa: F401
from .signal_aggregator import check_token  # noqa: F401
from .token_history import list_other_tokens  # noqa: F401

__all__ = ["check_token", "get_provenance", "list_other_tokens", "resolve_deployer"]
