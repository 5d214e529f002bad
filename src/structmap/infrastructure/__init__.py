"""
Infrastructure Layer
Cross-cutting concerns used by the mapping engine
"""
from structmap.infrastructure.observability import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    mapping_context,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "mapping_context",
]
