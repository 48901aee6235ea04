"""Shared infrastructure: structured logging."""

from codegraph_proptypes.common.observability import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
