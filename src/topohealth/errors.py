"""Exception hierarchy for the topology health platform.

All exceptions inherit from TopoHealthError for consistent handling.
Structural problems in individual records (bad link codes, unresolved
devices, malformed subnets) are skipped and logged, never raised.
"""

from typing import Any


class TopoHealthError(Exception):
    """Base exception for all topology health errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Document Errors
class DocumentError(TopoHealthError):
    """Base exception for input document errors."""


class DocumentLoadError(DocumentError):
    """Document could not be read or is not valid JSON."""


class DocumentValidationError(DocumentError):
    """Document parsed as JSON but does not have the expected shape."""


# Graph Errors
class GraphError(TopoHealthError):
    """Base exception for graph and path computation errors."""


class NodeNotFoundError(GraphError):
    """Referenced device does not exist in the topology graph."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}", {"node": node_id})
        self.node_id = node_id


class UnknownStrategyError(GraphError):
    """Requested weighting strategy is not supported."""

    def __init__(self, strategy: str) -> None:
        super().__init__(f"Unknown weighting strategy: {strategy}", {"strategy": strategy})
        self.strategy = strategy


# Configuration Errors
class ConfigError(TopoHealthError):
    """Base exception for configuration errors."""
