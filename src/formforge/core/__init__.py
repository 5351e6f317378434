"""Shared value types."""

from formforge.core.types import MISSING, ComponentDefinition, ComponentType, JSONValue

__all__ = ["MISSING", "ComponentDefinition", "ComponentType", "JSONValue"]
