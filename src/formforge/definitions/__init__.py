"""Form definition files."""

from formforge.definitions.loader import DefinitionError, DefinitionIssue, FormDefinitionLoader

__all__ = ["DefinitionError", "DefinitionIssue", "FormDefinitionLoader"]
