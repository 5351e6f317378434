"""
definitions/loader.py — load form definitions from YAML or JSON files.

A form file holds either a bare list of component definitions or an object
with a top-level ``components`` list (the shape a form builder exports). Each
document is checked against ``schemas/form.schema.json`` before use.

Usage:
    from formforge.definitions import FormDefinitionLoader

    components = FormDefinitionLoader().load(Path("forms/aanvraag.yaml"))

    issues = FormDefinitionLoader().check(Path("forms/aanvraag.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from formforge.core.types import ComponentDefinition
from formforge.validation.types import ConfigurationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_FORM_SCHEMA = "form.schema.json"

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass
class DefinitionIssue:
    """A single structural finding in a form definition file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "components[2]/validate"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"{self.file}{loc}: {self.message}"


class DefinitionError(ConfigurationError):
    """A form definition file failed to load; carries every issue found."""

    def __init__(self, issues: list[DefinitionIssue]):
        self.issues = issues
        super().__init__("Invalid form definition:\n" + "\n".join(f"  {i}" for i in issues))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str) -> dict[str, Any]:
    with (_SCHEMAS_DIR / name).open(encoding="utf-8") as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _components_of(document: Any) -> list[ComponentDefinition]:
    if isinstance(document, dict):
        return document["components"]
    return document


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class FormDefinitionLoader:
    """Reads form definition files and checks their structure."""

    def __init__(self) -> None:
        schema = _load_schema(_FORM_SCHEMA)
        registry = Registry().with_resource(
            schema["$id"], Resource(contents=schema, specification=DRAFT202012)
        )
        self._validator = Draft202012Validator(schema, registry=registry)

    def read(self, path: Path) -> Any:
        """Parse a definition file without checking its structure.

        Raises:
            DefinitionError: If the file is missing, of an unknown type, or unparseable
        """
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise DefinitionError(issues=[DefinitionIssue(
                file=path,
                message=f"Unsupported file type '{path.suffix}', expected one of "
                + ", ".join(SUPPORTED_SUFFIXES),
            )])
        try:
            with path.open(encoding="utf-8") as fh:
                if path.suffix.lower() == ".json":
                    return json.load(fh)
                return yaml.safe_load(fh)
        except FileNotFoundError:
            raise DefinitionError(issues=[
                DefinitionIssue(file=path, message="File does not exist")
            ]) from None
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise DefinitionError(issues=[
                DefinitionIssue(file=path, message=f"Parse error: {exc}")
            ]) from exc

    def check_document(self, document: Any, path: Path) -> list[DefinitionIssue]:
        """Check a parsed document against the form schema."""
        if document is None:
            return [DefinitionIssue(file=path, message="File is empty or contains only whitespace")]
        errors = sorted(self._validator.iter_errors(document), key=_json_path)
        return [
            DefinitionIssue(file=path, message=error.message, path=_json_path(error))
            for error in errors
        ]

    def check(self, path: Path) -> list[DefinitionIssue]:
        """Check a definition file; an empty list means it is well formed."""
        try:
            document = self.read(path)
        except DefinitionError as exc:
            return exc.issues
        return self.check_document(document, path)

    def load(self, path: Path) -> list[ComponentDefinition]:
        """Load the component definitions from a file.

        Raises:
            DefinitionError: If the file cannot be read or is not well formed
        """
        document = self.read(path)
        issues = self.check_document(document, path)
        if issues:
            raise DefinitionError(issues=issues)

        components = _components_of(document)
        logger.debug("Loaded %d top-level components from %s", len(components), path)
        return components
