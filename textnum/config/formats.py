"""Parsing and validation for text format definition files.

Example::

    formats:
      - id: basic_html
        name: Basic HTML
        filters:
          - id: filter_html
            weight: -10
            settings:
              allowed_html: "<a href> <em> <strong> <p> <br>"
          - id: filter_url
      - id: retired
        status: false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from textnum.exceptions import (
    FilterPluginNotFoundError,
    FormatsFileParseError,
    FormatsFileValidationError,
)
from textnum.filters.builtin import FILTER_PLUGINS, create_filter
from textnum.filters.format import InMemoryFormatRepository, TextFormat


class FilterDefinition(BaseModel):
    """One filter inside a format definition."""

    id: str
    status: bool = True
    weight: int = 0
    settings: dict[str, Any] = {}


class FormatDefinition(BaseModel):
    """One text format."""

    id: str
    name: str | None = None
    status: bool = True
    filters: list[FilterDefinition] = []

    @field_validator("id")
    @classmethod
    def id_must_be_machine_name(cls, v: str) -> str:
        if not v or not v.replace("_", "").isalnum() or not v.islower():
            msg = f"Invalid format id: '{v}'. Use lowercase alphanumerics and underscores."
            raise ValueError(msg)
        return v

    def build(self) -> TextFormat:
        return TextFormat(
            self.id,
            [
                create_filter(f.id, status=f.status, weight=f.weight, settings=f.settings)
                for f in self.filters
            ],
            name=self.name,
            status=self.status,
        )


class FormatsFile(BaseModel):
    """A set of text format definitions."""

    formats: list[FormatDefinition] = []

    @classmethod
    def from_yaml_path(cls, path: str | Path) -> FormatsFile:
        """Load format definitions from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FormatsFileParseError(str(path), "File not found")

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FormatsFileParseError(str(path), f"Error reading file: {e}") from e

        return cls.from_yaml_string(raw, source_path=str(path))

    @classmethod
    def from_yaml_string(cls, raw: str, source_path: str = "<string>") -> FormatsFile:
        """Load format definitions from a YAML string."""
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise FormatsFileParseError(source_path, f"Invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise FormatsFileParseError(source_path, "YAML content must be a mapping")

        try:
            formats_file = cls.model_validate(data)
        except ValidationError as e:
            errors = [str(e)]
            raise FormatsFileValidationError(source_path, errors) from e

        errors = formats_file.problems()
        if errors:
            raise FormatsFileValidationError(source_path, errors)
        return formats_file

    def problems(self) -> list[str]:
        """Semantic problems the schema cannot express."""
        errors: list[str] = []
        seen: set[str] = set()
        for definition in self.formats:
            if definition.id in seen:
                errors.append(f"Duplicate format id '{definition.id}'")
            seen.add(definition.id)
            errors.extend(
                f"Format '{definition.id}': {FilterPluginNotFoundError(f.id)}"
                for f in definition.filters
                if f.id not in FILTER_PLUGINS
            )
        return errors

    def to_repository(self) -> InMemoryFormatRepository:
        return InMemoryFormatRepository(definition.build() for definition in self.formats)
