"""OpenAPI document loader.

Reads a YAML or JSON description and validates it into a `Document`.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from api_client_gen.errors import DocumentError

from .base import Document


def parse_openapi(file_path: Path) -> Document:
    """Parse an OpenAPI file into a `Document`."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Can't read API description {file_path}: {e}") from e

    try:
        # YAML is a superset of JSON, so .json documents load the same way
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Can't parse API description {file_path}: {e}") from e

    return parse_mapping(data, source=str(file_path))


def parse_mapping(data, source: str = "<document>") -> Document:
    """Validate an already-loaded mapping into a `Document`."""
    if not isinstance(data, dict):
        raise DocumentError(f"API description {source} must be a mapping at the top level")

    try:
        return Document.model_validate(data)
    except ValidationError as e:
        raise DocumentError(f"Invalid API description {source}:\n{e}") from e
