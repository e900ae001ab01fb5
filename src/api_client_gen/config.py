"""Project configuration.

A small JSON file next to the API description names the document, the
output directory and the template bundle::

    {
      "yml": "api/openapi.yaml",
      "output": "Generated",
      "templates": "git@github.com:example/templates.git",
      "templates_path": ".templates/swagger"
    }

Relative paths are resolved against the directory holding the config file.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from api_client_gen.errors import ConfigError

DEFAULT_CONFIG_NAME = "apigen.json"


class ProjectConfig(BaseModel):
    yml: Path
    output: Path
    templates: str
    templates_path: str = ""
    name_prefix: str = "Bootstrap"
    model_package: str = "API"
    allow_dangling_refs: bool = False
    strict_properties: bool = False


def load_config(path: Path) -> ProjectConfig:
    """Load and validate a project config file."""
    if not path.is_file():
        raise ConfigError(f"Can't locate config file '{path.name}' in {path.parent.resolve()}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Can't read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}:\n{e}") from e

    base = path.parent
    updates = {
        "yml": _resolve(base, config.yml),
        "output": _resolve(base, config.output),
    }
    templates = Path(config.templates).expanduser()
    if not templates.is_absolute() and (base / templates).is_dir():
        updates["templates"] = str(base / templates)
    return config.model_copy(update=updates)


def _resolve(base: Path, value: Path) -> Path:
    value = value.expanduser()
    return value if value.is_absolute() else base / value
