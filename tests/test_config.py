import json
from pathlib import Path

import pytest

from api_client_gen.config import load_config
from api_client_gen.errors import ConfigError


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "apigen.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadConfig:
    def test_relative_paths_resolved_against_config_dir(self, tmp_path):
        path = _write(tmp_path, {
            "yml": "api/openapi.yaml",
            "output": "Generated",
            "templates": "git@github.com:example/templates.git",
            "templates_path": ".templates/swagger",
        })
        config = load_config(path)

        assert config.yml == tmp_path / "api/openapi.yaml"
        assert config.output == tmp_path / "Generated"
        assert config.templates == "git@github.com:example/templates.git"
        assert config.templates_path == ".templates/swagger"

    def test_defaults(self, tmp_path):
        config = load_config(_write(tmp_path, {"yml": "a.yaml", "output": "out", "templates": "t"}))
        assert config.name_prefix == "Bootstrap"
        assert config.model_package == "API"
        assert config.allow_dangling_refs is False
        assert config.strict_properties is False

    def test_absolute_paths_kept(self, tmp_path):
        out = tmp_path / "elsewhere"
        config = load_config(_write(tmp_path, {"yml": "/srv/api.yaml", "output": str(out), "templates": "t"}))
        assert config.yml == Path("/srv/api.yaml")
        assert config.output == out

    def test_local_template_dir_resolved(self, tmp_path):
        (tmp_path / "templates").mkdir()
        config = load_config(_write(tmp_path, {"yml": "a.yaml", "output": "out", "templates": "templates"}))
        assert config.templates == str(tmp_path / "templates")

    def test_options(self, tmp_path):
        config = load_config(_write(tmp_path, {
            "yml": "a.yaml",
            "output": "out",
            "templates": "t",
            "name_prefix": "Acme",
            "model_package": "Models",
            "allow_dangling_refs": True,
            "strict_properties": True,
        }))
        assert config.name_prefix == "Acme"
        assert config.model_package == "Models"
        assert config.allow_dangling_refs is True
        assert config.strict_properties is True


class TestConfigErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Can't locate config file 'apigen.json'"):
            load_config(tmp_path / "apigen.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "apigen.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Can't read"):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(_write(tmp_path, ["yml"]))

    def test_missing_field(self, tmp_path):
        with pytest.raises(ConfigError, match="templates"):
            load_config(_write(tmp_path, {"yml": "a.yaml", "output": "out"}))
