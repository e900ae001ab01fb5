"""Template bundle access.

A bundle is a directory of Mustache templates named after the file they
produce (``Object.swift``, ``Query.swift``, ...). It is either a local
directory or a git repository cloned for the duration of the run.
"""

import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from api_client_gen.errors import TemplateError


class TemplateBundle:
    """Reads templates by name from a directory, caching their text."""

    def __init__(self, directory: Path):
        self.directory = directory
        self._cache: dict[str, str] = {}

    def read(self, name: str) -> str:
        if name not in self._cache:
            path = self.directory / name
            if not path.is_file():
                raise TemplateError(f"Template '{name}' not found in {self.directory}")
            self._cache[name] = path.read_text(encoding="utf-8")
        return self._cache[name]


@contextmanager
def fetch_templates(source: str, subpath: str = "") -> Iterator[TemplateBundle]:
    """Yield the template bundle at `source` (+ `subpath`).

    A local directory is used in place; anything else is treated as a git
    URL, shallow-cloned into a temporary directory that is removed on exit.
    """
    local = Path(source).expanduser()
    if local.is_dir():
        yield _bundle(local / subpath if subpath else local)
        return

    with tempfile.TemporaryDirectory(prefix="api-client-gen-") as tmpdir:
        checkout = Path(tmpdir) / "templates"
        try:
            result = subprocess.run(
                ["git", "clone", "--depth", "1", source, str(checkout)],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise TemplateError(f"Can't run git to clone {source}: {e}") from e
        if result.returncode != 0:
            raise TemplateError(
                f"Can't clone {source}, check access rights.\n{result.stderr.strip()}"
            )
        yield _bundle(checkout / subpath if subpath else checkout)


def _bundle(directory: Path) -> TemplateBundle:
    if not directory.is_dir():
        raise TemplateError(f"Template directory {directory} does not exist")
    return TemplateBundle(directory)
