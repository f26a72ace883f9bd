"""Symbol table: identifiers bound to literal strings or to file paths."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any


class SymbolTable:
    """Read-only lookup built once per run.

    ``variables`` feed ``${name}`` placeholders, ``files`` feed
    ``${...name}`` placeholders. Nothing is read from disk here; file
    contents are loaded by the back end when a spread is emitted.
    """

    def __init__(
        self,
        variables: Mapping[str, str] | None = None,
        files: Mapping[str, str | Path] | None = None,
    ) -> None:
        self._variables = MappingProxyType(dict(variables or {}))
        self._files = MappingProxyType({k: Path(v) for k, v in (files or {}).items()})

    @property
    def variables(self) -> Mapping[str, str]:
        return self._variables

    @property
    def files(self) -> Mapping[str, Path]:
        return self._files

    def has(self, identifier: str) -> bool:
        return identifier in self._variables or identifier in self._files

    def has_variable(self, identifier: str) -> bool:
        return identifier in self._variables

    def has_file(self, identifier: str) -> bool:
        return identifier in self._files

    def resolve_string(self, identifier: str) -> str:
        """Value of a variable. Callers check ``has_variable`` first."""
        return self._variables[identifier]

    def resolve_path(self, identifier: str) -> Path:
        """Path bound to a file identifier. Callers check ``has_file`` first."""
        return self._files[identifier]

    def merged(self, other: SymbolTable) -> SymbolTable:
        """New table with other's bindings taking precedence over these."""
        return SymbolTable(
            {**self._variables, **other.variables},
            {**self._files, **other.files},
        )

    def __repr__(self) -> str:
        return f"SymbolTable(variables={dict(self._variables)!r}, files={dict(self._files)!r})"


def from_config(config: dict[str, Any], base_dir: Path) -> SymbolTable:
    """Build a table from a loaded config's ``[variables]`` and ``[files]`` tables.

    Relative file paths are resolved against ``base_dir``.
    """
    variables: dict[str, str] = {}
    cfg_vars = config.get("variables")
    if isinstance(cfg_vars, dict):
        for k, v in cfg_vars.items():
            variables[str(k)] = str(v)

    files: dict[str, Path] = {}
    cfg_files = config.get("files")
    if isinstance(cfg_files, dict):
        for k, v in cfg_files.items():
            path = Path(str(v))
            files[str(k)] = path if path.is_absolute() else base_dir / path

    return SymbolTable(variables, files)
