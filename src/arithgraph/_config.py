"""Configuration loading from pyproject.toml or a standalone TOML file.

The configuration selects the value domain new graphs compute in:

    [tool.arithgraph]
    domain = "modular"
    modulus = 4294967296
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ._domain import IntegerDomain, ModularDomain
from ._errors import ConfigError

if TYPE_CHECKING:
    from typing import Self

    from ._domain import ValueDomain

PYPROJECT = "pyproject.toml"


class ArithGraphConfig(BaseModel):
    """Validated ``[tool.arithgraph]`` settings.

    Attributes:
        domain: "integer" (unbounded) or "modular".
        modulus: Required for, and only allowed with, the modular domain.
        project_root: Directory the configuration was loaded from, if any.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    domain: Literal["integer", "modular"] = "integer"
    modulus: int | None = None
    project_root: Path | None = None

    @model_validator(mode="after")
    def _check_modulus(self) -> Self:
        if self.domain == "modular":
            if self.modulus is None:
                msg = "domain 'modular' requires a modulus"
                raise ValueError(msg)
            if self.modulus < 2:  # noqa: PLR2004
                msg = f"modulus must be >= 2, got {self.modulus}"
                raise ValueError(msg)
        elif self.modulus is not None:
            msg = "modulus is only valid with domain 'modular'"
            raise ValueError(msg)
        return self

    def build_domain(self) -> ValueDomain:
        if self.domain == "modular":
            assert self.modulus is not None  # guaranteed by _check_modulus
            return ModularDomain(self.modulus)
        return IntegerDomain()


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    current = (start_dir or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> ArithGraphConfig:
    """Load and validate arithgraph settings from a TOML file.

    For a pyproject.toml the ``[tool.arithgraph]`` table is used; any other
    file is read as a whole. A pyproject.toml without the table yields the
    defaults.

    Args:
        path: Path to pyproject.toml or a standalone TOML file.

    Returns:
        Parsed ArithGraphConfig

    Raises:
        ConfigError: If the file is not valid TOML or the settings are invalid.

    """
    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise ConfigError(msg) from e

    if path.name == PYPROJECT:
        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            msg = f"Invalid [tool] in {path}: expected a table"
            raise ConfigError(msg)
        section = tool.get("arithgraph", {})
    else:
        section = data
    if not isinstance(section, dict):
        msg = f"Invalid [tool.arithgraph] in {path}: expected a table"
        raise ConfigError(msg)

    try:
        return ArithGraphConfig.model_validate({**section, "project_root": path.parent})
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        msg = f"Invalid arithgraph configuration in {path}: {messages}"
        raise ConfigError(msg) from e


def get_config(start_dir: Path | None = None) -> ArithGraphConfig:
    """Get config from pyproject.toml in start_dir (default: cwd) or its parents.

    Returns:
        ArithGraphConfig (defaults if no pyproject.toml or no [tool.arithgraph] section)

    """
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is None:
        return ArithGraphConfig()
    return load_config(pyproject_path)
