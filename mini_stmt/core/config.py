"""Connection settings loaded from arguments, INI files or the environment."""

from __future__ import annotations

import configparser
import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .errors import ConfigError

SUPPORTED_DRIVERS = ("mysql", "sqlite", "postgres")
SETTABLE_OPTIONS = ("host", "username", "password", "name")

_ROOT_SECTION = "__root__"


@dataclass(frozen=True)
class ConnectionConfig:
    """Where and how to connect.

    `name` is the database name (the file path for SQLite).
    """

    driver: str = "mysql"
    host: str = ""
    username: str = ""
    password: str = ""
    name: str = ""
    port: Optional[int] = None

    def __post_init__(self) -> None:
        if self.driver not in SUPPORTED_DRIVERS:
            raise ConfigError(
                f"driver must be one of: {', '.join(SUPPORTED_DRIVERS)}; got {self.driver!r}"
            )

    def with_option(self, option: str, value: object) -> ConnectionConfig:
        """Return a copy with one of host/username/password/name replaced."""

        if option not in SETTABLE_OPTIONS:
            raise ConfigError(
                f"option must match one of ({', '.join(SETTABLE_OPTIONS)}); got {option!r}"
            )
        return dataclasses.replace(self, **{option: str(value)})

    @classmethod
    def from_ini(
        cls,
        path: str | Path,
        identifiers: Sequence[str],
        *,
        section: Optional[str] = None,
        driver: str = "mysql",
    ) -> ConnectionConfig:
        """Load settings from an INI file.

        Args:
            path: INI file; a file without section headers is accepted.
            identifiers: Keys holding host, username, password and database
                name, in that order.
            section: Section to read; defaults to the first one in the file.
            driver: Driver name stored on the result.
        """

        if isinstance(identifiers, str) or len(identifiers) != len(SETTABLE_OPTIONS):
            raise ConfigError(
                f"identifiers must name exactly {len(SETTABLE_OPTIONS)} keys "
                "(host, username, password, name)"
            )
        file_path = Path(path)
        if not str(path) or not file_path.is_file():
            raise ConfigError(f"INI file not found: {path}")

        parser = configparser.ConfigParser(interpolation=None)
        text = file_path.read_text(encoding="utf-8")
        try:
            parser.read_string(text, source=str(file_path))
        except configparser.MissingSectionHeaderError:
            parser = configparser.ConfigParser(interpolation=None)
            parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(file_path))

        sections = parser.sections()
        if section is None:
            if not sections:
                raise ConfigError(f"INI file has no settings: {path}")
            section = sections[0]
        if not parser.has_section(section):
            raise ConfigError(f"INI file {path} has no section [{section}]")

        values = {}
        for option, key in zip(SETTABLE_OPTIONS, identifiers):
            if not parser.has_option(section, key):
                raise ConfigError(f"INI section [{section}] is missing key {key!r}")
            values[option] = _unquote(parser.get(section, key))

        port = parser.get(section, "port", fallback=None)
        return cls(driver=driver, port=int(port) if port else None, **values)

    @classmethod
    def from_env(cls, prefix: str = "MINI_STMT_") -> ConnectionConfig:
        """Read `<prefix>DRIVER`, `HOST`, `USER`, `PASSWORD`, `DATABASE`, `PORT`."""

        port = os.environ.get(f"{prefix}PORT", "")
        return cls(
            driver=os.environ.get(f"{prefix}DRIVER", "mysql"),
            host=os.environ.get(f"{prefix}HOST", "localhost"),
            username=os.environ.get(f"{prefix}USER", ""),
            password=os.environ.get(f"{prefix}PASSWORD", ""),
            name=os.environ.get(f"{prefix}DATABASE", ""),
            port=int(port) if port else None,
        )


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value
