"""Persisted check state — last observed Status per registered check.

Stored as a flat JSON object with one field per check, e.g.
``{"disk": "nominal", "failed_units": "critical"}``. Loading never fails:
a missing file, an unreadable file or a malformed document all yield the
all-nominal default state. Writing is best-effort.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from collections.abc import Iterable, Iterator, MutableMapping
from pathlib import Path

from sysstatus.config import settings
from sysstatus.health.engine import Status

logger = logging.getLogger(__name__)


class PersistedState(MutableMapping[str, Status]):
    """Fixed-schema record: exactly one Status per registered check name."""

    def __init__(self, names: Iterable[str], values: dict[str, Status] | None = None) -> None:
        self._fields: dict[str, Status] = {name: Status.default() for name in names}
        for name, status in (values or {}).items():
            if name in self._fields:
                self._fields[name] = status

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def __getitem__(self, name: str) -> Status:
        return self._fields[name]

    def __setitem__(self, name: str, status: Status) -> None:
        if name not in self._fields:
            raise KeyError(f"Unregistered check: {name}")
        self._fields[name] = Status(status)

    def __delitem__(self, name: str) -> None:
        raise TypeError("Persisted state has a fixed set of fields")

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PersistedState):
            return self._fields == other._fields
        return super().__eq__(other)

    def __repr__(self) -> str:
        return f"PersistedState({self.to_dict()!r})"

    def to_dict(self) -> dict[str, str]:
        return {name: status.value for name, status in self._fields.items()}

    @classmethod
    def from_document(cls, names: Iterable[str], document: object) -> PersistedState:
        """Build state from a decoded JSON document.

        Unknown fields are ignored and missing fields default to NOMINAL.
        Raises ValueError if the document is not an object or a known
        field holds an unrecognised token.
        """
        if not isinstance(document, dict):
            raise ValueError(f"expected a JSON object, got {type(document).__name__}")
        names = list(names)
        values: dict[str, Status] = {}
        for name in names:
            token = document.get(name)
            if token is None:
                continue
            if not isinstance(token, str):
                raise ValueError(f"field {name!r}: expected a string, got {token!r}")
            try:
                values[name] = Status.parse(token)
            except ValueError:
                raise ValueError(f"field {name!r}: unknown status {token!r}") from None
        return cls(names, values)


class StateStore:
    """Loads and saves PersistedState from a single JSON file."""

    def __init__(self, names: Iterable[str], path: Path | str | None = None) -> None:
        self.names = tuple(names)
        self.path = Path(path or settings.persistence_path)

    def default(self) -> PersistedState:
        return PersistedState(self.names)

    def load(self) -> PersistedState:
        """Read the state file. Never raises."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return self.default()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error reading persistence %s: %s", self.path, exc)
            return self.default()

        try:
            return PersistedState.from_document(self.names, json.loads(raw))
        except (ValueError, RecursionError) as exc:
            # json.JSONDecodeError is a ValueError; deep nesting overflows the decoder
            logger.warning("Error deserializing persistence %s: %s", self.path, exc)
            return self.default()

    def store(self, state: PersistedState) -> bool:
        """Write the state file atomically. Returns False on failure."""
        payload = json.dumps(state.to_dict(), indent=2) + "\n"
        directory = self.path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory or Path("."),
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    os.fchmod(fh.fileno(), self._file_mode())
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Error writing persistence %s: %s", self.path, exc)
            return False
        return True

    def _file_mode(self) -> int:
        """Mode for the replacement file: keep the existing one, else honour umask."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
