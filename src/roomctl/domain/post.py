"""Post — one workstation record: machine plus habitual user."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Post:
    """Immutable workstation value.

    No validation happens here; :meth:`Directory.add` checks and trims
    the fields before storing.
    """

    machine_id: str
    first_name: str
    surname: str

    def __str__(self) -> str:
        return f"{self.machine_id} ({self.first_name} {self.surname})"
