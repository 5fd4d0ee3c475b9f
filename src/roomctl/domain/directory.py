"""Directory — the validated, code-indexed collection of posts for one room.

Every code shares the room prefix (2-4 characters). Codes and prefixes are
upper-cased with :data:`CASE_FOLD`; post fields are trimmed on insertion.

INVARIANT: Codes are unique. Inserting an existing code is rejected,
never overwritten.

The interchange format is line-oriented: line 0 holds the prefix and each
following line holds ``CODE##MACHINE##FIRST##SURNAME``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, KeysView, Sequence
from typing import TypeVar

from roomctl.domain.errors import ValidationError
from roomctl.domain.post import Post

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIELD_SEPARATOR = "##"
# Not allowed in an exported code or field: it would shift the split.
RESERVED_CHAR = "#"
FIELD_COUNT = 4
PREFIX_MIN_LENGTH = 2
PREFIX_MAX_LENGTH = 4

# str.upper applies the Unicode default mapping and never consults the locale.
CASE_FOLD: Callable[[str], str] = str.upper

DISPLAY_FORMAT = "{code} – {machine} ({first} {surname})"
INTERCHANGE_FORMAT = FIELD_SEPARATOR.join(["{code}", "{machine}", "{first}", "{surname}"])


def require_present(value: T | None, message: str) -> T:
    """Return *value*, raising :class:`ValidationError` if it is None."""
    if value is None:
        raise ValidationError(message)
    return value


def require_text(value: str | None, message: str) -> str:
    """Return *value* trimmed, raising :class:`ValidationError` if None or blank."""
    text = require_present(value, message).strip()
    if not text:
        raise ValidationError(message)
    return text


def normalize_prefix(prefix: str | None) -> str:
    """Trim, length-check, and upper-case a room prefix."""
    if prefix is None:
        raise ValidationError("Prefix required")
    prefix = prefix.strip()
    if not PREFIX_MIN_LENGTH <= len(prefix) <= PREFIX_MAX_LENGTH:
        msg = f"Prefix length must be between {PREFIX_MIN_LENGTH} and {PREFIX_MAX_LENGTH}"
        raise ValidationError(msg)
    return CASE_FOLD(prefix)


def split_record(line: str) -> list[str]:
    """Split an interchange record on ``##``, dropping trailing empty fields.

    ``IC01##PC1##Ana##Ruiz##`` therefore still yields four fields.
    """
    fields = line.split(FIELD_SEPARATOR)
    while fields and not fields[-1]:
        fields.pop()
    return fields


class Directory:
    """Posts of one room keyed by prefixed code.

    Build with :meth:`create` (empty) or :meth:`from_lines` (interchange
    text). Mutation happens only through :meth:`add`. Iteration order over
    codes is unspecified.
    """

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._posts: dict[str, Post] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, prefix: str | None) -> Directory:
        """Return an empty directory for *prefix*.

        Raises:
            ValidationError: If *prefix* is None or its trimmed length is
                outside [2, 4].
        """
        return cls(normalize_prefix(prefix))

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> Directory:
        """Rebuild a directory from interchange lines.

        Line 0 is the prefix; an invalid prefix raises. Later lines that do
        not split into exactly four fields, or that fail :meth:`add`, are
        skipped. The result may be empty, so callers should check
        :meth:`count` rather than rely on the absence of an error.
        """
        if not lines:
            raise ValidationError("Prefix required on the first line")
        directory = cls.create(lines[0])

        for number, line in enumerate(lines[1:], start=1):
            fields = split_record(line)
            if len(fields) != FIELD_COUNT:
                logger.debug("Skipping line %d: expected %d fields", number, FIELD_COUNT)
                continue
            code, machine_id, first_name, surname = fields
            try:
                directory.add(code, Post(machine_id, first_name, surname))
            except ValidationError as exc:
                logger.debug("Skipping line %d: %s", number, exc)
        return directory

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, code: str | None, post: Post | None) -> None:
        """Insert *post* under *code*.

        Checks, in order: code present and non-blank; upper-cased code
        starts with the prefix; code not already stored; post present with
        three non-blank fields. Stores the trimmed post under the trimmed,
        upper-cased code.
        """
        code = CASE_FOLD(require_text(code, "Post code required"))
        if not code.startswith(self._prefix):
            msg = f"Post code '{code}' does not belong to this directory ('{self._prefix}')"
            raise ValidationError(msg)
        if code in self._posts:
            raise ValidationError(f"Duplicate post code '{code}'")

        post = require_present(post, "Post data required")
        first_name = require_text(post.first_name, "User first name required")
        surname = require_text(post.surname, "User surname required")
        machine_id = require_text(post.machine_id, "Machine identifier required")

        self._posts[code] = Post(machine_id, first_name, surname)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        return self._prefix

    def get(self, code: str) -> Post | None:
        """Exact-key lookup. *code* is not normalised."""
        return self._posts.get(code)

    def count(self) -> int:
        return len(self._posts)

    def is_empty(self) -> bool:
        return not self._posts

    def codes(self) -> KeysView[str]:
        """Read-only view of the stored codes."""
        return self._posts.keys()

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, code: object) -> bool:
        return code in self._posts

    def __iter__(self) -> Iterator[str]:
        return iter(self._posts)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, template: str) -> list[str]:
        return [
            template.format(
                code=code,
                machine=post.machine_id,
                first=post.first_name,
                surname=post.surname,
            )
            for code, post in self._posts.items()
        ]

    def to_display_lines(self) -> list[str]:
        """One ``CODE – MACHINE (FIRST SURNAME)`` line per post."""
        return self._render(DISPLAY_FORMAT)

    def to_interchange_lines(self) -> list[str]:
        """Prefix line followed by one ``##``-delimited line per post.

        This is the input format of :meth:`from_lines`.

        Raises:
            ValidationError: If a code or field contains ``#``; such a
                record would not read back as the same post.
        """
        for code, post in self._posts.items():
            values = (code, post.machine_id, post.first_name, post.surname)
            if any(RESERVED_CHAR in value for value in values):
                msg = f"Post '{code}' cannot be exported: '{RESERVED_CHAR}' is reserved"
                raise ValidationError(msg)
        return [self._prefix, *self._render(INTERCHANGE_FORMAT)]

    def __str__(self) -> str:
        return f"{self._prefix}* – {self.count()} posts"

    def __repr__(self) -> str:
        return f"Directory(prefix={self._prefix!r}, count={self.count()})"
