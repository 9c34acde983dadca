"""
Fault values — structured error payloads for the failure track.

A Result is generic over its failure type, so nothing here is required:
any plain value can ride in a Failure. Fault and FaultCatalog are the
batteries-included option for applications that want a closed set of
fault kinds with message templates.

    catalog = FaultCatalog({
        "USER_TOO_YOUNG": "User too young: {0}",
        "NO_USER_EMAIL": "No email given",
    })
    catalog.create("USER_TOO_YOUNG", "10").message  # → 'User too young: 10'

The catalog is a value, not a module global: build one per application
and inject it where faults are created.
"""

from __future__ import annotations

import errno
import traceback
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Optional


def _kind_key(kind: Any) -> str:
    if isinstance(kind, Enum):
        return str(kind.value)
    return str(kind)


@dataclass(frozen=True, slots=True)
class Fault:
    """
    Immutable fault descriptor carrying a stable kind, message and options.

    `options` are the free-form values interpolated into the message.
    The timestamp is informational and does not take part in equality.

    >>> fault = Fault("NO_USER_NAME", "No user name given")
    >>> fault.kind
    'NO_USER_NAME'
    """

    kind: Any
    message: str
    options: tuple[str, ...] = ()
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(UTC), repr=False, compare=False
    )

    @property
    def code(self) -> str:
        """The kind as a plain string, whether it was given as str or Enum."""
        return _kind_key(self.kind)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
        )
        return f"{self.message}\n{tb}"


class FaultCatalog(Mapping[str, str]):
    """
    Read-only table of (fault kind, message template) pairs.

    Keys may be given as strings or Enum members; lookups accept either.
    Templates use str.format positional fields: "User too young: {0}".
    """

    def __init__(self, templates: Mapping[Any, str]) -> None:
        self._kinds = {_kind_key(kind): kind for kind in templates}
        self._templates = {_kind_key(kind): template for kind, template in templates.items()}

    def __getitem__(self, kind: Any) -> str:
        return self._templates[_kind_key(kind)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, kind: object) -> bool:
        return _kind_key(kind) in self._templates

    def create(
        self,
        kind: Any,
        *options: Any,
        exception: Optional[BaseException] = None,
    ) -> Fault:
        """
        Instantiate a Fault of the given kind, interpolating options.

        Raises KeyError for a kind the catalog does not know, and
        ValueError when the template expects options that were not given.
        """
        key = _kind_key(kind)
        if key not in self._templates:
            raise KeyError(f"Unknown fault kind: {key!r}")
        rendered = tuple(str(option) for option in options)
        try:
            message = self._templates[key].format(*rendered)
        except (IndexError, KeyError) as e:
            raise ValueError(
                f"Fault {key!r} template {self._templates[key]!r} "
                f"needs more than {len(rendered)} option(s)"
            ) from e
        return Fault(
            kind=self._kinds[key],
            message=message,
            options=rendered,
            exception=exception,
        )


def fault_code(exception: BaseException) -> str:
    """
    Stable code identifying a raised exception, used to translate it.

    Resolution order:
      - a string `code` attribute on the exception
      - the errno symbol of an OSError (FileNotFoundError → "ENOENT")
      - the exception class name
    """
    code = getattr(exception, "code", None)
    if isinstance(code, str) and code:
        return code
    if isinstance(exception, OSError) and exception.errno is not None:
        symbol = errno.errorcode.get(exception.errno)
        if symbol is not None:
            return symbol
    return type(exception).__name__
