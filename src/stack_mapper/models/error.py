"""Data models for errors and their code frames."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

import structlog

from stack_mapper.models.stack import ParsedLine
from stack_mapper.utils.logging import LogEventNames

log = structlog.get_logger()

_ERROR_ATTRIBUTES = (
    "name",
    "message",
    "stack",
    "parsed_stack",
    "parsedStack",
    "code_frame",
    "codeFrame",
)


@dataclass(frozen=True)
class CodeFrame:
    """A rendered snippet of source around an error location."""

    line: int
    column: int | None
    relative_file: str | None
    absolute_file: str | None
    frame: str
    language: str | None = None


@dataclass(frozen=True)
class ErrorRecord:
    """Immutable description of a runtime error.

    Pipeline functions take and return ``ErrorRecord`` values. Hosts that
    need the original object back use ``from_error`` on the way in and
    ``apply_to`` on the way out.
    """

    name: str = "Error"
    message: str = ""
    stack: str | None = None
    parsed_stack: tuple[ParsedLine, ...] | None = None
    code_frame: CodeFrame | Mapping[str, Any] | None = None  # Mappings come from hosts

    def to_string(self) -> str:
        """Textual form of the error, e.g. ``TypeError: x is undefined``."""
        if not self.name:
            return self.message
        if not self.message:
            return self.name
        return f"{self.name}: {self.message}"

    def with_stack(self, stack: str | None) -> ErrorRecord:
        """Return a copy carrying a different stack."""
        return dataclasses.replace(self, stack=stack)

    @classmethod
    def from_error(cls, error: Any) -> ErrorRecord:
        """Build a record from a mapping, an object or an exception.

        Missing or non-string fields fall back to defaults, so this never
        raises for malformed input. A non-string ``stack`` becomes ``None``.

        Args:
            error: Mapping with error keys, an object with error attributes,
                a Python exception, or ``None``

        Returns:
            ErrorRecord describing the error
        """
        if isinstance(error, ErrorRecord):
            return error
        if error is None:
            return cls(name="", message="")

        if isinstance(error, Mapping):
            fields = dict(error)
        else:
            fields = {key: getattr(error, key) for key in _ERROR_ATTRIBUTES if hasattr(error, key)}
            if isinstance(error, BaseException):
                # NameError and ImportError carry an unrelated `name` attribute
                fields["name"] = type(error).__name__
                fields["message"] = str(error)

        # Host objects may use camelCase keys
        if "parsed_stack" not in fields and "parsedStack" in fields:
            fields["parsed_stack"] = fields["parsedStack"]
        if "code_frame" not in fields and "codeFrame" in fields:
            fields["code_frame"] = fields["codeFrame"]

        name = fields.get("name", "Error")
        message = fields.get("message", "")
        stack = fields.get("stack")
        parsed_stack = fields.get("parsed_stack")
        code_frame = fields.get("code_frame")

        return cls(
            name=name if isinstance(name, str) else "Error",
            message=message if isinstance(message, str) else str(message),
            stack=stack if isinstance(stack, str) else None,
            parsed_stack=tuple(parsed_stack) if parsed_stack else None,
            code_frame=code_frame if _is_code_frame(code_frame) else None,
        )

    def apply_to(self, error: Any) -> Any:
        """Write stack fields back onto a host error and return the same object.

        ``stack`` is always written; ``parsed_stack`` and ``code_frame`` only
        when set, under the camelCase key when the host already uses it.
        Mappings are updated in place, other objects via ``setattr``. A record
        passed as ``error`` is immutable, so this record is returned. ``None``
        and hosts that accept neither items nor attributes come back as-is.

        Args:
            error: The host error the record was built from

        Returns:
            The same ``error`` object
        """
        if isinstance(error, ErrorRecord):
            return self
        if error is None:
            return error

        updates: dict[str, Any] = {"stack": self.stack}
        if self.parsed_stack is not None:
            updates[_host_key(error, "parsed_stack", "parsedStack")] = self.parsed_stack
        if self.code_frame is not None:
            updates[_host_key(error, "code_frame", "codeFrame")] = self.code_frame

        try:
            for key, value in updates.items():
                if isinstance(error, MutableMapping):
                    error[key] = value
                else:
                    setattr(error, key, value)
        except (AttributeError, TypeError) as e:
            log.debug(
                LogEventNames.STACK_WRITEBACK_SKIPPED,
                error_type=type(error).__name__,
                reason=str(e),
            )
        return error


def _is_code_frame(value: object) -> bool:
    if isinstance(value, CodeFrame):
        return True
    return isinstance(value, Mapping) and bool(value)


def _host_key(error: Any, key: str, camel_key: str) -> str:
    """Return the key a host error stores a field under."""
    if isinstance(error, Mapping):
        has_key, has_camel_key = key in error, camel_key in error
    else:
        has_key, has_camel_key = hasattr(error, key), hasattr(error, camel_key)

    return camel_key if has_camel_key and not has_key else key
