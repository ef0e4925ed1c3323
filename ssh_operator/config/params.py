"""Task parameters handed to the operator by the workflow engine.

Wraps a plain mapping with typed, required-or-default accessors and the
nested-section merge used to let an ``ssh:`` block override top-level keys.
"""

from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

from ssh_operator.errors import ConfigurationError

T = TypeVar("T")

_MISSING: Any = object()

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class TaskParams(Mapping[str, Any]):
    """Read-only view over task parameters."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TaskParams({self._values!r})"

    def get_nested(self, key: str) -> "TaskParams":
        """Return the nested section ``key``, or empty params when absent.

        Raises:
            ConfigurationError: If ``key`` holds something other than a mapping
        """
        value = self._values.get(key)
        if value is None:
            return TaskParams()
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"Expected '{key}' to be a mapping, got {type(value).__name__}"
            )
        return TaskParams(value)

    def merged_with_nested(self, key: str) -> "TaskParams":
        """Layer the nested section ``key`` over the top-level values."""
        merged = dict(self._values)
        merged.update(self.get_nested(key))
        return TaskParams(merged)

    def get(self, key: str, type_: type[T] = str, default: Any = _MISSING) -> T:  # type: ignore[override]
        """Get a typed value.

        Args:
            key: Parameter name
            type_: Expected type (str, int, bool or float)
            default: Value when the key is absent; omit to make it required

        Returns:
            Converted value or default

        Raises:
            ConfigurationError: If required and absent, or not convertible
        """
        value = self._values.get(key)
        if value is None:
            if default is _MISSING:
                raise ConfigurationError(f"Parameter '{key}' is required but not set")
            return default  # type: ignore[no-any-return]
        return _convert(key, value, type_)

    def get_optional(self, key: str, type_: type[T] = str) -> T | None:
        """Get a typed value, or None when absent (no default)."""
        return self.get(key, type_, None)


def _convert(key: str, value: Any, type_: type[T]) -> T:
    if type_ is bool:
        return _to_bool(key, value)  # type: ignore[return-value]
    if isinstance(value, type_) and not isinstance(value, bool):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigurationError(
            f"Parameter '{key}' must be {type_.__name__}, got {type(value).__name__}"
        )
    if type_ is int and isinstance(value, float):
        raise ConfigurationError(f"Parameter '{key}' must be int, got {value!r}")
    try:
        return type_(value)  # type: ignore[call-arg]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Parameter '{key}' must be {type_.__name__}, got {value!r}",
            cause=e,
        ) from e


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigurationError(f"Parameter '{key}' must be bool, got {value!r}")
