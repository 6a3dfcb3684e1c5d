"""Request parameter declarations for effects.

Each field knows how to pull its value out of a start-task body, apply
its default, and reject bad input with a message that names the field
(and, for enum fields, the allowed values).
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlparse

from app.errors import EffectValidationError


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED = _Required()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class ParamField(ABC):
    """A single validated parameter of an effect request."""

    kind = "value"

    def __init__(self, name: str, default: Any = REQUIRED, description: str = ""):
        self.name = name
        self.default = default
        self.description = description

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    def clean(self, body: Dict[str, Any]) -> Any:
        raw = body.get(self.name)
        if raw is None:
            if self.required:
                raise EffectValidationError(self.name, self.missing_message())
            return self.default
        return self.convert(raw)

    def missing_message(self) -> str:
        return f"Missing {self.name} parameter"

    def invalid(self, detail: str = "") -> EffectValidationError:
        message = f"Invalid {self.name} parameter"
        if detail:
            message = f"{message}: {detail}"
        return EffectValidationError(self.name, message)

    @abstractmethod
    def convert(self, raw: Any) -> Any:
        ...

    def describe(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "name": self.name,
            "type": self.kind,
            "required": self.required,
        }
        if not self.required and self.default is not None:
            info["default"] = self.default
        if self.description:
            info["description"] = self.description
        return info


class UrlField(ParamField):
    """Absolute http(s) URL of source media."""

    kind = "url"

    def missing_message(self) -> str:
        return f"Invalid {self.name} parameter: must be an absolute http(s) URL"

    def convert(self, raw: Any) -> str:
        if not isinstance(raw, str):
            raise self.invalid("must be an absolute http(s) URL")
        parsed = urlparse(raw.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise self.invalid("must be an absolute http(s) URL")
        return raw.strip()


class TextField(ParamField):
    kind = "text"

    def convert(self, raw: Any) -> str:
        if not isinstance(raw, str) or not raw.strip():
            raise self.invalid("must be a non-empty string")
        return raw


class ChoiceField(ParamField):
    """Value restricted to a fixed allow-list.

    numeric=True accepts numeric strings ("5") and compares them as numbers.
    custom_prefix lets values outside the list through when they carry the
    prefix (e.g. "custom_taylor_swift").
    """

    kind = "choice"

    def __init__(
        self,
        name: str,
        choices: Sequence[Any],
        default: Any = REQUIRED,
        label: Optional[str] = None,
        plural: str = "values",
        numeric: bool = False,
        custom_prefix: Optional[str] = None,
        description: str = "",
    ):
        super().__init__(name, default=default, description=description)
        self.choices: List[Any] = list(choices)
        self.label = label or name
        self.plural = plural
        self.numeric = numeric
        self.custom_prefix = custom_prefix

    def missing_message(self) -> str:
        return self.not_supported_message()

    def not_supported_message(self) -> str:
        allowed = ", ".join(_fmt(c) for c in self.choices)
        message = f"{self.label} not supported. Supported {self.plural}: {allowed}"
        if self.custom_prefix:
            message += f" or {self.custom_prefix}<name>"
        return message

    def convert(self, raw: Any) -> Any:
        value = self._coerce(raw) if self.numeric else raw
        if value in self.choices and not isinstance(value, bool):
            return value
        if (
            self.custom_prefix
            and isinstance(value, str)
            and value.startswith(self.custom_prefix)
            and len(value) > len(self.custom_prefix)
        ):
            return value
        raise EffectValidationError(self.name, self.not_supported_message())

    @staticmethod
    def _coerce(raw: Any) -> Any:
        if isinstance(raw, str):
            try:
                raw = float(raw.strip())
            except ValueError:
                return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        return raw

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["choices"] = self.choices
        if self.custom_prefix:
            info["custom_prefix"] = self.custom_prefix
        return info


class NumberField(ParamField):
    """Numeric value within inclusive bounds."""

    kind = "number"

    def __init__(
        self,
        name: str,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        default: Any = REQUIRED,
        integer: bool = False,
        description: str = "",
    ):
        super().__init__(name, default=default, description=description)
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer
        if integer:
            self.kind = "integer"

    def _range_text(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"{_fmt(self.minimum)}-{_fmt(self.maximum)}"
        if self.minimum is not None:
            return f">= {_fmt(self.minimum)}"
        if self.maximum is not None:
            return f"<= {_fmt(self.maximum)}"
        return ""

    def invalid(self, detail: str = "") -> EffectValidationError:
        rng = self._range_text()
        message = f"Invalid {self.name} parameter"
        if rng:
            message = f"{message} ({rng})"
        if detail:
            message = f"{message}: {detail}"
        return EffectValidationError(self.name, message)

    def convert(self, raw: Any) -> Any:
        if not _is_number(raw):
            raise self.invalid("must be a number")
        if not math.isfinite(raw):
            raise self.invalid("must be a finite number")
        if self.integer:
            if isinstance(raw, float) and not raw.is_integer():
                raise self.invalid("must be an integer")
            raw = int(raw)
        if self.minimum is not None and raw < self.minimum:
            raise self.invalid()
        if self.maximum is not None and raw > self.maximum:
            raise self.invalid()
        return raw

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        if self.minimum is not None:
            info["minimum"] = self.minimum
        if self.maximum is not None:
            info["maximum"] = self.maximum
        return info
