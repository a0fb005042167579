"""Shared validation helpers for JSON payload forms."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar, Optional

from ..money import MAX_AMOUNT, ZERO, format_amount, quantize, to_decimal

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


@dataclass
class PayloadForm:
    """Represents request input prior to validation.

    Subclasses list their accepted keys in ``FIELDS`` and implement ``clean``.
    In partial mode (updates) only keys present in the payload are validated.
    """

    FIELDS: ClassVar[tuple[str, ...]] = ()

    raw_data: dict[str, Any] = field(default_factory=dict)
    cleaned: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)
    partial: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, *, partial: bool = False):
        """Create a form populated from request data."""

        form = cls(partial=partial)
        form.load(data or {})
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind the accepted keys of incoming mapping data to the form state."""

        self.raw_data = {key: data[key] for key in self.FIELDS if key in data}

    def validate(self) -> bool:
        """Validate the bound data and populate ``cleaned``."""

        self.errors.clear()
        self.cleaned = {}
        if self.partial and not self.raw_data:
            self._add_error("__all__", "No updatable fields supplied.")
            return False
        self.clean()
        return not self.errors

    def clean(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    # ------------------------------------------------------------------
    # field parsers

    def _wants(self, key: str) -> bool:
        """Whether ``key`` should be validated in the current mode."""

        return not self.partial or key in self.raw_data

    def _raw_text(self, key: str) -> str:
        value = self.raw_data.get(key)
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else str(value).strip()

    def _text(self, key: str, label: str, *, max_length: int, required: bool = True) -> None:
        if not self._wants(key):
            return
        value = self._raw_text(key)
        if not value:
            if required:
                self._add_error(key, f"{label} is required.")
            else:
                self.cleaned[key] = None
            return
        if len(value) > max_length:
            self._add_error(key, f"{label} must be {max_length} characters or fewer.")
            return
        self.cleaned[key] = value

    def _choice(
        self,
        key: str,
        label: str,
        choices: tuple[str, ...],
        *,
        default: Optional[str] = None,
        required: bool = True,
    ) -> None:
        if not self._wants(key):
            return
        value = self._raw_text(key).lower()
        if not value:
            if default is not None:
                self.cleaned[key] = default
            elif required:
                self._add_error(key, f"{label} is required.")
            else:
                self.cleaned[key] = None
            return
        if value not in choices:
            self._add_error(key, f"{label} must be one of: {', '.join(choices)}.")
            return
        self.cleaned[key] = value

    def _amount(
        self,
        key: str,
        label: str,
        *,
        allow_zero: bool = False,
        default: Optional[str] = None,
    ) -> Optional[Decimal]:
        """Parse a decimal amount into a two-place string."""

        if not self._wants(key):
            return None
        raw = self._raw_text(key)
        if not raw:
            if default is not None:
                self.cleaned[key] = default
                return to_decimal(default)
            self._add_error(key, f"{label} is required.")
            return None
        if isinstance(self.raw_data.get(key), bool):
            self._add_error(key, f"Enter a valid number for {label.lower()}.")
            return None
        try:
            value = to_decimal(raw)
        except ValueError:
            self._add_error(key, f"Enter a valid number for {label.lower()}.")
            return None
        if not value.is_finite():
            self._add_error(key, f"Enter a valid number for {label.lower()}.")
            return None
        if value >= MAX_AMOUNT:
            self._add_error(key, f"{label} must be less than {MAX_AMOUNT:,.0f}.")
            return None
        # stored amounts keep two places; "0.001" rounds to zero and is rejected
        rounded = quantize(value)
        if value < ZERO or (rounded == ZERO and not allow_zero):
            qualifier = "zero or more" if allow_zero else "greater than zero"
            self._add_error(key, f"{label} must be {qualifier}.")
            return None
        self.cleaned[key] = format_amount(rounded)
        return rounded

    def _date(self, key: str, label: str, *, required: bool = True) -> Optional[date]:
        if not self._wants(key):
            return None
        raw = self._raw_text(key)
        if not raw:
            if required:
                self._add_error(key, f"{label} is required.")
            else:
                self.cleaned[key] = None
            return None
        try:
            value = date.fromisoformat(raw[:10]) if len(raw) >= 10 else date.fromisoformat(raw)
        except ValueError:
            self._add_error(key, f"Enter a valid date (YYYY-MM-DD) for {label.lower()}.")
            return None
        self.cleaned[key] = value
        return value

    def _bool(self, key: str, label: str, *, default: bool = False) -> Optional[bool]:
        if not self._wants(key):
            return None
        value = self.raw_data.get(key, default)
        if value is None:
            value = default
        if isinstance(value, bool):
            parsed = value
        else:
            text = str(value).strip().lower()
            if text in _TRUE_STRINGS:
                parsed = True
            elif text in _FALSE_STRINGS:
                parsed = False
            else:
                self._add_error(key, f"{label} must be true or false.")
                return None
        self.cleaned[key] = parsed
        return parsed

    def _identifier(self, key: str, label: str, *, required: bool = True) -> Optional[int]:
        if not self._wants(key):
            return None
        raw_value = self.raw_data.get(key)
        raw = self._raw_text(key)
        if not raw:
            if required:
                self._add_error(key, f"{label} is required.")
            else:
                self.cleaned[key] = None
            return None
        if isinstance(raw_value, bool):
            self._add_error(key, f"{label} must be a whole number.")
            return None
        try:
            parsed = int(raw)
        except (TypeError, ValueError):
            self._add_error(key, f"{label} must be a whole number.")
            return None
        if parsed <= 0:
            self._add_error(key, f"{label} must be greater than zero.")
            return None
        self.cleaned[key] = parsed
        return parsed

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)
