from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime

E = TypeVar("E", bound=Enum)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_RE = re.compile(r"^[0-9+\-\s()]{10,15}$")


class FieldErrors:
    """Collects field-level messages so one request reports every problem at once."""

    def __init__(self):
        self.details: list[str] = []

    def add(self, field_name: str, message: str) -> None:
        self.details.append(f"{field_name}: {message}")

    def __bool__(self) -> bool:
        return bool(self.details)

    def raise_if_any(self, message: str = "Validation failed") -> None:
        if self.details:
            raise ValidationError(message, details=self.details)

    def string(
        self,
        value: Any,
        field_name: str,
        *,
        required: bool = False,
        min_len: int = 0,
        max_len: Optional[int] = None,
    ) -> Optional[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                self.add(field_name, "is required")
            return None
        if not isinstance(value, str):
            self.add(field_name, "must be a string")
            return None
        value = value.strip()
        if len(value) < min_len:
            self.add(field_name, f"must be at least {min_len} characters long")
            return None
        if max_len is not None and len(value) > max_len:
            self.add(field_name, f"cannot exceed {max_len} characters")
            return None
        return value

    def email(self, value: Any, field_name: str = "email", *, required: bool = False) -> Optional[str]:
        value = self.string(value, field_name, required=required, max_len=255)
        if value is None:
            return None
        if not EMAIL_RE.match(value):
            self.add(field_name, "must be a valid email address")
            return None
        return value.lower()

    def phone(self, value: Any, field_name: str = "phone") -> Optional[str]:
        value = self.string(value, field_name)
        if value is None:
            return None
        if not PHONE_RE.match(value):
            self.add(field_name, "must be a valid phone number")
            return None
        return value

    def integer(
        self,
        value: Any,
        field_name: str,
        *,
        required: bool = False,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> Optional[int]:
        if value is None or value == "":
            if required:
                self.add(field_name, "is required")
            return None
        # bool is an int subclass; True must not pass as a rating of 1
        if isinstance(value, bool):
            self.add(field_name, "must be a whole number")
            return None
        if isinstance(value, float):
            if not value.is_integer():
                self.add(field_name, "must be a whole number")
                return None
            value = int(value)
        elif isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                self.add(field_name, "must be a whole number")
                return None
        elif not isinstance(value, int):
            self.add(field_name, "must be a whole number")
            return None

        if min_value is not None and value < min_value:
            self.add(field_name, f"must be at least {min_value}")
            return None
        if max_value is not None and value > max_value:
            self.add(field_name, f"cannot exceed {max_value}")
            return None
        return value

    def choice(self, value: Any, field_name: str, enum_cls: Type[E], *, required: bool = False) -> Optional[E]:
        if value is None or value == "":
            if required:
                self.add(field_name, "is required")
            return None
        try:
            return enum_cls(value)
        except (TypeError, ValueError):
            allowed = ", ".join(m.value for m in enum_cls)
            self.add(field_name, f"must be one of: {allowed}")
            return None

    def datetime(self, value: Any, field_name: str, *, required: bool = False) -> Optional[datetime]:
        if value is None or value == "":
            if required:
                self.add(field_name, "is required")
            return None
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            self.add(field_name, "must be a valid date")
            return None
        try:
            return parse_iso_datetime(value)
        except ValueError:
            self.add(field_name, "must be a valid date")
            return None

    def boolean(self, value: Any, field_name: str) -> Optional[bool]:
        if not isinstance(value, bool):
            self.add(field_name, "must be true or false")
            return None
        return value
