"""
Built-in scalar field types.

Each type converts raw input into a value (`inflate`) and applies its own
small set of checks. Conversion failures raise `ValueError`, which the
field's `process` records as an error message.
"""

import re
from datetime import date
from typing import Any

from fieldtree.core.field import Field

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Text(Field):
    """Single line of text, trimmed by default."""

    maxlength: int | None = None
    minlength: int | None = None
    trim: bool = True

    def inflate(self, data: Any) -> Any:
        text = data if isinstance(data, str) else str(data)
        return text.strip() if self.trim else text

    def validate_value(self, value: Any) -> None:
        if self.maxlength is not None and len(value) > self.maxlength:
            self.add_error(
                f"Field should not exceed {self.maxlength} characters. "
                f"You entered {len(value)}"
            )
        if self.minlength is not None and len(value) < self.minlength:
            self.add_error(
                f"Field must be at least {self.minlength} characters. "
                f"You entered {len(value)}"
            )


class TextArea(Text):
    """Multi-line text; surrounding whitespace is kept."""

    trim: bool = False


class Password(Text):
    trim: bool = False


class Hidden(Text):
    pass


class Email(Text):
    def validate_value(self, value: Any) -> None:
        super().validate_value(value)
        if not EMAIL_PATTERN.match(value):
            self.add_error("Email should be of the format someuser@example.com")


class Integer(Field):
    """Whole number with an optional inclusive range."""

    range_start: int | None = None
    range_end: int | None = None

    def inflate(self, data: Any) -> Any:
        if isinstance(data, bool):
            raise ValueError("Value must be an integer")
        if isinstance(data, int):
            return data
        try:
            return int(str(data).strip())
        except ValueError:
            raise ValueError("Value must be an integer") from None

    def validate_value(self, value: Any) -> None:
        low, high = self.range_start, self.range_end
        if low is not None and high is not None:
            if not low <= value <= high:
                self.add_error(f"Value must be between {low} and {high}")
        elif low is not None and value < low:
            self.add_error(f"Value must be greater than or equal to {low}")
        elif high is not None and value > high:
            self.add_error(f"Value must be less than or equal to {high}")


class Float(Field):
    def inflate(self, data: Any) -> Any:
        if isinstance(data, bool):
            raise ValueError("Must be a number")
        if isinstance(data, (int, float)):
            return float(data)
        try:
            return float(str(data).strip())
        except ValueError:
            raise ValueError("Must be a number") from None


class Boolean(Field):
    """Checkbox-style flag. Common false spellings inflate to False."""

    false_values: tuple[str, ...] = ("0", "false", "off", "no")

    def inflate(self, data: Any) -> Any:
        if isinstance(data, str):
            return data.strip().lower() not in self.false_values
        return bool(data)


class Date(Field):
    """Calendar date in ISO format (YYYY-MM-DD)."""

    def inflate(self, data: Any) -> Any:
        if isinstance(data, date):
            return data
        try:
            return date.fromisoformat(str(data).strip())
        except ValueError:
            raise ValueError("Please enter a valid date (YYYY-MM-DD)") from None

    def deflate(self, value: Any) -> Any:
        return value.isoformat() if isinstance(value, date) else value
