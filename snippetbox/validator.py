"""
Snippetbox — Form Validator
============================

What:  Reusable field checks plus an accumulating map of field name → message.
Why:   A create form should report every bad field at once, so failures are
       collected as data instead of raised one at a time.
How:   A form holds a Validator instance and calls check_field() for each rule,
       unconditionally. valid() then tells the caller whether to save or to
       re-render the form with validator.field_errors.
"""

from typing import Any, Dict


class Validator:
    """Collects the first failure message recorded for each form field."""

    def __init__(self) -> None:
        self.field_errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.field_errors

    def add_field_error(self, key: str, message: str) -> None:
        # First message per field wins
        if key not in self.field_errors:
            self.field_errors[key] = message

    def check_field(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_field_error(key, message)


def not_blank(value: str) -> bool:
    """True when the value contains something other than whitespace."""
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    """True when the value is at most n characters (code points, not bytes)."""
    return len(value) <= n


def permitted_value(value: Any, *permitted: Any) -> bool:
    return value in permitted
