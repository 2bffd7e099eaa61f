"""
Snippetbox — Snippet Create Form
=================================

What:  Transient holder for the fields submitted to create a snippet, together
       with the validation errors found in them.
Who:   Built by the HTML create handler (form fields) and the JSON API
       (request body); never persisted.
How:   The form owns a Validator as a named field and runs every check through
       it, so all field problems surface in a single pass.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from snippetbox.validator import Validator, max_chars, not_blank, permitted_value

TITLE_MAX_CHARS = 100
PERMITTED_EXPIRY_DAYS = (1, 7, 365)
DEFAULT_EXPIRY_DAYS = 365


@dataclass
class SnippetCreateForm:
    title: str = ""
    content: str = ""
    expires_at: int = DEFAULT_EXPIRY_DAYS
    validator: Validator = field(default_factory=Validator)

    @classmethod
    def from_fields(
        cls,
        title: Optional[str],
        content: Optional[str],
        expires_at: Optional[str],
    ) -> "SnippetCreateForm":
        """
        Build a form from raw submitted strings.

        An expiry that is missing or not an integer becomes 0, which the
        permitted-value check then reports like any other bad choice.
        """
        try:
            expires = int(expires_at) if expires_at is not None else 0
        except ValueError:
            expires = 0
        return cls(title=title or "", content=content or "", expires_at=expires)

    def validate(self) -> bool:
        """Run every field check (no short-circuiting) and report validity."""
        self.validator.check_field(
            not_blank(self.title), "title", "This field cannot be blank"
        )
        self.validator.check_field(
            max_chars(self.title, TITLE_MAX_CHARS),
            "title",
            f"This field cannot be more than {TITLE_MAX_CHARS} characters long",
        )
        self.validator.check_field(
            not_blank(self.content), "content", "This field cannot be blank"
        )
        self.validator.check_field(
            permitted_value(self.expires_at, *PERMITTED_EXPIRY_DAYS),
            "expires_at",
            "This field must equal 1, 7 or 365",
        )
        return self.validator.valid()

    @property
    def field_errors(self) -> Dict[str, str]:
        return self.validator.field_errors
