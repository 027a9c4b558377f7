"""Ticket reference pattern families.

Exactly one family is active per deployment. Each one knows how to find a
bracketed ticket token anywhere in a text, how to find a token that sits at
the end of a line (the only position that gets rewritten into a link), and
what a bare ticket identifier looks like inside a canonical link.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ticketlink.exceptions import ConfigError

DEFAULT_PATTERN = "project-key"


@dataclass(frozen=True)
class TicketPattern:
    """A ticket reference pattern family.

    Attributes:
        name: Name used to select the family in configuration.
        identifier: Regex for a bare ticket identifier, without brackets.
    """

    name: str
    identifier: str

    @property
    def ticket_regex(self) -> re.Pattern[str]:
        """Bracketed ticket token, e.g. ``[ABC-123]``."""
        return re.compile(rf"\[{self.identifier}\]")

    @property
    def unlinked_regex(self) -> re.Pattern[str]:
        """Bracketed ticket token followed by a line break."""
        return re.compile(rf"\[{self.identifier}\]\r?\n")

    def find_ticket(self, text: str | None) -> str | None:
        """Find the first bracketed ticket token anywhere in ``text``."""
        if not text:
            return None
        match = self.ticket_regex.search(text)
        return match.group(0) if match else None

    def find_unlinked(self, text: str | None) -> re.Match[str] | None:
        """Find the first ticket token that ends a line."""
        if not text:
            return None
        return self.unlinked_regex.search(text)

    def linked_regex(self, base_url: str) -> re.Pattern[str]:
        """Canonical link ``<base_url><identifier>`` for this family."""
        return re.compile(re.escape(base_url) + self.identifier)


PROJECT_KEY = TicketPattern(name="project-key", identifier=r"\w+-\d+")
SHORT_ID = TicketPattern(name="short-id", identifier=r"[a-z0-9]{6,8}")

PATTERNS: dict[str, TicketPattern] = {
    PROJECT_KEY.name: PROJECT_KEY,
    SHORT_ID.name: SHORT_ID,
}


def get_pattern(name: str) -> TicketPattern:
    """Look up a pattern family by name.

    Args:
        name: Family name, e.g. 'project-key' or 'short-id'.

    Returns:
        The matching TicketPattern.

    Raises:
        ConfigError: If no family has that name.
    """
    try:
        return PATTERNS[name.strip().lower()]
    except KeyError:
        valid = ", ".join(sorted(PATTERNS))
        raise ConfigError(f"Unknown ticket pattern '{name}' (expected one of: {valid})") from None
