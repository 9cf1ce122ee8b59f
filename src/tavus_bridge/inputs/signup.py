"""
Signup input checks.

The signup form only needs a plausible, deliverable-looking email: the address is
where the n8n workflow mails the feedback report.
"""

from __future__ import annotations

import re

_EMAIL_SHAPE_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ALPHA_RE = re.compile(r"^[A-Za-z]+$")

INVALID_EMAIL_MESSAGE = (
    "Please enter a valid email address with a proper domain (e.g., user@example.com)"
)


def is_valid_email(email: str) -> bool:
    """
    True for `local@domain.tld` where the TLD is at least 2 letters (no digits)
    and the label right before it is non-empty.
    """
    if not email or not _EMAIL_SHAPE_RE.match(email):
        return False

    parts = email.split("@")
    if len(parts) != 2:
        return False

    domain_parts = parts[1].split(".")
    if len(domain_parts) < 2:
        return False

    tld = domain_parts[-1]
    if len(tld) < 2 or not _ALPHA_RE.match(tld):
        return False

    return bool(domain_parts[-2])
