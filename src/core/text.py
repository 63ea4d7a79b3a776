"""String normalization and token helpers shared by registration."""

import re
import secrets

from core.config import settings

# URL-safe alphabet (64 symbols), the same set nanoid uses
ACTIVATION_CODE_ALPHABET = (
    "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
)

_WHITESPACE_RUN = re.compile(r"\s+")
_WORD = re.compile(r"[^\W_]+")


def collapse_spaces(value: str, trim: bool = False) -> str:
    """Collapse every whitespace run in ``value`` to a single space."""
    collapsed = _WHITESPACE_RUN.sub(" ", value)
    return collapsed.strip() if trim else collapsed


def to_pascal_case(value: str) -> str:
    """Join the alphanumeric words of ``value`` in PascalCase.

    >>> to_pascal_case("jane  doe-smith")
    'JaneDoeSmith'
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in _WORD.findall(value))


def generate_activation_code(length: int | None = None) -> str:
    """Generate a random URL-safe activation code."""
    size = length or settings.activation_code_length
    return "".join(secrets.choice(ACTIVATION_CODE_ALPHABET) for _ in range(size))
