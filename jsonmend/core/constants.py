"""
Common constants used across the jsonmend library.
"""

# Private-use code points are not JSON syntax and practically never occur in model
# output; the placeholders pass through json.loads untouched.
BACKSLASH_PLACEHOLDER = "\ue000JM-BSL\ue001"
QUOTE_PLACEHOLDER = "\ue000JM-QUOT\ue001"

PLACEHOLDERS = (BACKSLASH_PLACEHOLDER, QUOTE_PLACEHOLDER)

# Characters a placeholder must never contain: they would be read as JSON syntax
# by the truncation scan or by the reparse.
RESERVED_CHARACTERS = frozenset('\\"{}[]')

# Escape sequences the control sanitizer writes for literal characters in strings
LINE_ESCAPE = "\\n"
TAB_ESCAPE = "\\t"


def validate_placeholder(token: str) -> None:
    """Raise ValueError if token could be mistaken for JSON syntax."""
    if not token:
        raise ValueError("Placeholder must not be empty")
    for char in token:
        if char in RESERVED_CHARACTERS or ord(char) < 0x20:
            raise ValueError(f"Placeholder contains reserved character {char!r}")


def contains_placeholder(text: str) -> bool:
    """Check whether text already carries one of the placeholder tokens."""
    return any(token in text for token in PLACEHOLDERS)


for _token in PLACEHOLDERS:
    validate_placeholder(_token)
if BACKSLASH_PLACEHOLDER in QUOTE_PLACEHOLDER or QUOTE_PLACEHOLDER in BACKSLASH_PLACEHOLDER:
    raise ValueError("Placeholders must not overlap")
