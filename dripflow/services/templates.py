"""
Merge tokens for step messages.

Tokens like ``{{first_name}}`` are only catalogued and extracted here;
nothing renders them since messages are never actually sent.
"""
import re
from typing import List

MERGE_TOKENS: List[str] = [
    "first_name", "last_name", "email", "phone",
    "property_name", "unit_number", "lead_score",
    "tour_link", "application_link", "payment_link",
]

_TOKEN_RE = re.compile(r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*\}\}")


def extract_placeholders(*texts: str | None) -> List[str]:
    """Token names used in the given texts, in order of first appearance."""
    seen: List[str] = []
    for text in texts:
        if not text:
            continue
        for name in _TOKEN_RE.findall(text):
            if name not in seen:
                seen.append(name)
    return seen


def unknown_placeholders(*texts: str | None) -> List[str]:
    """Tokens that are not part of the merge-token catalogue."""
    return [t for t in extract_placeholders(*texts) if t not in MERGE_TOKENS]
