"""Canonical form of an entry, the exact text a receipt is digested from.

Receipts are also produced by the browser client and the hash edge
function, which build this structure with `JSON.stringify`. The key
order, key names, normalization and serialization below must match
them character for character or issued receipts stop verifying.
"""
from __future__ import annotations

import json
import re

from ..core.constants import RECEIPT_SALT
from .model import HashableEntry

# ECMAScript WhiteSpace + LineTerminator, i.e. what String.prototype.trim removes.
JS_WHITESPACE = "\t\n\v\f\r " + "".join(
    chr(cp) for cp in (0x00A0, 0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF)
)

# A high+low surrogate pair is one code point to JSON.stringify; any other
# surrogate is written as a lowercase \uXXXX escape (well-formed JSON.stringify).
_SURROGATE_PAIR = re.compile(f"[{chr(0xD800)}-{chr(0xDBFF)}][{chr(0xDC00)}-{chr(0xDFFF)}]")
_LONE_SURROGATE = re.compile(f"[{chr(0xD800)}-{chr(0xDFFF)}]")


def _fold(value) -> str:
    """Lower-case and trim; absent or blank becomes ''."""
    if not value:
        return ""
    return str(value).lower().strip(JS_WHITESPACE)


def _trim(value) -> str:
    if not value:
        return ""
    return str(value).strip(JS_WHITESPACE)


def canonical_payload(entry: HashableEntry, *, salt: str = RECEIPT_SALT) -> dict:
    return {
        "id": entry.entry_id,
        "sheetId": entry.sheet_id,
        "firstName": _fold(entry.first_name),
        "lastName": _fold(entry.last_name),
        "timestamp": entry.timestamp,
        "createdAt": entry.created_at,
        "email": _fold(entry.email),
        "phone": _trim(entry.phone),
        "rank": _trim(entry.rank),
        "badgeNumber": _trim(entry.badge_number),
        "unit": _trim(entry.unit),
        "age": int(entry.age) if entry.age else 0,
        "salt": salt,
    }


def canonical_string(entry: HashableEntry, *, salt: str = RECEIPT_SALT) -> str:
    text = json.dumps(canonical_payload(entry, salt=salt), separators=(",", ":"), ensure_ascii=False)
    return _well_formed(text)


def _join_pair(match: re.Match) -> str:
    high, low = match.group()
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))


def _well_formed(text: str) -> str:
    text = _SURROGATE_PAIR.sub(_join_pair, text)
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text)
