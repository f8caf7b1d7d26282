"""
Value encoders for emitted markup.

Three independent encoders, one per embedding context:
- html_encode: attribute values and text inside markup
- js_string_encode: the body of a double-quoted JavaScript string literal
- js_array_encode: a JavaScript array literal of strings
"""

from __future__ import annotations

import html
from typing import Iterable, Optional

# Characters that get a short escape inside a JS string literal
_JS_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Characters that are safe in JS but not inside an HTML <script> block
# ('</script>', '<!--', entity-like sequences) or that terminate a line in JS
_JS_UNICODE_ESCAPES = {"'", "<", ">", "&", "\u2028", "\u2029"}


def html_encode(value: Optional[str]) -> str:
    """HTML-encode `& < > " '`; None becomes an empty string."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def js_string_encode(value: Optional[str]) -> str:
    """
    Encode a value for embedding between double quotes in script text.

    The result never contains an unescaped quote, backslash, line terminator
    or '<', so it cannot end the string literal or the enclosing script block.
    """
    if not value:
        return ""
    out = []
    for ch in str(value):
        short = _JS_SHORT_ESCAPES.get(ch)
        if short is not None:
            out.append(short)
        elif ch in _JS_UNICODE_ESCAPES or ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def js_array_encode(values: Iterable[str]) -> str:
    """Render strings as a JavaScript array literal: ["a","b"]; no values → []."""
    return "[" + ",".join(f'"{js_string_encode(v)}"' for v in values) + "]"


__all__ = ["html_encode", "js_string_encode", "js_array_encode"]
