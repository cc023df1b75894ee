import re

DOCTYPE = "<!DOCTYPE html>"

# A whole line holding an opening fence, bare or language-tagged (```html).
_OPENING_FENCE_RE = re.compile(r"^[ \t]*```[ \t]*[\w.+-]*[ \t\r]*(?:\n|$)", re.MULTILINE)
# A bare or html-tagged fence with code after it on the same line.
_FENCE_PREFIX_RE = re.compile(r"^[ \t]*```(?:html)?[ \t]*", re.MULTILINE | re.IGNORECASE)
# One or more closing fences at the end of a line.
_CLOSING_FENCE_RE = re.compile(r"[ \t]*(?:```)+[ \t\r]*$", re.MULTILINE)
_LEADING_DOCTYPE_RE = re.compile(r"<!doctype\b[^>\n]*>", re.IGNORECASE)


def strip_fences(text: str) -> str:
    """Remove markdown fence markers until none are left."""
    while True:
        stripped = _OPENING_FENCE_RE.sub("", text)
        stripped = _FENCE_PREFIX_RE.sub("", stripped)
        stripped = _CLOSING_FENCE_RE.sub("", stripped)
        if stripped == text:
            return text
        text = stripped


def ensure_doctype(text: str) -> str:
    match = _LEADING_DOCTYPE_RE.match(text)
    if match:
        return DOCTYPE + text[match.end() :]
    if not text:
        return DOCTYPE
    return f"{DOCTYPE}\n{text}"


def sanitize(raw: str) -> str:
    """Turn raw model output into a standalone HTML document.

    Fence lines are dropped, surrounding whitespace is trimmed and the result
    always starts with the canonical doctype. Only the outer shape of the
    document is touched; scripts and markup are passed through as-is.
    """
    text = raw or ""
    while True:
        cleaned = strip_fences(text).strip().lstrip("\ufeff")
        if cleaned == text:
            break
        text = cleaned
    return ensure_doctype(text)
