import re

# RTL/LTR marks, embeddings, overrides and isolates that mobile keyboards insert
DIRECTION_MARKS = re.compile(r"[\u200e\u200f\u202a-\u202e\u2066-\u2069]")

def strip_direction_marks(text: str) -> str:
    """Remove bidi control characters and surrounding whitespace"""
    if not text:
        return ""
    return DIRECTION_MARKS.sub('', text).strip()

def sanitize_input(text: str) -> str:
    """Sanitize user input to prevent XSS"""
    if not text:
        return text

    sanitized = text.replace('<', '&lt;').replace('>', '&gt;')
    sanitized = sanitized.replace('"', '&quot;').replace("'", '&#x27;')
    sanitized = sanitized.replace('/', '&#x2F;')

    return sanitized
