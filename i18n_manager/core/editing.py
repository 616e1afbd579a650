"""
Coercion of text typed into a value editor.
"""

import json
import math
from typing import Any


def parse_edited_value(text: str) -> Any:
    """
    Turn editor text into a document value.

    - blank text becomes ""
    - text starting with "{" or "[" is parsed as JSON when it is valid JSON
    - numeric text becomes an int or a float
    - "true" / "false" (any case) become booleans
    - anything else is kept verbatim as a string
    """
    stripped = text.strip()
    if stripped == '':
        return ''

    if stripped.startswith('{') or stripped.startswith('['):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    number = _parse_number(stripped)
    if number is not None:
        return number

    lowered = stripped.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False

    return text


def _parse_number(text: str):
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    # nan and inf have no JSON form
    if not math.isfinite(number):
        return None
    return number
