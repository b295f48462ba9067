"""
redact.py

Masks the API key in text that may end up in logs, terminal output or error reports.
Only the value of the `apikey` query parameter is replaced, so the rest of the text
(URLs, error messages) stays readable.
"""

import re

API_KEY_PATTERN = re.compile(r'(apikey=)[^&\s\'"]*', re.IGNORECASE)
MASK = "***"


def redact_api_key(text: str) -> str:
    """
    Replaces the value of every `apikey=` pair in text.

    >>> redact_api_key("url: /api?module=stats&apikey=SECRET&")
    'url: /api?module=stats&apikey=***&'
    """
    return API_KEY_PATTERN.sub(rf"\g<1>{MASK}", text)
