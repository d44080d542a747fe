# logger.py
import logging
import re

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_SENSITIVE_KEYS = ['x-starfighter-authorization', 'api_key', 'apikey', 'token', 'secret', 'password']


def setup_logger(debug=False):
    """Configure the package logger with optional debug mode"""
    level = logging.DEBUG if debug else logging.INFO

    log = logging.getLogger("stockfighter")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(level)
    return log


def redact_sensitive(text: str) -> str:
    if not text:
        return text

    # Redact standalone tokens (like API keys)
    if 20 <= len(text) < 100 and ' ' not in text:
        if text.isalnum() or '-' in text or '_' in text:
            return f"{text[:4]}...{text[-4:]}"  # Show first/last 4 chars

    # Redact tokens in key=value / key: value pairs, including dict reprs
    for key in _SENSITIVE_KEYS:
        text = re.sub(
            rf"({re.escape(key)}['\"]?\s*[:=]\s*['\"]?)([^\s'\",&}}]+)",
            r"\1REDACTED",
            text,
            flags=re.IGNORECASE,
        )
    return text


# Library code only logs through this; handlers are installed by setup_logger()
logger = logging.getLogger("stockfighter")
