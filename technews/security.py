import re

_SECRET_PARAM_RE = re.compile(r"(?i)\b(api[_-]?key|key|token|secret|access_token)=([^&\s#]+)")
_USERINFO_RE = re.compile(r"(?i)(https?://)[^/\s@]+@")


def redact_secrets(text: str) -> str:
    """Redact credentials from URLs and error strings before they hit the logs."""
    if not isinstance(text, str):
        return text
    redacted = _SECRET_PARAM_RE.sub(r"\1=***REDACTED***", text)
    return _USERINFO_RE.sub(r"\1***REDACTED***@", redacted)
