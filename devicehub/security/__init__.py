"""Input sanitization for command and URL arguments."""

from devicehub.security.sanitizer import sanitize

__all__ = ["sanitize"]
