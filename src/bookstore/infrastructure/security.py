"""
Web security configuration.

Adds security headers to HTTP responses. Static asset paths are ignored
entirely, and the no-cache headers are disabled by default so browsers can
cache assets.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterable, List, Optional, Pattern

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import BookstoreConfig
from ..utils.logging_config import get_logger

logger = get_logger('security')

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, max-age=0, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

DEFAULT_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data:; "
    "font-src 'self'; "
    "object-src 'none'; "
    "base-uri 'self'; "
    "frame-ancestors 'none'"
)


@lru_cache(maxsize=128)
def compile_ant_pattern(pattern: str) -> Pattern[str]:
    """
    Compile an ant-style path pattern to a regex.

    ``**`` spans any number of path segments, ``*`` stays within one segment
    and ``?`` matches a single non-slash character. A trailing ``/**`` also
    matches the bare directory path, and a ``/**/`` in the middle also matches
    zero segments.
    """
    regex = ""
    i = 0
    while i < len(pattern):
        if pattern.startswith("/**", i) and i + 3 == len(pattern):
            regex += "(?:/.*)?"
            i += 3
        elif pattern.startswith("/**/", i):
            regex += "(?:/.*)?/"
            i += 4
        elif i == 0 and pattern.startswith("**/"):
            regex += "(?:.*/)?"
            i += 3
        elif pattern.startswith("**", i):
            regex += ".*"
            i += 2
        elif pattern[i] == "*":
            regex += "[^/]*"
            i += 1
        elif pattern[i] == "?":
            regex += "[^/]"
            i += 1
        else:
            regex += re.escape(pattern[i])
            i += 1
    return re.compile(f"^{regex}$")


def ant_match(pattern: str, path: str) -> bool:
    """Return whether ``path`` matches the ant-style ``pattern``."""
    return compile_ant_pattern(pattern).match(path) is not None


@dataclass
class WebSecurityConfig:
    """Security header policy for the web application."""

    ignored_paths: List[str] = field(default_factory=lambda: ["/static/**"])
    cache_control: bool = False
    frame_options: str = "DENY"
    content_security_policy: Optional[str] = DEFAULT_CSP
    include_hsts: bool = False

    @classmethod
    def from_config(cls, config: BookstoreConfig) -> "WebSecurityConfig":
        return cls(
            ignored_paths=list(config.app.security_ignored_paths),
            cache_control=config.app.security_cache_control,
            include_hsts=config.app.security_include_hsts,
        )

    def is_ignored(self, path: str) -> bool:
        return any(ant_match(pattern, path) for pattern in self.ignored_paths)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to non-ignored responses."""

    def __init__(self, app: ASGIApp, config: Optional[WebSecurityConfig] = None):
        super().__init__(app)
        self.config = config or WebSecurityConfig()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Ignored paths bypass security handling entirely
        if self.config.is_ignored(request.url.path):
            return await call_next(request)

        response = await call_next(request)

        response.headers["X-Frame-Options"] = self.config.frame_options
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if self.config.content_security_policy:
            response.headers["Content-Security-Policy"] = self.config.content_security_policy

        # Strict-Transport-Security: only meaningful over HTTPS
        if self.config.include_hsts and request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        if self.config.cache_control:
            for name, value in NO_CACHE_HEADERS.items():
                response.headers[name] = value

        return response


def configure_security(
    app: FastAPI,
    config: Optional[BookstoreConfig] = None,
    security_config: Optional[WebSecurityConfig] = None,
) -> WebSecurityConfig:
    """Install the security headers middleware on ``app``."""
    if security_config is None:
        security_config = (
            WebSecurityConfig.from_config(config) if config else WebSecurityConfig()
        )

    app.add_middleware(SecurityHeadersMiddleware, config=security_config)
    logger.info(
        f"Security headers enabled (cache_control={security_config.cache_control}, "
        f"ignored={_describe(security_config.ignored_paths)})"
    )
    return security_config


def _describe(patterns: Iterable[str]) -> str:
    return ", ".join(patterns) or "none"
