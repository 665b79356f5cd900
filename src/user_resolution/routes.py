"""Reserved route segments that must never be treated as user handles."""

from __future__ import annotations


# First path segments owned by system, content and page routes.
# URL rewriting checks these before mapping /<segment> to a user page.
RESERVED_ROUTES: tuple[str, ...] = (
    # System
    "admin",
    "api",
    "auth",
    "legal",
    ".well-known",
    "_app",
    "__data",
    "socket.io",
    "health",
    "metrics",
    # Content
    "blog",
    "products",
    "events",
    "notes",
    "videos",
    "programs",
    "explore",
    # Pages
    "settings",
    "contact",
    "about",
    "privacy",
    "terms",
)

_RESERVED = frozenset(RESERVED_ROUTES)


def is_reserved_route(segment: str) -> bool:
    """
    Check if a path segment is a reserved route (not a user handle).

    Case-insensitive, whole segment only: "Admin" is reserved, "admin2" is not.
    """
    return segment.lower() in _RESERVED
