"""Request gate policy for authenticated paths that match no route rule."""

from enum import Enum


class UnmatchedRoutePolicy(str, Enum):
    """How the request gate treats an authenticated path with no route rule.

    DENY sends the caller to the landing page with the unauthorized marker
    (SUPER_ADMIN still passes through the bypass). ALLOW lets any
    authenticated role through without a role check.
    """

    DENY = "deny"
    ALLOW = "allow"
