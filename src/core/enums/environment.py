"""Application environment types.

Defines the runtime environments of the back-office application.
Used by Settings to pick environment-specific behavior (log renderer,
secure cookies).

Environments:
- DEVELOPMENT: Local development, console log renderer
- TESTING: Automated test execution, JSON logs
- CI: Continuous integration runs, JSON logs
- PRODUCTION: Production deployment, secure session cookies
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
