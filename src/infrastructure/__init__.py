"""Infrastructure layer - Adapters implementing domain protocols (ports).

Structure:
- events/: In-memory event bus and logging handler
- logging/: structlog console adapter
- persistence/: In-memory user repository
- rate_limit/: Login rate limiter
- security/: bcrypt hashing, JWT session tokens, session resolver

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
