"""Application layer - Use cases and orchestration.

Structure:
- commands/: Command dataclasses and handlers (login, logout)
- services/: Permission registry, permission context, request gate

The application layer orchestrates domain logic and depends only on the
domain layer; adapters are injected through protocols.
"""
