"""
Shared utilities for the guild client.

This package aggregates cross-cutting building blocks:

- config: Client configuration via pydantic-settings
- logging: Structured logging via structlog
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from guild_client into shared/.
"""
