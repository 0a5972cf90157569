"""Payment infrastructure toolkit: canonical types, a mock connector, webhook verification, idempotency and simulation."""

__version__ = "0.1.0"