"""Access to secrets such as API keys and webhook signing keys."""

import os
from abc import ABC, abstractmethod
from typing import Optional


class SecretNotFound(LookupError):
    """A requested secret does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"secret not found: {key}")


class SecretProvider(ABC):
    """A backend that stores secrets."""

    @abstractmethod
    async def get_secret(self, name: str) -> str:
        """The secret's value; raises SecretNotFound if it is absent."""

    @abstractmethod
    async def has_secret(self, name: str) -> bool:
        """Whether the secret exists."""


class EnvSecretProvider(SecretProvider):
    """Reads secrets from environment variables, optionally under a prefix."""

    def __init__(self, prefix: Optional[str] = None) -> None:
        self.prefix = prefix

    def key_name(self, name: str) -> str:
        """The environment variable that holds the named secret."""
        upper = name.upper()
        return upper if self.prefix is None else f"{self.prefix}_{upper}"

    async def get_secret(self, name: str) -> str:
        key = self.key_name(name)
        try:
            return os.environ[key]
        except KeyError:
            raise SecretNotFound(key) from None

    async def has_secret(self, name: str) -> bool:
        return self.key_name(name) in os.environ