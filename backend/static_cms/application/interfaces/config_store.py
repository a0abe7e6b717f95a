"""Abstract key/value configuration store."""

from abc import ABC, abstractmethod


class ConfigStore(ABC):
    """Port for site configuration values (site metadata, active theme, policies)."""

    @abstractmethod
    async def get_all(self) -> dict[str, str]:
        ...

    @abstractmethod
    async def get(self, key: str, default: str = "") -> str:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Insert or replace a configuration value."""
        ...
