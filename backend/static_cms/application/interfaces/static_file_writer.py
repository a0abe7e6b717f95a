"""Port for persisting generated files under the static output root."""

from abc import ABC, abstractmethod


class StaticFileWriter(ABC):
    @abstractmethod
    async def write(self, relative_path: str, content: str) -> str:
        """Replace the file at ``relative_path`` with ``content``.

        Returns the absolute path written.

        Raises:
            StaticWriteError: the path escapes the output root or the write failed.
        """
        ...
