"""Local filesystem writer for generated static files.

Storage layout (relative to the output root):
    index.html, articles.html, articles-<n>.html
    article/<id>.html, category/<id>.html, tag/<id>.html
    <slug>.html
    sitemap.txt, sitemap.xml, sitemap.html
"""

import logging
import os
import tempfile
from pathlib import Path

from static_cms.application.interfaces import StaticFileWriter
from static_cms.domain.exceptions import StaticWriteError

logger = logging.getLogger(__name__)


class LocalStaticFileWriter(StaticFileWriter):
    """Infrastructure adapter that owns the static output root."""

    def __init__(self, output_dir: str | Path):
        self._output_dir = Path(output_dir).resolve()
        self._output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def resolve(self, relative_path: str) -> Path:
        """Map a relative output path to an absolute one inside the output root."""
        target = (self._output_dir / relative_path).resolve()
        if target == self._output_dir or self._output_dir not in target.parents:
            raise StaticWriteError(relative_path, "path escapes the static output root")
        return target

    async def write(self, relative_path: str, content: str) -> str:
        """Atomically replace ``relative_path`` with ``content``.

        The content is written byte-for-byte as UTF-8 (no newline translation)
        to a temporary file next to the target, then renamed over it, so readers
        never observe a half-written page.
        """
        target = self.resolve(relative_path)
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            raise StaticWriteError(relative_path, str(exc)) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.info("Wrote static file: %s (%d chars)", target, len(content))
        return str(target)
