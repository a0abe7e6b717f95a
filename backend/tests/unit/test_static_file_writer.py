"""Unit tests for the LocalStaticFileWriter."""

import pytest

from static_cms.domain.exceptions import StaticWriteError
from static_cms.infrastructure.storage.static_file_writer import LocalStaticFileWriter


@pytest.mark.asyncio
async def test_write_creates_parents_and_keeps_bytes(tmp_path):
    writer = LocalStaticFileWriter(tmp_path / "out")

    path = await writer.write("article/1.html", "line1\r\nline2\n")

    target = tmp_path / "out" / "article" / "1.html"
    assert path == str(target.resolve())
    assert target.read_bytes() == b"line1\r\nline2\n"


@pytest.mark.asyncio
async def test_write_overwrites_and_leaves_no_temp_files(tmp_path):
    writer = LocalStaticFileWriter(tmp_path)

    await writer.write("index.html", "old")
    await writer.write("index.html", "new")

    assert (tmp_path / "index.html").read_text("utf-8") == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["index.html"]


@pytest.mark.asyncio
async def test_write_rejects_paths_outside_output_root(tmp_path):
    writer = LocalStaticFileWriter(tmp_path / "out")

    with pytest.raises(StaticWriteError):
        await writer.write("../escape.html", "x")
    assert not (tmp_path / "escape.html").exists()
