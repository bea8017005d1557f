import io
import tarfile

import pytest

from sdkmodel.compression import decompress_to_path


def _build_archive(entries):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in entries:
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                tar.addfile(info, io.BytesIO(content))
    buf.seek(0)
    return buf


def test_extracts_dirs_and_files(tmp_path):
    archive = _build_archive(
        [("top", None), ("top/a.txt", b"alpha"), ("top/sub", None), ("top/sub/b.bin", b"\x00\x01")]
    )
    decompress_to_path(archive, tmp_path)
    assert (tmp_path / "top").is_dir()
    assert (tmp_path / "top" / "a.txt").read_bytes() == b"alpha"
    assert (tmp_path / "top" / "sub" / "b.bin").read_bytes() == b"\x00\x01"


def test_empty_file(tmp_path):
    decompress_to_path(_build_archive([("empty", b"")]), tmp_path)
    assert (tmp_path / "empty").read_bytes() == b""


def test_not_gzip_raises(tmp_path):
    with pytest.raises(tarfile.TarError):
        decompress_to_path(io.BytesIO(b"not an archive at all"), tmp_path)


def test_missing_parent_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        decompress_to_path(_build_archive([("nodir/file.txt", b"x")]), tmp_path)