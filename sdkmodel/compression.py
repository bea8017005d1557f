"""Extraction of gzip-compressed tar archives."""

from __future__ import annotations

import os
import shutil
import tarfile
from typing import BinaryIO


def decompress_to_path(stream: BinaryIO, target: str | os.PathLike) -> None:
    """Extract the gzipped tar read from ``stream`` into directory ``target``."""
    with tarfile.open(fileobj=stream, mode="r|gz") as archive:
        for member in archive:
            path = os.path.join(target, member.name)
            if member.isdir():
                os.makedirs(path, mode=member.mode & 0o777 or 0o755, exist_ok=True)
                continue
            source = archive.extractfile(member)
            with open(path, "wb") as out:
                if source is not None:
                    shutil.copyfileobj(source, out)