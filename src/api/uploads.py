# This file stages multipart image parts as local temporary files.
# A staged file belongs to the request that created it and is removed on every exit path:
# after a successful upload, after a validation failure, and after an upload failure.

from __future__ import annotations

import re
import shutil
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

_UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StagedUpload:
    path: Path
    filename: str
    content_type: str | None = None

    def discard(self) -> None:
        self.path.unlink(missing_ok=True)


def _staged_name(filename: str) -> str:
    safe = _UNSAFE_NAME_RE.sub("_", Path(filename).name) or "upload"
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe}"


@contextmanager
def stage_upload(upload: UploadFile | None, upload_dir: Path) -> Iterator[StagedUpload | None]:
    """Write an uploaded file to `upload_dir` for the duration of the block.

    Yields `None` when the request carried no file, so handlers can use one code path.
    """

    if upload is None or not upload.filename:
        yield None
        return

    upload_dir.mkdir(parents=True, exist_ok=True)
    staged = StagedUpload(
        path=upload_dir / _staged_name(upload.filename),
        filename=upload.filename,
        content_type=upload.content_type,
    )
    try:
        with staged.path.open("wb") as handle:
            shutil.copyfileobj(upload.file, handle)
        yield staged
    finally:
        staged.discard()
