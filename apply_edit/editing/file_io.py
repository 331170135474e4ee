"""
File I/O for the target file — byte-faithful reads and atomic writes.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile

logger = logging.getLogger(__name__)


def read_text(file_path: str, encoding: str = "utf-8") -> str:
    """Read *file_path* without newline translation.

    CRLF and lone CR line endings reach the caller untouched.
    """
    with open(file_path, "r", encoding=encoding, newline="") as f:
        return f.read()


def safe_write(
    file_path: str,
    content: str,
    encoding: str = "utf-8",
    atomic: bool = True,
) -> None:
    """Write *content* to *file_path* without newline translation.

    When *atomic* is set, the content goes to a temp file in the same
    directory which is then moved over the target, so readers never see
    a half-written file. Permission bits of an existing target are kept.
    A symlinked target is written through: the link stays, its target
    gets the new content.
    """
    if not atomic:
        with open(file_path, "w", encoding=encoding, newline="") as f:
            f.write(content)
        return

    abs_path = os.path.realpath(file_path)
    fd, tmp_path = tempfile.mkstemp(
        dir=os.path.dirname(abs_path), prefix=".apply_edit_tmp_"
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)

        if os.path.exists(abs_path):
            os.chmod(tmp_path, stat.S_IMODE(os.stat(abs_path).st_mode))
            shutil.move(tmp_path, abs_path)
        else:
            os.rename(tmp_path, abs_path)
    except Exception:
        logger.error("[ApplyEdit] Atomic write failed for %s", file_path)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
