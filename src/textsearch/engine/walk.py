# src/textsearch/engine/walk.py

"""
Filesystem traversal.

This module is responsible for discovering regular files under a root
directory. It performs *no reading* of file contents.

Rules:
- symbolic links below the root are never followed; a dangling one
  is reported,
- devices, sockets and FIFOs are skipped silently,
- hidden entries are included,
- an entry that cannot be listed or inspected is reported and skipped;
  the walk itself never aborts.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

FileCallback = Callable[[Path], None]
ErrorCallback = Callable[[Path, OSError], None]


def walk_tree(root: str | Path, on_file: FileCallback, on_error: ErrorCallback) -> int:
    """
    Visit every regular file under `root`.

    `on_file(path)` is called once per regular file, `on_error(path, exc)`
    once per entry that could not be visited, dangling symlinks included.
    Order is unspecified.

    The root itself is resolved through symlinks (it is what the user
    typed). If it is a regular file, it is the only file visited.

    Returns the number of files passed to `on_file`.
    """
    root_path = Path(root)

    try:
        st = root_path.stat()
    except OSError as e:
        on_error(root_path, e)
        return 0

    if stat.S_ISREG(st.st_mode):
        on_file(root_path)
        return 1

    if not stat.S_ISDIR(st.st_mode):
        return 0

    visited = 0
    stack = [root_path]

    while stack:
        d = stack.pop()

        try:
            with os.scandir(d) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot list %s: %s", d, e)
            on_error(d, e)
            continue

        for entry in entries:
            path = Path(entry.path)

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
                is_link = not (is_dir or is_file) and entry.is_symlink()
            except OSError as e:
                on_error(path, e)
                continue

            if is_dir:
                stack.append(path)
            elif is_file:
                on_file(path)
                visited += 1
            elif is_link and not os.path.exists(entry.path):
                on_error(path, FileNotFoundError(errno.ENOENT, "Broken symbolic link", entry.path))

    logger.debug("Walk of %s finished: %d file(s)", root_path, visited)
    return visited
