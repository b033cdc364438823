"""File system helpers exposed to Rotefiles as `fs`.

Every helper raises FileSystemError instead of leaking OSError, so a failing
helper inside a task action ends the run like any other task failure.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Union

from .errors import FileSystemError

PathLike = Union[str, os.PathLike]


@contextmanager
def _wrap(operation: str, path: PathLike) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise FileSystemError(operation=operation, path=str(path), reason=e.strerror or str(e)) from e


def exists(path: PathLike) -> bool:
    return os.path.exists(path)


def is_dir(path: PathLike) -> bool:
    return os.path.isdir(path)


def is_file(path: PathLike) -> bool:
    return os.path.isfile(path)


def is_symlink(path: PathLike) -> bool:
    return os.path.islink(path)


def mkdir(path: PathLike, *, parents: bool = False) -> None:
    """Create a directory. Fails if it already exists."""
    with _wrap("mkdir", path):
        Path(path).mkdir(parents=parents, exist_ok=False)


def remove(path: PathLike) -> None:
    """
    Remove a file, symlink or whole directory tree.
    A path that does not exist is not an error.
    """
    p = Path(path)
    with _wrap("remove", path):
        if p.is_symlink() or p.is_file():
            p.unlink()
        elif p.is_dir():
            shutil.rmtree(p)


def copy(source: PathLike, dest: PathLike) -> None:
    with _wrap("copy", source):
        shutil.copy2(source, dest)


def rename(source: PathLike, dest: PathLike) -> None:
    with _wrap("rename", source):
        os.replace(source, dest)


def read(path: PathLike) -> str:
    with _wrap("read", path):
        return Path(path).read_text(encoding="utf-8")


def write(path: PathLike, contents: str) -> None:
    with _wrap("write", path):
        Path(path).write_text(contents, encoding="utf-8")


def append(path: PathLike, contents: str) -> None:
    """Append to an existing file."""
    with _wrap("append", path):
        with open(path, "r+", encoding="utf-8") as f:
            f.seek(0, os.SEEK_END)
            f.write(contents)


def combine(sources: Iterable[PathLike], dest: PathLike) -> None:
    """
    Concatenate the contents of `sources` into `dest`.

    The result is staged in a temporary file beside `dest` and moved into
    place at the end; if any source fails, `dest` is left untouched.
    """
    with _wrap("combine", dest):
        fd, tmp = tempfile.mkstemp(prefix=".combine-", dir=os.path.dirname(os.path.abspath(dest)))
        try:
            with open(fd, "w", encoding="utf-8") as out:
                for src in sources:
                    with _wrap("combine", src):
                        with open(src, "r", encoding="utf-8") as f:
                            shutil.copyfileobj(f, out)
            if os.path.exists(dest):
                shutil.copymode(dest, tmp)
            os.replace(tmp, dest)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


def glob(pattern: str, root: PathLike = ".") -> Iterator[Path]:
    """
    Lazily enumerate paths matching `pattern` relative to `root`.

    Order is whatever the file system yields; callers that need determinism
    sort. Each call starts a fresh enumeration.
    """
    base = Path(root)
    if os.path.isabs(pattern):
        anchor = Path(pattern).anchor
        base, pattern = Path(anchor), str(Path(pattern).relative_to(anchor))
    with _wrap("glob", pattern):
        yield from base.glob(pattern)
