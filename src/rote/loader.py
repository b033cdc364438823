# loader.py
from __future__ import annotations

import runpy
from pathlib import Path
from typing import Dict, Optional

from .dsl import Declarations
from .errors import RoteError, RotefileError
from .log import get_logger
from .registry import Registry

log = get_logger("loader")


def find_rotefile(path: str | Path) -> Path:
    """Resolve the Rotefile path, raising RotefileError if it is not a readable file."""
    rf = Path(path).expanduser()
    if not rf.is_file():
        raise RotefileError(path=str(path), message="the path is not a file or is not readable")
    return rf.resolve()


def load_rotefile(path: str | Path, *, variables: Optional[Dict[str, str]] = None) -> Registry:
    """
    Execute a Rotefile and return the Registry it populated.

    The file is plain Python. Before it runs, describe / task / default and
    the helper functions are placed in its globals, all bound to a fresh
    Registry:

        describe("Remove build output")
        task("clean", [], lambda: remove("target"))
    """
    rf = find_rotefile(path)
    registry = Registry()
    decl = Declarations(registry, variables=variables)

    log.info("build file: %s", rf)
    try:
        runpy.run_path(str(rf), init_globals=decl.namespace(), run_name="rotefile")
    except RoteError:
        raise
    except SyntaxError as e:
        raise RotefileError(path=str(rf), message=f"syntax error on line {e.lineno}: {e.msg}") from e
    except Exception as e:  # noqa: BLE001
        raise RotefileError(path=str(rf), message=f"{type(e).__name__}: {e}") from e

    log.debug("loaded %d task(s)", len(registry))
    return registry
