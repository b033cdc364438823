from __future__ import annotations

import logging

import pytest

from rote import log, shell
from rote.ui import console


@pytest.fixture(autouse=True)
def _reset_globals():
    yield
    shell.set_executor(shell.ShellExecutor())
    console.set_console(console.Console())
    if log._handler is not None:
        logging.getLogger("rote").removeHandler(log._handler)
        log._handler = None
    logging.getLogger("rote").setLevel(logging.NOTSET)


@pytest.fixture
def write_rotefile(tmp_path):
    def _write(body: str, name: str = "Rotefile"):
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write
