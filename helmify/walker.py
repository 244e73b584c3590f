"""Iteration over manifest files given as files or directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO

logger = logging.getLogger(__name__)


def _walk_tree(root: Path) -> Iterator[Path]:
    """Yield files under ``root`` in lexical order, without following directory links."""
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        entry_path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_tree(entry_path)
        else:
            yield entry_path


def _files_in_dir(directory: Path) -> list[Path]:
    with os.scandir(directory) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    return [Path(entry.path) for entry in ordered if not entry.is_dir(follow_symlinks=False)]


def walk(paths: Iterable[str], recursively: bool = False) -> Iterator[tuple[str, IO[str]]]:
    """Yield ``(file name, open file)`` for each manifest file among ``paths``.

    Directories are scanned for files, descending into subdirectories only when
    ``recursively`` is set. Unreadable paths are logged and skipped. Each file is
    closed once the consumer moves on to the next one.
    """
    for raw_path in paths:
        path = Path(raw_path)
        try:
            is_dir = path.is_dir() if path.exists() else None
        except OSError as err:
            logger.warning("no such file or directory %r: %s", raw_path, err)
            continue
        if is_dir is None:
            logger.warning("no such file or directory %r", raw_path)
            continue

        if not is_dir:
            try:
                handle = open(path, encoding="utf-8")
            except OSError as err:
                logger.warning("unable to open file %r: %s", raw_path, err)
                continue
            with handle:
                yield path.name, handle
            continue

        if not recursively:
            try:
                files = _files_in_dir(path)
            except OSError as err:
                logger.warning("unable to read directory %r: %s", raw_path, err)
                continue
            for file_path in files:
                try:
                    handle = open(file_path, encoding="utf-8")
                except OSError as err:
                    logger.warning("unable to open file %r: %s", str(file_path), err)
                    continue
                with handle:
                    yield file_path.name, handle
            continue

        try:
            for file_path in _walk_tree(path):
                with open(file_path, encoding="utf-8") as handle:
                    yield file_path.name, handle
        except OSError as err:
            logger.warning("unable to open %r: %s", path.name, err)