"""Application entry point: read manifests and produce a Helm chart."""

from __future__ import annotations

import dataclasses
import logging
import signal
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import IO

from helmify.chart import HelmOutput
from helmify.config import Config
from helmify.context import AppContext
from helmify.decoder import decode
from helmify.model import Processor
from helmify.walker import walk

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = "helmify"


def set_log_level(config: Config) -> None:
    """Set the package log level from the verbosity settings."""
    level = logging.ERROR
    if config.verbose:
        level = logging.INFO
    if config.very_verbose:
        level = logging.DEBUG
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level)


@contextmanager
def _stop_on_signals(stop: threading.Event) -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum, frame):
        logger.debug("Received termination, signaling shutdown")
        stop.set()

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, old in previous.items():
            if old is not None:
                signal.signal(sig, old)


def start(
    stdin: IO[str],
    config: Config,
    processors: Iterable[Processor] = (),
    default_processor: Processor | None = None,
) -> None:
    """Convert manifests from ``config.files``, or from ``stdin``, into a chart."""
    config = dataclasses.replace(config, files=list(config.files))
    config.validate()
    set_log_level(config)
    stop = threading.Event()
    with _stop_on_signals(stop):
        context = (
            AppContext(config, HelmOutput())
            .with_processors(*processors)
            .with_default_processor(default_processor)
        )
        if config.files:
            for filename, handle in walk(config.files, config.files_recursively):
                for obj in decode(handle, stop):
                    context.add(obj, filename)
        else:
            for obj in decode(stdin, stop):
                context.add(obj, "")
        context.create_helm(stop)