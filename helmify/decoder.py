"""Decoding of Kubernetes manifest streams into resources."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from typing import IO, Any, Protocol

import yaml

from helmify.model import Resource

logger = logging.getLogger(__name__)

_SEPARATOR = "---"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class StopSignal(Protocol):
    """Anything that can tell whether decoding should stop, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


class _ManifestLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as plain strings, as JSON would."""


_ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class DecodeError(ValueError):
    """Raised for a document that is not a Kubernetes object."""


def _yaml_documents(lines: Iterable[str]) -> Iterator[str]:
    buffer: list[str] = []
    for line in lines:
        if line.startswith(_SEPARATOR):
            rest = line[len(_SEPARATOR):].strip()
            if rest and not rest.startswith("#"):
                logger.error("unable to decode yaml from input: invalid document separator %r", line.rstrip("\n"))
                buffer = []
                continue
            if buffer:
                yield "".join(buffer)
                buffer = []
            continue
        buffer.append(line)
    if buffer:
        yield "".join(buffer)


def _json_documents(text: str) -> Iterator[Any]:
    decoder = json.JSONDecoder()
    position = 0
    while True:
        while position < len(text) and text[position].isspace():
            position += 1
        if position >= len(text):
            return
        try:
            value, position = decoder.raw_decode(text, position)
        except json.JSONDecodeError as err:
            logger.error("unable to decode json from input: %s", err)
            return
        yield value


def _to_resource(document: Any) -> Resource:
    if not isinstance(document, dict):
        raise DecodeError(f"expected an object, got {type(document).__name__}")
    kind = document.get("kind")
    if not isinstance(kind, str) or not kind:
        raise DecodeError("Object 'Kind' is missing")
    return Resource(data={str(key): value for key, value in document.items()})


def _parsed_documents(text: str) -> Iterator[Any]:
    if text.lstrip().startswith("{"):
        yield from _json_documents(text)
        return
    for raw in _yaml_documents(text.splitlines(keepends=True)):
        try:
            loaded = yaml.load(raw, Loader=_ManifestLoader)  # noqa: S506 - safe loader subclass
        except yaml.YAMLError as err:
            logger.error("unable to decode yaml from input: %s", err)
            continue
        if loaded is None:
            continue
        yield loaded


def decode(reader: IO[str], stop: StopSignal | None = None) -> Iterator[Resource]:
    """Yield every Kubernetes object found in a YAML or JSON manifest stream.

    Documents that cannot be decoded are logged and skipped. Decoding ends early
    once ``stop`` is set.
    """
    logger.debug("Start processing...")
    text = reader.read()
    for document in _parsed_documents(text):
        if stop is not None and stop.is_set():
            logger.debug("Exiting: received stop signal")
            return
        try:
            resource = _to_resource(document)
        except DecodeError as err:
            logger.error("unable to decode yaml: %s", err)
            continue
        logger.debug(
            "decoded ApiVersion=%s Kind=%s Name=%s",
            resource.api_version,
            resource.kind,
            resource.name,
        )
        yield resource
    logger.debug("EOF received. Finishing input objects decoding.")