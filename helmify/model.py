"""Core abstractions: Kubernetes objects, processors, templates and app metadata."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Any, NamedTuple

from helmify.config import Config
from helmify.values import Values


class GroupVersionKind(NamedTuple):
    """API group, version and kind of a Kubernetes object."""

    group: str
    version: str
    kind: str


def _parse_group_version(api_version: str) -> tuple[str, str]:
    if not api_version or api_version == "/":
        return "", ""
    parts = api_version.split("/")
    if len(parts) == 1:
        return "", parts[0]
    if len(parts) == 2:
        return parts[0], parts[1]
    return "", ""


@dataclass
class Resource:
    """An untyped Kubernetes object held as its decoded mapping."""

    data: dict[str, Any] = field(default_factory=dict)

    @property
    def api_version(self) -> str:
        value = self.data.get("apiVersion")
        return value if isinstance(value, str) else ""

    @property
    def kind(self) -> str:
        value = self.data.get("kind")
        return value if isinstance(value, str) else ""

    def _metadata(self) -> dict[str, Any]:
        meta = self.data.get("metadata")
        return meta if isinstance(meta, dict) else {}

    @property
    def name(self) -> str:
        value = self._metadata().get("name")
        return value if isinstance(value, str) else ""

    @property
    def namespace(self) -> str:
        value = self._metadata().get("namespace")
        return value if isinstance(value, str) else ""

    @property
    def labels(self) -> dict[str, str]:
        value = self._metadata().get("labels")
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    @property
    def annotations(self) -> dict[str, str]:
        value = self._metadata().get("annotations")
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    def group_version_kind(self) -> GroupVersionKind:
        """Return the group, version and kind declared by the object."""
        group, version = _parse_group_version(self.api_version)
        return GroupVersionKind(group, version, self.kind)


class Template(ABC):
    """A Helm template destined for the chart's templates directory."""

    @abstractmethod
    def filename(self) -> str:
        """Name of the file the template is written to."""

    @abstractmethod
    def values(self) -> Values:
        """Values the template refers to."""

    @abstractmethod
    def write(self, writer: IO[str]) -> None:
        """Write the rendered template to ``writer``."""


class AppMetadata(ABC):
    """Information shared by all objects of the chart being built."""

    config: Config

    @abstractmethod
    def namespace(self) -> str:
        """The application's namespace."""

    @abstractmethod
    def chart_name(self) -> str:
        """The chart name."""

    @abstractmethod
    def templated_name(self, obj_name: str) -> str:
        """Turn an object name into a name templated with the chart fullname."""

    @abstractmethod
    def templated_string(self, text: str) -> str:
        """Turn any string into one templated with the chart fullname."""

    @abstractmethod
    def trim_name(self, obj_name: str) -> str:
        """Strip the application's common name prefix."""


class Processor(ABC):
    """Converts Kubernetes objects of some kinds into Helm templates."""

    @abstractmethod
    def process(self, app_meta: AppMetadata, obj: Resource) -> tuple[bool, Template | None]:
        """Return ``(False, None)`` for unsupported objects, else ``(True, template)``.

        The template may be ``None`` when a supported object is deliberately skipped.
        Failures are raised.
        """