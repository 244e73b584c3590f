"""Chart-wide metadata collected from all input objects."""

from __future__ import annotations

import logging

from helmify.config import Config
from helmify.model import AppMetadata, GroupVersionKind, Resource

logger = logging.getLogger(__name__)

_NAME_TEMPLATE = '{{{{ include "{chart}.fullname" . }}}}-{name}'

NS_GVK = GroupVersionKind("", "v1", "Namespace")
CRD_GVK = GroupVersionKind("apiextensions.k8s.io", "v1", "CustomResourceDefinition")


def common_prefix(one: str, two: str) -> str:
    """Return the longest common prefix of two strings."""
    length = 0
    for left, right in zip(one, two):
        if left != right:
            break
        length += 1
    return one[:length]


def _app_namespace(obj: Resource) -> str:
    if obj.group_version_kind() == NS_GVK:
        return obj.name
    return obj.namespace


def _detect_common_prefix(obj: Resource, previous: str) -> str:
    if obj.group_version_kind() in (CRD_GVK, NS_GVK):
        return previous
    if not previous:
        return obj.name
    return common_prefix(obj.name, previous)


class Service(AppMetadata):
    """Collects names and namespace of the application's objects."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._common_prefix = ""
        self._namespace = ""
        self._names: set[str] = set()

    def load(self, obj: Resource) -> None:
        """Record an object before processing starts."""
        self._names.add(obj.name)
        self._common_prefix = _detect_common_prefix(obj, self._common_prefix)
        obj_ns = _app_namespace(obj)
        if not obj_ns:
            return
        if self._namespace and self._namespace != obj_ns:
            logger.warning(
                "Two different namespaces for app detected: %s and %s. "
                "Resulted chart will have single namespace.",
                obj_ns,
                self._namespace,
            )
        self._namespace = obj_ns

    def namespace(self) -> str:
        return self._namespace

    def chart_name(self) -> str:
        return self.config.chart_name

    def trim_name(self, obj_name: str) -> str:
        trimmed = obj_name.removeprefix(self._common_prefix).lstrip("-./_ ")
        return trimmed or obj_name

    def templated_name(self, name: str) -> str:
        if self.config.original_name or name not in self._names:
            return name
        return _NAME_TEMPLATE.format(chart=self.config.chart_name, name=self.trim_name(name))

    def templated_string(self, text: str) -> str:
        return _NAME_TEMPLATE.format(chart=self.config.chart_name, name=self.trim_name(text))