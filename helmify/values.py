"""The values.yaml model and helpers that template values into manifests."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any


class ValuesError(ValueError):
    """Raised when a value cannot be stored under the requested name."""


def to_lower_camel(text: str) -> str:
    """Convert an identifier in snake, kebab, dot or space case to lowerCamelCase."""
    text = text.strip()
    out: list[str] = []
    cap_next = False
    for position, char in enumerate(text):
        is_cap = "A" <= char <= "Z"
        is_low = "a" <= char <= "z"
        if cap_next:
            if is_low:
                char = char.upper()
        elif position == 0 and is_cap:
            char = char.lower()
        if is_cap or is_low:
            out.append(char)
            cap_next = False
        elif "0" <= char <= "9":
            out.append(char)
            cap_next = True
        else:
            cap_next = char in "_ -."
    return "".join(out)


def _camel_path(names: Iterable[str]) -> list[str]:
    path = []
    for name in names:
        if name == name.upper():
            name = name.lower()
        path.append(to_lower_camel(name))
    return path


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, dict, bool, int, float)) and not value)


def _deep_merge(target: dict, source: Mapping) -> None:
    for key, incoming in source.items():
        if key not in target:
            target[key] = copy.deepcopy(incoming)
            continue
        current = target[key]
        if isinstance(current, dict) and isinstance(incoming, Mapping):
            _deep_merge(current, incoming)
        elif isinstance(current, list) and isinstance(incoming, list):
            current.extend(copy.deepcopy(incoming))
        elif _is_empty(current):
            target[key] = copy.deepcopy(incoming)


class Values(dict):
    """Helm chart values: a nested mapping written out as values.yaml."""

    def merge(self, values: Mapping) -> None:
        """Merge ``values`` in, keeping existing entries and appending lists."""
        _deep_merge(self, values)

    def _set(self, value: Any, path: list[str]) -> None:
        if not path:
            raise ValuesError("unable to set value: empty value name")
        node: dict = self
        walked: list[str] = []
        for key in path[:-1]:
            walked.append(key)
            node = node.setdefault(key, {})
            if not isinstance(node, dict):
                raise ValuesError(
                    f"unable to set value: {path}: value cannot be set because "
                    f"{'.'.join(walked)} is not a map"
                )
        node[path[-1]] = copy.deepcopy(value)

    def add(self, value: Any, *args: str) -> str:
        """Store ``value`` and return the template expression that reads it."""
        path = _camel_path(args)
        self._set(value, path)
        joined = ".".join(path)
        if isinstance(value, str):
            return "{{ .Values." + joined + " | quote }}"
        if isinstance(value, list):
            return "{{ toYaml .Values." + joined + f" | nindent {len(path) * 2} }}}}"
        return "{{ .Values." + joined + " }}"

    def add_yaml(self, value: Any, indent: int, new_line: bool, *args: str) -> str:
        """Store ``value`` and return an expression rendering it as YAML."""
        path = _camel_path(args)
        self._set(value, path)
        joined = ".".join(path)
        if indent > 0:
            func = "nindent" if new_line else "indent"
            return "{{ .Values." + joined + f" | toYaml | {func} {indent} }}}}"
        return "{{ .Values." + joined + " | toYaml }}"

    def add_secret(self, to_base64: bool, *args: str) -> str:
        """Store an empty required secret value and return its expression."""
        path = _camel_path(args)
        self._set("", path)
        joined = ".".join(path)
        result = f'{{{{ required "{joined} is required" .Values.{joined}'
        if to_base64:
            result += " | b64enc"
        return result + " | quote }}"