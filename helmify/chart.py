"""Writing processed templates and values to disk as a Helm chart."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from helmify.chart_init import ChartError, init_chart_dir
from helmify.model import Template
from helmify.values import Values, ValuesError

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "cluster.local"
DOMAIN_KEY = "kubernetesClusterDomain"
DOMAIN_ENV = "KUBERNETES_CLUSTER_DOMAIN"

_DIR_MODE = 0o750
_FILE_MODE = 0o600


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _open_truncated(path: Path):
    descriptor = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
    return os.fdopen(descriptor, "w", encoding="utf-8", newline="")


def _overwrite_template_file(filename: str, chart_dir: Path, crd: bool, templates: list[Template]) -> None:
    if crd and "crd" in filename:
        subdir = chart_dir / "crds"
        try:
            subdir.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as err:
            raise ChartError(f"{err}: unable create crds dir") from err
    else:
        subdir = chart_dir / "templates"
    path = subdir / filename
    try:
        handle = _open_truncated(path)
    except OSError as err:
        raise ChartError(f"{err}: unable to open {path}") from err
    with handle:
        try:
            for position, template in enumerate(templates):
                logger.debug("writing a template into %s", path)
                template.write(handle)
                if position != len(templates) - 1:
                    handle.write("\n---\n")
            if templates:
                handle.write("\n")
        except OSError as err:
            raise ChartError(f"{err}: unable to write into {path}") from err
    logger.info("overwritten %s", path)


def _overwrite_values_file(
    chart_dir: Path,
    values: Values,
    cert_manager_as_subchart: bool,
    cert_manager_install_crd: bool,
) -> None:
    if cert_manager_as_subchart:
        try:
            values.add(cert_manager_install_crd, "certmanager", "installCRDs")
        except ValuesError as err:
            raise ChartError(f"{err}: unable to add cert-manager.installCRDs") from err
        try:
            values.add(True, "certmanager", "enabled")
        except ValuesError as err:
            raise ChartError(f"{err}: unable to add cert-manager.enabled") from err
    try:
        content = yaml.safe_dump(_plain(values), default_flow_style=False, allow_unicode=True, sort_keys=True)
    except yaml.YAMLError as err:
        raise ChartError(f"{err}: unable to write marshal values.yaml") from err
    path = chart_dir / "values.yaml"
    try:
        with _open_truncated(path) as handle:
            handle.write(content)
    except OSError as err:
        raise ChartError(f"{err}: unable to write values.yaml") from err
    logger.info("overwritten %s", path)


class HelmOutput:
    """Writes templates and values into a chart directory.

    Existing values.yaml and template files are overwritten on every run.
    """

    def create(
        self,
        chart_dir: str,
        chart_name: str,
        crd: bool,
        cert_manager_as_subchart: bool,
        cert_manager_version: str,
        cert_manager_install_crd: bool,
        templates: Sequence[Template],
        filenames: Sequence[str],
    ) -> None:
        """Create the chart skeleton if needed and write every template and the values."""
        init_chart_dir(chart_dir, chart_name, crd, cert_manager_as_subchart, cert_manager_version)
        files: dict[str, list[Template]] = {}
        values = Values({DOMAIN_KEY: DEFAULT_DOMAIN})
        for template, filename in zip(templates, filenames):
            files.setdefault(filename, []).append(template)
            values.merge(template.values())
        root = Path(chart_dir) / chart_name
        for filename, grouped in files.items():
            _overwrite_template_file(filename, root, crd, grouped)
        _overwrite_values_file(root, values, cert_manager_as_subchart, cert_manager_install_crd)