"""Creation of the Helm chart skeleton."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)


def _comment(text: str) -> str:
    return "# " + text if text else "#"


_IGNORE_HEADER = (
    "Patterns to ignore when building packages.",
    "This supports shell glob matching, relative path matching, and",
    "negation (prefixed with !). Only one pattern per line.",
)

_IGNORE_GROUPS = (
    (None, (".DS_Store",)),
    ("Common VCS dirs", (".git/", ".gitignore", ".bzr/", ".bzrignore", ".hg/", ".hgignore", ".svn/")),
    ("Common backup files", ("*.swp", "*.bak", "*.tmp", "*.orig", "*~")),
    ("Various IDEs", (".project", ".idea/", "*.tmproj", ".vscode/")),
)


def _build_helm_ignore() -> str:
    lines = [_comment(text) for text in _IGNORE_HEADER]
    for title, patterns in _IGNORE_GROUPS:
        if title:
            lines.append(_comment(title))
        lines.extend(patterns)
    return "\n".join(lines) + "\n"


HELM_IGNORE = _build_helm_ignore()

_PLACEHOLDER = "<CHARTNAME>"
_TRUNC = '| trunc 63 | trimSuffix "-"'


def _act(body: str) -> str:
    """Return a whitespace-trimming template action."""
    return "{{- " + body + " }}"


def _include(name: str) -> str:
    return '{{ include "' + _PLACEHOLDER + "." + name + '" . }}'


_END = _act("end")

_HELPER_BLOCKS = (
    (
        "name",
        ("Expand the name of the chart.",),
        (_act("default .Chart.Name .Values.nameOverride " + _TRUNC),),
    ),
    (
        "fullname",
        (
            "Create a default fully qualified app name.",
            "We truncate at 63 chars because some Kubernetes name fields are limited"
            " to this (by the DNS naming spec).",
            "If release name contains chart name it will be used as a full name.",
        ),
        (
            _act("if .Values.fullnameOverride"),
            _act(".Values.fullnameOverride " + _TRUNC),
            _act("else"),
            _act("$name := default .Chart.Name .Values.nameOverride"),
            _act("if contains $name .Release.Name"),
            _act(".Release.Name " + _TRUNC),
            _act("else"),
            _act('printf "%s-%s" .Release.Name $name ' + _TRUNC),
            _END,
            _END,
        ),
    ),
    (
        "chart",
        ("Create chart name and version as used by the chart label.",),
        (_act('printf "%s-%s" .Chart.Name .Chart.Version | replace "+" "_" ' + _TRUNC),),
    ),
    (
        "labels",
        ("Common labels",),
        (
            "helm.sh/chart: " + _include("chart"),
            _include("selectorLabels"),
            _act("if .Chart.AppVersion"),
            "app.kubernetes.io/version: {{ .Chart.AppVersion | quote }}",
            _END,
            "app.kubernetes.io/managed-by: {{ .Release.Service }}",
        ),
    ),
    (
        "selectorLabels",
        ("Selector labels",),
        (
            "app.kubernetes.io/name: " + _include("name"),
            "app.kubernetes.io/instance: {{ .Release.Name }}",
        ),
    ),
    (
        "serviceAccountName",
        ("Create the name of the service account to use",),
        (
            _act("if .Values.serviceAccount.create"),
            _act('default (include "' + _PLACEHOLDER + '.fullname" .) .Values.serviceAccount.name'),
            _act("else"),
            _act('default "default" .Values.serviceAccount.name'),
            _END,
        ),
    ),
)


def _build_helpers() -> str:
    blocks = []
    for name, comment, body in _HELPER_BLOCKS:
        lines = ["{{/*", *comment, "*/}}"]
        lines.append('{{- define "' + _PLACEHOLDER + "." + name + '" -}}')
        lines.extend(body)
        lines.append(_END)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


DEFAULT_HELPERS = _build_helpers()

_CHART_SECTIONS = (
    (
        (),
        ("apiVersion: v2", "name: {name}", "description: A Helm chart for Kubernetes"),
    ),
    (
        (
            "A chart can be either an 'application' or a 'library' chart.",
            "",
            "Application charts are a collection of templates that can be packaged"
            " into versioned archives",
            "to be deployed.",
            "",
            "Library charts provide useful utilities or functions for the chart developer."
            " They're included as",
            "a dependency of application charts to inject those utilities and functions"
            " into the rendering",
            "pipeline. Library charts do not define any templates and therefore cannot be deployed.",
        ),
        ("type: application",),
    ),
    (
        (
            "This is the chart version. This version number should be incremented each time"
            " you make changes",
            "to the chart and its templates, including the app version.",
            "Versions are expected to follow Semantic Versioning (https://semver.org/)",
        ),
        ("version: 0.1.0",),
    ),
    (
        (
            "This is the version number of the application being deployed. This version"
            " number should be",
            "incremented each time you make changes to the application. Versions are not"
            " expected to",
            "follow Semantic Versioning. They should reflect the version the application is using.",
            "It is recommended to use it with quotes.",
        ),
        ('appVersion: "0.1.0"',),
    ),
)


def _build_chartfile() -> str:
    lines: list[str] = []
    for comments, entries in _CHART_SECTIONS:
        lines.extend(_comment(text) for text in comments)
        lines.extend(entries)
    return "\n".join(lines) + "\n"


DEFAULT_CHARTFILE = _build_chartfile()

_CERT_MANAGER_FIELDS = (
    ("name", "cert-manager"),
    ("repository", "https://charts.jetstack.io"),
    ("condition", "certmanager.enabled"),
    ("alias", "certmanager"),
    ("version", "{version}"),
)


def _build_cert_manager_dependencies() -> str:
    lines = ["", "dependencies:"]
    for position, (key, value) in enumerate(_CERT_MANAGER_FIELDS):
        prefix = "  - " if position == 0 else "    "
        lines.append(f"{prefix}{key}: {value}")
    return "\n".join(lines) + "\n"


CERT_MANAGER_DEPENDENCIES = _build_cert_manager_dependencies()

CHART_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")
MAX_CHART_NAME_LENGTH = 250

_DIR_MODE = 0o750
_FILE_MODE = 0o640


class ChartError(Exception):
    """Raised when the chart cannot be created or written."""


def validate_chart_name(name: str) -> None:
    """Raise ChartError unless ``name`` is usable as a chart directory name."""
    if not name or len(name) > MAX_CHART_NAME_LENGTH:
        raise ChartError(f"chart name must be between 1 and {MAX_CHART_NAME_LENGTH} characters")
    if not CHART_NAME_PATTERN.match(name):
        raise ChartError(f'chart name must match the regular expression "{CHART_NAME_PATTERN.pattern}"')


def chart_yaml(app_name: str, cert_manager_as_subchart: bool, cert_manager_version: str) -> str:
    """Return the content of Chart.yaml."""
    content = DEFAULT_CHARTFILE.format(name=app_name)
    if cert_manager_as_subchart:
        quoted = json.dumps(cert_manager_version, ensure_ascii=False)
        content += CERT_MANAGER_DEPENDENCIES.format(version=quoted)
    return content


def helpers_yaml(chart_name: str) -> str:
    """Return the content of templates/_helpers.tpl."""
    return DEFAULT_HELPERS.replace(_PLACEHOLDER, chart_name)


def _write_new_file(path: Path, content: str) -> None:
    descriptor = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
    with os.fdopen(descriptor, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.info("created %s", path)


def _create_common_files(
    chart_dir: str,
    chart_name: str,
    crd: bool,
    cert_manager_as_subchart: bool,
    cert_manager_version: str,
) -> None:
    root = Path(chart_dir) / chart_name
    try:
        (root / "templates").mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
    except OSError as err:
        raise ChartError(f"{err}: unable create chart/templates dir") from err
    if crd:
        try:
            (root / "crds").mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as err:
            raise ChartError(f"{err}: unable create crds dir") from err
    files = [
        (root / "Chart.yaml", chart_yaml(chart_name, cert_manager_as_subchart, cert_manager_version)),
        (root / ".helmignore", HELM_IGNORE),
        (root / "templates" / "_helpers.tpl", helpers_yaml(chart_name)),
    ]
    for path, content in files:
        try:
            _write_new_file(path, content)
        except OSError as err:
            raise ChartError(f"{err}: unable to write {path}") from err


def init_chart_dir(
    chart_dir: str,
    chart_name: str,
    crd: bool,
    cert_manager_as_subchart: bool,
    cert_manager_version: str,
) -> None:
    """Create the chart skeleton unless a Chart.yaml already exists."""
    validate_chart_name(chart_name)
    if not (Path(chart_dir) / chart_name / "Chart.yaml").exists():
        _create_common_files(chart_dir, chart_name, crd, cert_manager_as_subchart, cert_manager_version)
        return
    logger.info("Skip creating Chart skeleton: Chart.yaml already exists.")