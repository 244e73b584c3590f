"""Command-line interface."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from helmify.app import start
from helmify.config import Config

logger = logging.getLogger(__name__)

VERSION = "development"
BUILD_DATE = "not set"
COMMIT = "not set"

HELP_TEXT = """Helmify parses kubernetes resources from std.in and converts it to a Helm chart.

Example 1: 'kustomize build <kustomize_dir> | helmify mychart' 
  - will create 'mychart' directory with Helm chart from kustomize output.

Example 2: 'cat my-app.yaml | helmify mychart' 
  - will create 'mychart' directory with Helm chart from yaml file.

Example 3: 'helmify -f ./test_data/dir  mychart' 
  - will scan directory ./test_data/dir for files with k8s manifests and create 'mychart' directory with Helm chart.

Example 4: 'helmify -f ./test_data/dir -r  mychart' 
  - will scan directory ./test_data/dir recursively and  create 'mychart' directory with Helm chart.

Example 5: 'helmify -f ./test_data/dir -f ./test_data/sample-app.yaml -f ./test_data/dir/another_dir  mychart' 
  - will scan provided multiple files and directories and  create 'mychart' directory with Helm chart.

Example 6: 'awk 'FNR==1 && NR!=1  {print "---"}{print}' /my_directory/*.yaml | helmify mychart' 
  - will create 'mychart' directory with Helm chart from all yaml files in my_directory directory.

Usage:
  helmify [flags] CHART_NAME  -  CHART_NAME is optional. Default is 'chart'. Can be a directory, e.g. 'deploy/charts/mychart'.

Flags:
"""


@dataclass(frozen=True)
class _Flag:
    name: str
    usage: str
    default: Any = False
    kind: str = "bool"  # one of "bool", "string", "list"


_FLAGS = (
    _Flag("h", "Print help. Example: helmify -h"),
    _Flag("help", "Print help. Example: helmify -help"),
    _Flag("version", "Print helmify version. Example: helmify -version"),
    _Flag("v", "Enable verbose output (print WARN & INFO). Example: helmify -v"),
    _Flag("vv", "Enable very verbose output. Same as verbose but with DEBUG. Example: helmify -vv"),
    _Flag(
        "crd-dir",
        "Enable crd install into 'crds' directory.\n"
        "Warning: CRDs placed in 'crds' directory will not be templated by Helm.\n"
        "See the Helm best practices on custom resource definitions.\n"
        "Example: helmify -crd-dir",
    ),
    _Flag("image-pull-secrets", "Allows the user to use existing secrets as imagePullSecrets in values.yaml"),
    _Flag(
        "generate-defaults",
        "Allows the user to add empty placeholders for typical customization options in values.yaml. "
        "Currently covers: topology constraints, node selectors, tolerances",
    ),
    _Flag("cert-manager-as-subchart", "Allows the user to add cert-manager as a subchart"),
    _Flag(
        "cert-manager-version",
        "Allows the user to specify cert-manager subchart version. Only useful with cert-manager-as-subchart.",
        "v1.12.2",
        "string",
    ),
    _Flag(
        "cert-manager-install-crd",
        "Allows the user to install cert-manager CRD. Only useful with cert-manager-as-subchart.",
        True,
    ),
    _Flag("r", "Scan dirs from -f option recursively"),
    _Flag(
        "original-name",
        "Use the object's original name instead of adding the chart's release name as the common prefix.",
    ),
    _Flag("f", "File or directory containing k8s manifests", None, "list"),
    _Flag(
        "preserve-ns",
        "Use the object's original namespace instead of adding all the resources to a common namespace",
    ),
    _Flag("add-webhook-option", "Allows the user to add webhook option in values.yaml"),
)
_BY_NAME = {flag.name: flag for flag in _FLAGS}

_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


class _FlagError(ValueError):
    pass


def _parse_bool(name: str, text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise _FlagError(f'invalid boolean value "{text}" for -{name}: parse error')


def _parse(argv: Sequence[str]) -> tuple[dict[str, Any], list[str]]:
    """Parse flags up to the first argument that is not a flag."""
    values: dict[str, Any] = {
        flag.name: [] if flag.kind == "list" else flag.default for flag in _FLAGS
    }
    args = list(argv)
    while args:
        arg = args[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        args.pop(0)
        if arg == "--":
            break
        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body[0] in "-=":
            raise _FlagError(f"bad flag syntax: {arg}")
        name, separator, value = body.partition("=")
        flag = _BY_NAME.get(name)
        if flag is None:
            raise _FlagError(f"flag provided but not defined: -{name}")
        if flag.kind == "bool":
            values[name] = _parse_bool(name, value) if separator else True
            continue
        if not separator:
            if not args:
                raise _FlagError(f"flag needs an argument: -{name}")
            value = args.pop(0)
        if flag.kind == "list":
            values[name].append(value)
        else:
            values[name] = value
    return values, args


def _flag_defaults() -> str:
    lines = []
    for flag in sorted(_FLAGS, key=lambda item: item.name):
        head = f"  -{flag.name}"
        if flag.kind == "string":
            head += " string"
        elif flag.kind == "list":
            head += " value"
        head += "\t" if len(head) <= 4 else "\n    \t"
        usage = flag.usage.replace("\n", "\n    \t")
        if flag.kind == "bool" and flag.default:
            usage += " (default true)"
        elif flag.kind == "string" and flag.default:
            usage += f' (default "{flag.default}")'
        lines.append(head + usage + "\n")
    return "".join(lines)


def print_version() -> None:
    """Print version and build information."""
    print(f"Version:    {VERSION}")
    print(f"Build Time: {BUILD_DATE}")
    print(f"Git Commit: {COMMIT}")


def read_flags(argv: Sequence[str] | None = None) -> Config:
    """Build the configuration from command-line arguments.

    Help and version requests print their text and exit with status 0;
    malformed flags exit with status 2.
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        values, positional = _parse(argv)
    except _FlagError as err:
        print(err, file=sys.stderr)
        print("Usage of helmify:", file=sys.stderr)
        print(_flag_defaults(), file=sys.stderr, end="")
        raise SystemExit(2) from err
    if values["h"] or values["help"]:
        print(HELP_TEXT, end="")
        print(_flag_defaults(), end="")
        raise SystemExit(0)
    if values["version"]:
        print_version()
        raise SystemExit(0)
    config = Config(
        verbose=values["v"],
        very_verbose=values["vv"],
        crd=values["crd-dir"],
        image_pull_secrets=values["image-pull-secrets"],
        generate_defaults=values["generate-defaults"],
        cert_manager_as_subchart=values["cert-manager-as-subchart"],
        cert_manager_version=values["cert-manager-version"],
        cert_manager_install_crd=values["cert-manager-install-crd"],
        files=list(values["f"]),
        files_recursively=values["r"],
        original_name=values["original-name"],
        preserve_ns=values["preserve-ns"],
        add_webhook_option=values["add-webhook-option"],
    )
    if positional and positional[0]:
        path = PurePath(positional[0])
        config.chart_name = path.name
        config.chart_dir = str(path.parent)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    config = read_flags(argv)
    if not config.files and (sys.stdin is None or sys.stdin.isatty()):
        logger.error("no data piped in stdin")
        return 1
    try:
        start(sys.stdin, config)
    except Exception as err:  # top-level boundary: report and exit non-zero
        logger.error("helmify finished with error: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())