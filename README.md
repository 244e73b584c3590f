# helmify

Building blocks for turning Kubernetes manifests into a Helm chart, and a
`helmify` command that drives them.

The package reads Kubernetes resources as YAML or JSON (from standard input or
from files and directories), works out chart-wide metadata such as the common
name prefix and namespace, runs each object through the processors you
register, and writes the chart to disk:

```
mychart/
├── .helmignore
├── Chart.yaml
├── values.yaml
└── templates/
    ├── _helpers.tpl
    └── ...
```

Existing `values.yaml` and template files are overwritten on every run; an
existing `Chart.yaml` is kept.

## What the package does not do

No processors for Kubernetes resource kinds (Deployments, Services,
ConfigMaps and so on) ship with the package, and there is no fallback
processor for unknown kinds. Objects that no registered processor accepts are
logged as skipped. The `helmify` command registers no processors, so on its
own it creates the chart skeleton (`Chart.yaml`, `.helmignore`,
`templates/_helpers.tpl`) and a `values.yaml` holding only
`kubernetesClusterDomain: cluster.local` (plus the `certmanager` entries when
asked for). To get templates, write processors and pass them to
`helmify.app.start` as shown below.

## Installation

```
pip install .
```

## Command

```
helmify [flags] CHART_NAME
```

`CHART_NAME` is optional and defaults to `chart`. It may be a path, such as
`deploy/charts/mychart`; the last part is the chart name and the rest is the
directory the chart is created in. The chart name must be a lowercase
RFC 1123 subdomain (for example `my-chart` or `my.chart123`).

Manifests are read from standard input unless `-f` is given:

```
cat my-app.yaml | helmify mychart
helmify -f ./manifests mychart
helmify -f ./manifests -r mychart
helmify -f ./manifests -f ./extra/app.yaml mychart
```

The command exits with status 1 when nothing is piped in and no `-f` is
given, or when chart generation fails; `-h`, `-help` and `-version` print and
exit with status 0; malformed flags exit with status 2.

### Flags

Flags take a single or double dash; boolean flags accept `-flag=false`.

| Flag | Effect |
| --- | --- |
| `-h`, `-help` | Print help and the flag list |
| `-version` | Print version, build time and commit |
| `-v` | Log warnings and info |
| `-vv` | Log debug messages as well |
| `-f PATH` | File or directory with manifests; may be repeated |
| `-r` | Scan directories given with `-f` recursively |
| `-crd-dir` | Create a `crds` directory; template files whose name contains `crd` are written there |
| `-cert-manager-as-subchart` | Add cert-manager as a dependency in `Chart.yaml` and `certmanager.enabled` / `certmanager.installCRDs` to values |
| `-cert-manager-version VER` | Version of that dependency (default `v1.12.2`) |
| `-cert-manager-install-crd` | Value of `certmanager.installCRDs` (default true) |
| `-original-name` | Keep object names instead of templating them with the chart full name |
| `-image-pull-secrets`, `-generate-defaults`, `-preserve-ns`, `-add-webhook-option` | Stored in `Config` for processors to read; nothing in the package acts on them |

## Library use

Modules:

- `helmify.config` – `Config` dataclass; `Config.validate()` fills in the
  default chart name and raises `ConfigError` for an invalid one.
- `helmify.model` – `Resource` (a decoded object with `name`, `namespace`,
  `labels`, `annotations`, `group_version_kind()`), `GroupVersionKind`, and
  the abstract `Processor`, `Template` and `AppMetadata`.
- `helmify.metadata` – `Service`, the `AppMetadata` implementation:
  namespace detection, common-prefix trimming (`trim_name`) and
  `templated_name` / `templated_string`; `common_prefix(one, two)`.
- `helmify.values` – `Values`, a dict with `merge`, `add`, `add_yaml` and
  `add_secret` that store a value and return the matching template
  expression; `to_lower_camel`.
- `helmify.decoder` – `decode(reader, stop=None)` yields `Resource`s from a
  YAML or JSON stream, logging and skipping documents it cannot decode.
- `helmify.walker` – `walk(paths, recursively=False)` yields
  `(file name, open file)` pairs.
- `helmify.chart_init` – chart skeleton: `init_chart_dir`,
  `validate_chart_name`, `chart_yaml`, `helpers_yaml`.
- `helmify.chart` – `HelmOutput.create(...)` writes templates grouped by file
  name and `values.yaml`.
- `helmify.context` – `AppContext`, which collects objects and runs them
  through processors.
- `helmify.app` – `start(stdin, config, processors=(), default_processor=None)`
  and `set_log_level(config)`.
- `helmify.format` – `fix_unterminated_quotes`, `remove_trailing_whitespaces`.
- `helmify.deployment_format` – `replace_single_quotes`, `add_webhook_option`.

`Values.add` picks the expression from the value's type:

```python
from helmify.values import Values

values = Values()
values.add("nginx:latest", "web", "image")   # '{{ .Values.web.image | quote }}'
values.add(3, "web", "replicas")             # '{{ .Values.web.replicas }}'
values.add_secret(True, "db", "password")
# '{{ required "db.password is required" .Values.db.password | b64enc | quote }}'
```

A processor that turns ConfigMaps into templates:

```python
import sys

import yaml

from helmify.app import start
from helmify.config import Config
from helmify.model import GroupVersionKind, Processor, Template
from helmify.values import Values

CONFIG_MAP = GroupVersionKind("", "v1", "ConfigMap")


class TextTemplate(Template):
    def __init__(self, name, body, values):
        self._name, self._body, self._values = name, body, values

    def filename(self):
        return f"{self._name}.yaml"

    def values(self):
        return self._values

    def write(self, writer):
        writer.write(self._body)


class ConfigMapProcessor(Processor):
    def process(self, app_meta, obj):
        if obj.group_version_kind() != CONFIG_MAP:
            return False, None
        name = app_meta.trim_name(obj.name)
        values = Values()
        data = {
            key: values.add(value, name, key)
            for key, value in obj.data.get("data", {}).items()
        }
        body = "apiVersion: v1\nkind: ConfigMap\nmetadata:\n"
        body += f"  name: {app_meta.templated_name(obj.name)}\n"
        body += yaml.safe_dump({"data": data}, default_flow_style=False).replace("'", "")
        return True, TextTemplate(name, body, values)


start(sys.stdin, Config(chart_name="mychart"), processors=[ConfigMapProcessor()])
```

## Running the tests

```
pip install .[test]
pytest
```