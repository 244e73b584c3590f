"""Text fix-ups applied to rendered deployment pod specs."""

from __future__ import annotations

import re

_QUOTED_TEMPLATE = re.compile(r"'({{((.*|.*\n.*))}}.*)'")

_WEBHOOK_HEADER = "      {{- if .Values.webhook.enabled }}"
_WEBHOOK_FOOTER = "      {{- end }}"
_WEBHOOK_VOLUMES = """      - name: cert
        secret:
          defaultMode: 420
          secretName: webhook-server-cert"""
_WEBHOOK_VOLUME_MOUNTS = """        - mountPath: /tmp/k8s-webhook-server/serving-certs
          name: cert
          readOnly: true"""
_WEBHOOK_PORT = re.compile(
    r"""        - containerPort: \d+
          name: webhook-server
          protocol: TCP"""
)


def replace_single_quotes(text: str) -> str:
    """Remove single quotes wrapped around template expressions."""
    return _QUOTED_TEMPLATE.sub(r"\1", text)


def _guarded(block: str) -> str:
    return f"{_WEBHOOK_HEADER}\n{block}\n{_WEBHOOK_FOOTER}"


def add_webhook_option(manifest: str) -> str:
    """Wrap webhook volumes, mounts and ports in a ``webhook.enabled`` condition."""
    manifest = manifest.replace(_WEBHOOK_VOLUMES, _guarded(_WEBHOOK_VOLUMES))
    manifest = manifest.replace(_WEBHOOK_VOLUME_MOUNTS, _guarded(_WEBHOOK_VOLUME_MOUNTS))
    first = _WEBHOOK_PORT.search(manifest)
    replacement = _guarded(first.group(0) if first else "")
    return _WEBHOOK_PORT.sub(lambda _: replacement, manifest)