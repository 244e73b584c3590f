import pytest

from helmify.config import Config
from helmify.metadata import Service
from helmify.model import AppMetadata, GroupVersionKind, Processor, Resource, Template


def _deployment():
    return Resource(
        {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": "web", "namespace": "prod", "labels": {"tier": "front"}},
        }
    )


def test_group_version_kind_with_group():
    assert _deployment().group_version_kind() == GroupVersionKind("apps", "v1", "Deployment")


def test_group_version_kind_core_group():
    obj = Resource({"apiVersion": "v1", "kind": "Namespace"})
    gvk = obj.group_version_kind()
    assert gvk.group == ""
    assert gvk.version == "v1"


def test_group_version_kind_invalid_api_version_keeps_kind():
    obj = Resource({"apiVersion": "a/b/c", "kind": "Thing"})
    assert obj.group_version_kind() == GroupVersionKind("", "", "Thing")


def test_metadata_accessors():
    obj = _deployment()
    assert obj.name == "web"
    assert obj.namespace == "prod"
    assert obj.labels == {"tier": "front"}
    assert obj.annotations == {}


def test_labels_are_a_copy():
    obj = _deployment()
    obj.labels["extra"] = "x"
    assert "extra" not in obj.labels


def test_missing_metadata_gives_empty_strings():
    obj = Resource({})
    assert (obj.name, obj.namespace, obj.kind, obj.api_version) == ("", "", "", "")


@pytest.mark.parametrize("cls", [Template, Processor, AppMetadata])
def test_abstract_classes_cannot_be_instantiated(cls):
    with pytest.raises(TypeError):
        cls()


def test_service_serves_as_app_metadata():
    service = Service(Config(chart_name="chart-name"))
    service.load(
        Resource(
            {
                "apiVersion": "v1",
                "kind": "Secret",
                "metadata": {"name": "abc", "namespace": "ns"},
            }
        )
    )
    assert isinstance(service, AppMetadata)
    assert service.chart_name() == "chart-name"
    assert service.namespace() == "ns"
    assert service.templated_name("abc") == '{{ include "chart-name.fullname" . }}-abc'