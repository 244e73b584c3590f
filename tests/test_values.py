import pytest

from helmify.values import Values, ValuesError, to_lower_camel


def test_quote_added_for_string_values():
    values = Values()
    res = values.add("abc", "a", "b")
    assert "quote" in res
    assert values == {"a": {"b": "abc"}}


@pytest.mark.parametrize("value", [1, True, 420.69])
def test_quote_not_added_for_non_string_values(value):
    res = Values().add(value, "a", "b")
    assert "quote" not in res


def test_repeated_add_overwrites_leaf():
    values = Values()
    values.add(1, "a", "b")
    values.add(True, "a", "b")
    assert values["a"]["b"] is True


def test_name_path_is_dot_formatted():
    res = Values().add(1, "a", "b")
    assert " .Values.a.b " in res


@pytest.mark.parametrize("name", ["my_name", "MY_NAME", "my-name", "my.name"])
def test_names_camel_cased(name):
    res = Values().add(420.69, name)
    assert name not in res
    assert "myName" in res


def test_list_value_uses_to_yaml():
    res = Values().add([1, 2], "a", "b")
    assert res == "{{ toYaml .Values.a.b | nindent 4 }}"


def test_add_base64_secret():
    values = Values()
    res = values.add_secret(True, "a", "b")
    assert "b64enc" in res
    assert values["a"]["b"] == ""


def test_add_not_encoded_secret():
    res = Values().add_secret(False, "a", "b")
    assert "b64enc" not in res
    assert res == '{{ required "a.b is required" .Values.a.b | quote }}'


def test_add_yaml_forms():
    values = Values()
    assert values.add_yaml("x", 2, True, "a") == "{{ .Values.a | toYaml | nindent 2 }}"
    assert values.add_yaml("x", 2, False, "a") == "{{ .Values.a | toYaml | indent 2 }}"
    assert values.add_yaml("x", 0, True, "a") == "{{ .Values.a | toYaml }}"


def test_set_under_non_map_fails():
    values = Values()
    values.add("x", "a")
    with pytest.raises(ValuesError):
        values.add("y", "a", "b")


def test_stored_value_is_copied():
    source = {"k": ["v"]}
    values = Values()
    values.add_yaml(source, 0, False, "a")
    source["k"].append("w")
    assert values["a"] == {"k": ["v"]}


def test_merge_keeps_existing_and_appends_lists():
    values = Values({"a": {"b": 1, "l": [1]}, "e": ""})
    values.merge({"a": {"b": 2, "c": 3, "l": [2]}, "e": "filled", "n": True})
    assert values == {"a": {"b": 1, "c": 3, "l": [1, 2]}, "e": "filled", "n": True}


@pytest.mark.parametrize(
    ("text", "want"),
    [
        ("my_name", "myName"),
        ("my-name", "myName"),
        ("my.name", "myName"),
        ("elastic_foobar_hunter123_meowtown_verify", "elasticFoobarHunter123MeowtownVerify"),
    ],
)
def test_to_lower_camel(text, want):
    assert to_lower_camel(text) == want