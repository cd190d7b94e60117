from oaspec.template_data import (
    TemplateData,
    new_data,
    new_data_required,
    new_template_data,
    new_template_data_with_object,
    recurse_data,
    recurse_data_set_required,
)


def _base():
    return new_template_data_with_object(
        {"openapi": "3.0.0"}, {"package": "gen"}, "User", {"kind": "user"}, True
    )


def test_new_template_data_starts_empty():
    spec = {"openapi": "3.0.0"}
    data = new_template_data(spec, {"a": "b"})
    assert data.spec is spec
    assert data.params == {"a": "b"}
    assert data.imports == set()
    assert data.name == ""
    assert data.object is None
    assert data.required is False


def test_new_template_data_with_object_sets_fields():
    data = _base()
    assert data.name == "User"
    assert data.object == {"kind": "user"}
    assert data.required is True
    assert data.params == {"package": "gen"}


def test_param_exists_and_equals():
    data = _base()
    assert data.param_exists("package")
    assert not data.param_exists("missing")
    assert data.param_equals("package", "gen")
    assert not data.param_equals("package", "other")
    assert not data.param_equals("missing", "gen")


def test_params_none_behaves_as_empty():
    data = TemplateData(params=None)
    assert not data.param_exists("x")
    assert not data.param_equals("x", "")


def test_add_import_records_and_returns_empty_string():
    data = _base()
    assert data.add_import("time") == ""
    assert "time" in data.imports


def test_new_data_copies_and_leaves_old_alone():
    old = _base()
    copy = new_data(old, "Pet", [1, 2])
    assert copy.name == "Pet"
    assert copy.object == [1, 2]
    assert copy.required is old.required
    assert old.name == "User"
    assert old.object == {"kind": "user"}


def test_new_data_required_sets_required():
    old = _base()
    copy = new_data_required(old, "Pet", None, False)
    assert copy.required is False
    assert old.required is True
    assert copy.name == "Pet"


def test_recurse_data_appends_name():
    old = _base()
    copy = recurse_data(old, "Address", "obj")
    assert copy.name == old.name + "Address"
    assert copy.object == "obj"
    assert copy.required == old.required


def test_recurse_data_set_required_appends_and_sets():
    old = _base()
    copy = recurse_data_set_required(old, "Item", 5, False)
    assert copy.name == old.name + "Item"
    assert copy.object == 5
    assert copy.required is False
    assert old.required is True


def test_copies_share_imports():
    old = _base()
    copy = recurse_data(new_data(old, "A", None), "B", None)
    copy.add_import("uuid")
    assert "uuid" in old.imports
    assert copy.imports is old.imports