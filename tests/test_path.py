import pytest

from oaspec.bodies import Response, ResponseRef
from oaspec.operation import Operation
from oaspec.parameter import Parameter, ParameterRef
from oaspec.path import Path, PathRef
from oaspec.schema import Schema, SchemaRef, SpecError


def _op(operation_id="getThing"):
    return Operation(
        operation_id=operation_id,
        responses={"200": ResponseRef(response=Response(description="ok"))},
    )


def _id_param(required=True):
    return ParameterRef(
        parameter=Parameter(
            name="id",
            in_="path",
            required=required,
            schema=SchemaRef(schema=Schema(type="string")),
        )
    )


def _error(path, templates=()):
    with pytest.raises(SpecError) as exc:
        path.validate(list(templates), set())
    return str(exc.value)


def test_operations_lists_only_set_methods_in_order():
    get, post = _op("a"), _op("b")
    path = Path(post=post, get=get)
    ops = path.operations()
    assert list(ops) == ["get", "post"]
    assert ops["get"] is get and ops["post"] is post


def test_operations_empty():
    assert Path().operations() == {}


def test_error_prefixed_with_method():
    assert _error(Path(get=_op(" "))) == "get.operationId must not be blank"


def test_operation_ids_shared_between_methods():
    path = Path(get=_op("same"), post=_op("same"))
    assert _error(path) == "post.operationId is duplicated: same"


def test_valid_path_records_ids():
    ids = set()
    Path(get=_op("a"), delete=_op("b")).validate([], ids)
    assert ids == {"a", "b"}


def test_path_level_parameter_satisfies_template():
    path = Path(get=_op(), parameters=[_id_param()])
    ids = set()
    path.validate(["id"], ids)
    assert path.parameters[0].parameter.style == "simple"
    assert ids == {"getThing"}


def test_template_without_parameter():
    assert _error(Path(get=_op()), ["id"]) == "get.parameters: missing path parameter id"


def test_path_level_parameter_not_required():
    path = Path(parameters=[_id_param(required=False)])
    assert _error(path, ["id"]) == (
        'parameters.when in="path" then "required" is itself required and must be set to true'
    )


def test_nil_path_level_parameter():
    assert _error(Path(parameters=[None])) == "parameters[0] cannot be nil"


def test_blank_summary_and_description():
    assert _error(Path(summary="")) == "summary if present must not be blank"
    assert _error(Path(description=" ")) == "description if present must not be blank"


def test_path_ref_is_not_followed():
    ids = set()
    PathRef(ref="other.yaml#/paths/x", path=Path(summary="")).validate([], ids)
    assert ids == set()


def test_path_ref_without_path():
    with pytest.raises(SpecError, match="path cannot be nil"):
        PathRef().validate([], set())