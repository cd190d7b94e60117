import pytest

from oaspec.bodies import RequestBody, RequestBodyRef, Response, ResponseRef
from oaspec.operation import Operation
from oaspec.parameter import Parameter, ParameterRef
from oaspec.schema import Schema, SchemaRef, SpecError
from oaspec.server import Server


class _Media:
    def validate(self):
        return None


def _ok():
    return ResponseRef(response=Response(description="ok"))


def _op(**kwargs):
    base = {"operation_id": "getThing", "responses": {"200": _ok()}}
    base.update(kwargs)
    return Operation(**base)


def _path_param(required=True):
    return ParameterRef(
        parameter=Parameter(
            name="id",
            in_="path",
            required=required,
            schema=SchemaRef(schema=Schema(type="string")),
        )
    )


def _error(op, templates=(), required=(), ids=None):
    with pytest.raises(SpecError) as exc:
        op.validate(list(templates), list(required), set() if ids is None else ids)
    return str(exc.value)


def test_valid_operation_records_id():
    ids = set()
    _op().validate([], [], ids)
    assert ids == {"getThing"}


def test_duplicate_operation_id():
    assert _error(_op(), ids={"getThing"}) == "operationId is duplicated: getThing"


def test_tags_are_sorted():
    op = _op(tags=["b", "a"])
    op.validate([], [], set())
    assert op.tags == ["a", "b"]


def test_duplicate_tags():
    assert _error(_op(tags=["x", "y", "x"])) == "tags has duplicate: x"


def test_blank_summary():
    assert _error(_op(summary=" ")) == "summary if present must not be blank"


def test_blank_description():
    assert _error(_op(description="")) == "description if present must not be blank"


def test_blank_operation_id():
    assert _error(_op(operation_id="  ")) == "operationId must not be blank"


def test_empty_responses():
    assert _error(_op(responses={})) == "responses must not be empty"


def test_default_response_needs_content():
    op = _op(responses={"default": _ok()})
    assert _error(op) == (
        "responses(default).content content must not be empty for default response"
    )


def test_default_response_with_content_passes():
    default = ResponseRef(response=Response(description="err", content={"a/b": _Media()}))
    ids = set()
    _op(responses={"default": default}).validate([], [], ids)
    assert "getThing" in ids


def test_response_error_prefix():
    op = _op(responses={"200": ResponseRef(response=Response(description=" "))})
    assert _error(op) == "responses(200).description must not be blank"


def test_missing_path_parameter():
    assert _error(_op(), templates=["id"], required=["id"]) == (
        "parameters: missing path parameter id"
    )


def test_path_parameter_gets_defaults():
    op = _op(parameters=[_path_param()])
    op.validate(["id"], ["id"], set())
    param = op.parameters[0].parameter
    assert (param.required, param.style, param.explode) == (True, "simple", False)


def test_path_parameter_not_required():
    op = _op(parameters=[_path_param(required=False)])
    assert _error(op, templates=["id"], required=["id"]) == (
        'parameters.when in="path" then "required" is itself required and must be set to true'
    )


def test_parameter_error_prefix():
    op = _op(parameters=[ParameterRef(parameter=Parameter(name="q", in_="bogus"))])
    assert _error(op) == 'parameters[0:"q"].in must be one of: path|query|header|cookie'


def test_nil_parameter():
    assert _error(_op(parameters=[None])) == "parameters[0] cannot be nil"


def test_request_body_error_prefix():
    op = _op(request_body=RequestBodyRef(request_body=RequestBody()))
    assert _error(op) == "requestBody.content must not be empty"


def test_request_body_ref_is_not_followed():
    ids = set()
    _op(request_body=RequestBodyRef(ref="#/components/requestBodies/X")).validate([], [], ids)
    assert ids == {"getThing"}


def test_server_error_prefix():
    op = _op(servers=[Server(url="{x}")])
    assert _error(op) == "servers[0].serverVariable[x] has no corresponding variables entry"


def test_security_error_prefix():
    op = _op(security=[{"oauth": "read"}])
    assert _error(op) == "security[0].oauth: scopes must be a list of strings"