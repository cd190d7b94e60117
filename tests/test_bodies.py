import pytest

from oaspec.bodies import RequestBody, RequestBodyRef, Response, ResponseRef
from oaspec.schema import SpecError


class _Item:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def validate(self):
        self.calls += 1
        if self.error:
            raise SpecError(self.error)


def test_request_body_valid_validates_content():
    media = _Item()
    RequestBody(content={"application/json": media}).validate()
    assert media.calls == 1


def test_request_body_empty_content():
    with pytest.raises(SpecError, match="content must not be empty"):
        RequestBody(content={}).validate()


def test_request_body_blank_description():
    with pytest.raises(SpecError, match="description if present must not be blank"):
        RequestBody(description=" ", content={"a": _Item()}).validate()


def test_request_body_content_error_prefixed():
    with pytest.raises(SpecError, match=r"^content\(text/plain\)\.oops$"):
        RequestBody(content={"text/plain": _Item("oops")}).validate()


def test_request_body_multiple_types():
    body = RequestBody(content={"a": _Item(), "b": _Item()})
    with pytest.raises(SpecError, match="currently only one body type is supported"):
        body.validate()


def test_request_body_ref_is_not_followed():
    ref = RequestBodyRef(ref="#/components/requestBodies/x", request_body=RequestBody())
    ref.validate()
    assert ref.request_body.content is None


def test_request_body_ref_delegates():
    with pytest.raises(SpecError, match="content must not be empty"):
        RequestBodyRef(request_body=RequestBody()).validate()


def test_response_blank_description():
    with pytest.raises(SpecError, match="description must not be blank"):
        Response(description="  ").validate()


def test_response_header_error_prefixed():
    response = Response(description="ok", headers={"X-Id": _Item("bad")})
    with pytest.raises(SpecError, match=r"^headers\(X-Id\)\.bad$"):
        response.validate()


def test_response_link_error_prefixed():
    response = Response(description="ok", links={"next": _Item("bad")})
    with pytest.raises(SpecError, match=r"^links\(next\)\.bad$"):
        response.validate()


def test_response_multiple_types():
    response = Response(description="ok", content={"a": _Item(), "b": _Item()})
    with pytest.raises(SpecError, match="only one response type is supported"):
        response.validate()


def test_response_without_content_is_valid():
    header = _Item()
    Response(description="ok", headers={"X-Id": header}).validate()
    assert header.calls == 1


def test_response_ref_is_not_followed():
    ref = ResponseRef(ref="#/components/responses/x", response=Response())
    ref.validate()
    assert ref.ref == "#/components/responses/x"


def test_response_ref_delegates():
    with pytest.raises(SpecError, match="description must not be blank"):
        ResponseRef(response=Response()).validate()