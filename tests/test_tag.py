import pytest

from oaspec.schema import SpecError
from oaspec.tag import Tag


class _Docs:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def validate(self):
        self.calls += 1
        if self.error:
            raise SpecError(self.error)


def test_valid_tag_validates_docs():
    docs = _Docs()
    Tag(name="pets", description="Pet operations", external_docs=docs).validate()
    assert docs.calls == 1


def test_blank_name():
    with pytest.raises(SpecError, match="name cannot be blank"):
        Tag(name=" ").validate()


def test_blank_description():
    with pytest.raises(SpecError, match="description if present must not be blank"):
        Tag(name="pets", description="").validate()


def test_external_docs_error_prefixed():
    with pytest.raises(SpecError, match=r"^externalDocs\.url missing$"):
        Tag(name="pets", external_docs=_Docs("url missing")).validate()