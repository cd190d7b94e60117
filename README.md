# oaspec

OpenAPI 3 specification objects with strict validation, plus the small
runtime helpers that generated server and client code leans on. It has no
dependencies outside the standard library.

## What it offers

- **Spec objects**: dataclasses for the parts of an OpenAPI 3 document.
  - `oaspec.schema`: `Schema`, `SchemaRef`, `Discriminator`,
    `AdditionalProperties` and the `SpecError` exception.
  - `oaspec.parameter`: `Parameter`, `ParameterRef` and
    `check_duplicate_params`.
  - `oaspec.bodies`: `RequestBody`, `RequestBodyRef`, `Response`,
    `ResponseRef`.
  - `oaspec.operation`: `Operation`.
  - `oaspec.path`: `Path` (with `operations()`, which returns the operations
    that are set, keyed by lower-case HTTP method) and `PathRef`.
  - `oaspec.server`: `Server`, `ServerVariable` and
    `find_server_variables_in_url`.
  - `oaspec.tag`: `Tag`.
  - `oaspec.security`: `SecurityScheme`, `SecuritySchemeRef`, `OAuthFlows`,
    `OAuthFlow` and `validate_security_requirement`.

  Each object with rules has a `validate()` method. It raises `SpecError`, a
  `ValueError`, at the first fault it finds, and the message gives a dotted
  location such as `get.parameters[0:"id"].schema.type must be ...`. Objects
  that hold a `$ref` are not followed. Validation also fills in defaults:
  a parameter gets its `style` and `explode`, and a path parameter is marked
  `required`. An operation's tags are sorted in place.
- **Conversion**: `oaspec.convert` parses request strings into typed values.
  It offers `string_to_int(s, bits)`, `string_to_uint(s, bits)`,
  `string_to_float(s, bits)`, `string_to_bool`, `string_to_decimal`,
  `string_to_uuid`, `string_to_datetime`, `string_to_date`, `string_to_time`,
  `string_to_duration` and `string_noop`. The form array helpers
  `exploded_form_array_to_list` and `flat_form_array_to_list` apply one of
  these to a repeated or comma-separated form value. Bad input raises
  `ValueError`.
- **Value validation**: `oaspec.validation` has the checks generated code runs
  on incoming values. Examples are `validate_max_number`,
  `validate_min_number`, `validate_multiple_of_int`,
  `validate_multiple_of_float`, `validate_max_length`, `validate_min_length`,
  `validate_max_items`, `validate_min_items`, `validate_unique_items`,
  `validate_max_properties`, `validate_min_properties`, `validate_pattern`,
  `validate_enum`, `validate_format_uuid_v4` and `validate_format_decimal`.
  Each raises `ValueError` on failure.
- **Error maps and JSON bodies**: `oaspec.support` has the following helpers.
  - `add_errs`, `add_errs_flatten` and `merge_errs` build
    `{field: [messages]}` dictionaries.
  - `read_json(body)` reads a binary stream, closes it and decodes the JSON.
  - `write_json(response, obj)` writes compact JSON to any object with a
    `headers` mapping and a `write` method. It also sets the `Content-Type`
    header.
  - `NoBodyError` is for handlers that find no request body.
- **Template helpers**: for code generators.
  - `oaspec.template_data.TemplateData` has `param_exists`, `param_equals`
    and `add_import`. The copying functions `new_data`, `new_data_required`,
    `recurse_data` and `recurse_data_set_required` go with it, as do the
    constructors `new_template_data` and `new_template_data_with_object`.
  - `oaspec.template_funcs` has `ref_name`, `http_status`, `deref`,
    `keys_reflect`, `must_validate` and `must_validate_recurse`.

## Examples

```python
from oaspec.schema import Schema, SpecError

try:
    Schema(type="string", max_length=0).validate()
except SpecError as err:
    print(err)  # maxLength: must be greater than 0 (was 0)
```

```python
from oaspec.parameter import Parameter
from oaspec.schema import Schema, SchemaRef

param = Parameter(name="id", in_="path", schema=SchemaRef(schema=Schema(type="string")))
param.validate(["id"])
param.required, param.style, param.explode  # (True, "simple", False)
```

```python
from oaspec.convert import exploded_form_array_to_list, string_to_int

exploded_form_array_to_list(["1", "2"], lambda s: string_to_int(s, 32))  # [1, 2]
```

## What it does not do

- It does not load YAML or JSON documents into these objects. You build the
  dataclasses yourself.
- It does not resolve `$ref` references.
- It has no object for a whole OpenAPI document.
- It does not render templates or write generated code. It only supplies the
  data and helper functions a generator's templates would use.
- It has no command-line tool.

## Installing

```
pip install oaspec
```

For the tests, install with `pip install oaspec[test]` and run `pytest`.