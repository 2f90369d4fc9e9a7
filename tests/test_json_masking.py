import json

import pytest

from datashield import Config, MalformedInputError, MaskingEngine, SensitiveValueTypeError


@pytest.fixture
def engine():
    cfg = Config(
        sensitive_fields_raw="Password,User-Id",
        min_length=6,
        mask_token="*",
        keep_start=False,
        keep_start_count=0,
        keep_end=False,
        keep_end_count=0,
    )
    return MaskingEngine(cfg)


def test_mask_flat_json(engine):
    data = '{ "User-Id": "secretUser", "Password": "secretPass", "Other-Info": "No sensitive info" }'
    masked = engine.mask_flat_json(data)
    assert '"User-Id":"**********"' in masked
    assert '"Password":"**********"' in masked
    assert '"Other-Info":"No sensitive info"' in masked


def test_key_order_preserved(engine):
    masked = engine.mask_flat_json('{"b": 1, "Password": "abcdefgh", "a": 2}')
    assert list(json.loads(masked)) == ["b", "Password", "a"]


def test_short_values_left_alone(engine):
    masked = json.loads(engine.mask_flat_json('{"Password": "abc"}'))
    assert masked["Password"] == "abc"


@pytest.mark.parametrize("text", ["not json", '{"Password": ', "", None])
def test_malformed_json_rejected(engine, text):
    with pytest.raises(MalformedInputError):
        engine.mask_flat_json(text)


@pytest.mark.parametrize("text", ["[1, 2]", '"Password"', "42", "null"])
def test_non_object_rejected(engine, text):
    with pytest.raises(MalformedInputError) as exc:
        engine.mask_flat_json(text)
    assert "object" in str(exc.value)


def test_malformed_input_is_a_value_error(engine):
    with pytest.raises(ValueError):
        engine.mask_flat_json("{")


def test_scalars_are_masked_as_text(engine):
    masked = json.loads(engine.mask_flat_json('{"Password": 12345678, "User-Id": true}'))
    assert masked["Password"] == "********"
    # "true" is shorter than min_length
    assert masked["User-Id"] == "true"


def test_null_left_as_null(engine):
    masked = json.loads(engine.mask_flat_json('{"Password": null}'))
    assert masked["Password"] is None


@pytest.mark.parametrize("value", ['{"inner": "x"}', '["a", "b"]'])
def test_nested_sensitive_value_rejected(engine, value):
    with pytest.raises(SensitiveValueTypeError) as exc:
        engine.mask_flat_json('{"Password": %s}' % value)
    assert exc.value.key == "Password"


def test_nested_non_sensitive_value_untouched(engine):
    masked = json.loads(engine.mask_flat_json('{"meta": {"Password": "abcdefgh"}}'))
    assert masked == {"meta": {"Password": "abcdefgh"}}


def test_mask_json_object_does_not_mutate(engine):
    payload = {"Password": "secretPass", "Other": "x"}
    masked = engine.mask_json_object(payload)
    assert masked["Password"] == "**********"
    assert payload["Password"] == "secretPass"


def test_unicode_kept_readable(engine):
    masked = engine.mask_flat_json('{"Other": "café", "Password": "contraseña"}')
    assert '"Other":"café"' in masked
    assert '"Password":"**********"' in masked


def test_deeply_nested_non_sensitive_value(engine):
    text = '{"Password": "abcdefgh", "meta": ' + "[" * 400 + "]" * 400 + "}"
    masked = engine.mask_flat_json(text)
    assert masked.startswith('{"Password":"********","meta":[[[')


def test_too_deep_to_decode_rejected(engine):
    with pytest.raises(MalformedInputError):
        engine.mask_flat_json("[" * 100000 + "]" * 100000)


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_constants_rejected(engine, constant):
    with pytest.raises(MalformedInputError):
        engine.mask_flat_json('{"a": %s}' % constant)
