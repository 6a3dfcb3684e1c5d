import pytest

from app.effects.fields import ChoiceField, NumberField, TextField, UrlField
from app.errors import EffectValidationError


@pytest.mark.parametrize(
    "value",
    ["not-a-url", "ftp://example.com/a.jpg", "https://", "/relative/a.jpg", 42, ""],
)
def test_url_field_rejects_non_http_urls(value):
    field = UrlField("imageUrl")

    with pytest.raises(EffectValidationError) as exc:
        field.clean({"imageUrl": value})

    assert exc.value.field == "imageUrl"
    assert "imageUrl" in exc.value.message


def test_url_field_is_required():
    with pytest.raises(EffectValidationError) as exc:
        UrlField("imageUrl").clean({})

    assert "imageUrl" in exc.value.message


def test_url_field_accepts_http_and_https():
    field = UrlField("imageUrl")

    assert field.clean({"imageUrl": "https://example.com/a.jpg"}) == "https://example.com/a.jpg"
    assert field.clean({"imageUrl": "http://example.com/a.jpg"}) == "http://example.com/a.jpg"


def test_choice_field_enumerates_allowed_values():
    field = ChoiceField("style", ["ghibli"], label="Style", plural="styles")

    with pytest.raises(EffectValidationError) as exc:
        field.clean({"style": "unsupported_style"})

    assert exc.value.message == "Style not supported. Supported styles: ghibli"


def test_choice_field_default_applies_when_missing():
    field = ChoiceField("mode", ["std", "pro"], default="pro")

    assert field.clean({}) == "pro"
    assert field.clean({"mode": None}) == "pro"


def test_numeric_choice_coerces_strings():
    field = ChoiceField("duration", [5, 10], default=5, numeric=True)

    assert field.clean({"duration": "10"}) == 10
    assert field.clean({"duration": 5.0}) == 5
    with pytest.raises(EffectValidationError):
        field.clean({"duration": "7"})
    with pytest.raises(EffectValidationError):
        field.clean({"duration": "five"})


def test_choice_field_custom_prefix():
    field = ChoiceField("celebrity", ["brad_pitt"], custom_prefix="custom_")

    assert field.clean({"celebrity": "custom_taylor_swift"}) == "custom_taylor_swift"
    with pytest.raises(EffectValidationError) as exc:
        field.clean({"celebrity": "custom_"})
    assert "custom_<name>" in exc.value.message


def test_number_field_bounds_and_types():
    field = NumberField("steps", minimum=10, maximum=150, default=50, integer=True)

    assert field.clean({}) == 50
    assert field.clean({"steps": 150}) == 150
    assert field.clean({"steps": 20.0}) == 20

    for bad in (9, 151, 20.5, "20", True):
        with pytest.raises(EffectValidationError) as exc:
            field.clean({"steps": bad})
        assert "(10-150)" in exc.value.message


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_number_field_rejects_non_finite(value):
    field = NumberField("lyricsStrength", minimum=0.1, maximum=10, default=1)

    with pytest.raises(EffectValidationError) as exc:
        field.clean({"lyricsStrength": value})

    assert exc.value.message == "Invalid lyricsStrength parameter (0.1-10): must be a finite number"


def test_unbounded_number_field_rejects_nan():
    with pytest.raises(EffectValidationError):
        NumberField("seed", default=None).clean({"seed": float("nan")})


def test_optional_number_field_returns_none():
    field = NumberField("seed", minimum=1, maximum=999999, default=None, integer=True)

    assert field.clean({}) is None
    with pytest.raises(EffectValidationError):
        field.clean({"seed": 0})


def test_text_field_rejects_blank():
    field = TextField("lyrics")

    assert field.clean({"lyrics": "la la la"}) == "la la la"
    with pytest.raises(EffectValidationError):
        field.clean({"lyrics": "   "})
    with pytest.raises(EffectValidationError):
        field.clean({"lyrics": 3})
