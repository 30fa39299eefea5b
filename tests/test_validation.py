"""Tests for attribute validation."""

import pytest


def test_valid_attributes_have_no_issues(valid_attrs):
    from mvp_studio.validation import validate_attributes

    assert validate_attributes(valid_attrs) == []


def test_short_vision_names_vision_field(valid_attrs):
    from dataclasses import replace
    from mvp_studio.errors import AttributeValidationError
    from mvp_studio.validation import require_valid

    attrs = replace(valid_attrs, vision_text="Too short.")

    with pytest.raises(AttributeValidationError) as exc:
        require_valid(attrs)

    assert exc.value.field == "vision_text"
    assert "20" in str(exc.value)


def test_vision_length_ignores_surrounding_whitespace(valid_attrs):
    from dataclasses import replace
    from mvp_studio.validation import validate_attributes

    attrs = replace(valid_attrs, vision_text="   short but padded     ")

    fields = [issue.field for issue in validate_attributes(attrs)]
    assert fields == ["vision_text"]


def test_first_issue_follows_field_order():
    from mvp_studio.errors import AttributeValidationError
    from mvp_studio.types import ProjectAttributes
    from mvp_studio.validation import require_valid

    attrs = ProjectAttributes(app_name="", app_type=None, platforms=(), vision_text="")

    with pytest.raises(AttributeValidationError) as exc:
        require_valid(attrs)

    assert exc.value.field == "app_name"
    assert [i.field for i in exc.value.issues] == ["app_name", "app_type", "platforms", "vision_text"]


def test_empty_platforms_is_invalid(valid_attrs):
    from dataclasses import replace
    from mvp_studio.validation import validate_attributes

    attrs = replace(valid_attrs, platforms=())

    assert [i.field for i in validate_attributes(attrs)] == ["platforms"]
