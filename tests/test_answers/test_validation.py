"""
Unit tests for answer field validation.

Pure functions, no database involved.
"""

import pytest

from src.answers.validation import VALIDATION_INFO, validate
from src.shared.exceptions import ValidationError


class TestAnswernameRule:
    """Length and character-class checks on the identity key."""

    @pytest.mark.parametrize("name", ["ab", "abc_123", "A" * 16, "__", "Zz9"])
    def test_accepts_valid_names(self, name):
        assert validate({"answername": name}, required=True) == {"answername": name}

    def test_too_short(self):
        with pytest.raises(ValidationError, match=r"too short"):
            validate({"answername": "a"})

    def test_too_long(self):
        with pytest.raises(ValidationError, match=r"too long"):
            validate({"answername": "a" * 17})

    @pytest.mark.parametrize("name", ["a b", "abc!", "名前ab", "ab\n"])
    def test_bad_format(self, name):
        with pytest.raises(ValidationError, match=r"\(format\)"):
            validate({"answername": name})

    def test_non_string_is_format_error(self):
        with pytest.raises(ValidationError, match=r"\(format\)"):
            validate({"answername": 12345})

    def test_error_carries_requirements(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"answername": "a"})
        assert VALIDATION_INFO["answername"].message in exc_info.value.message
        assert exc_info.value.field == "answername"


class TestRequired:
    """Presence checks differ between create (required) and patch."""

    @pytest.mark.parametrize("props", [{}, {"answername": ""}, {"answername": None}])
    def test_missing_when_required(self, props):
        with pytest.raises(ValidationError, match=r"Missing answername \(required\)\."):
            validate(props, required=True)

    @pytest.mark.parametrize("props", [{}, {"answername": ""}, {"answername": None}])
    def test_absent_is_skipped_when_not_required(self, props):
        assert validate(props) == {}

    def test_present_field_still_checked_when_not_required(self):
        with pytest.raises(ValidationError):
            validate({"answername": "x"})


class TestAllowList:
    def test_unknown_fields_are_dropped(self):
        safe = validate({"answername": "alice", "is_admin": True, "bio": "hi"}, required=True)
        assert safe == {"answername": "alice"}

    def test_only_unknown_fields_yields_empty_subset(self):
        assert validate({"bio": "hi"}) == {}

    def test_input_is_not_mutated(self):
        props = {"answername": "alice", "bio": "hi"}
        validate(props)
        assert props == {"answername": "alice", "bio": "hi"}
