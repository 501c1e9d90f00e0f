"""
Unit tests for the text field validator.

Includes property-based testing with hypothesis.
"""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from exterminator.core.validators import SetupError, string

pytestmark = pytest.mark.unit


def errors_of(validator, value, record=None):
    return validator.validate(value, record).errors


class TestBaseTypeCheck:
    """Tests for the implicit string check"""

    def test_string_passes(self):
        assert string().validate("hello").is_valid

    def test_number_fails(self):
        """Test a number is rejected with the base type message"""
        assert errors_of(string(), 0) == ["Value must be a string"]

    def test_type_check_runs_before_other_rules(self):
        """Test the type message comes first and text rules fail without raising"""
        errors = errors_of(string().min(3).lowercase(), 12)

        assert errors[0] == "Value must be a string"
        assert len(errors) == 3

    def test_options_are_stored(self):
        assert string({"label": "Name"}).options == {"label": "Name"}


class TestRequired:
    """Tests for required"""

    def test_present_value_passes(self):
        assert string().required().validate("John").is_valid

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_value_fails(self, value):
        assert errors_of(string().required(), value) == ["Value is required"]

    def test_custom_message(self):
        assert errors_of(string().required(message="Name please"), "") == ["Name please"]

    @given(st.text(min_size=1).filter(lambda s: s.strip() != ""))
    def test_property_any_nonblank_string_passes(self, value):
        """Property test: any non-blank string passes required"""
        assert string().required().validate(value).is_valid


class TestLength:
    """Tests for min and max"""

    def test_min_default_message_interpolates(self):
        assert errors_of(string().min(3), "ab") == ["Value must be at least 3 characters long, but got ab"]

    def test_max_default_message_interpolates(self):
        assert errors_of(string().max(3), "abcd") == ["Value must be at most 3 characters long, but got abcd"]

    def test_bounds_are_inclusive(self):
        validator = string().min(3).max(3)

        assert validator.validate("abc").is_valid

    def test_callable_message(self):
        validator = string().min(5, message=lambda value: f"{value!r} is short")

        assert errors_of(validator, "abc") == ["'abc' is short"]

    @given(st.text(max_size=10))
    def test_property_max_matches_length(self, value):
        """Property test: max(10) accepts every string of length <= 10"""
        assert string().max(10).validate(value).is_valid


class TestCaseAndCharset:
    """Tests for alpha_numeric, lowercase and uppercase"""

    def test_alpha_numeric(self):
        assert string().alpha_numeric().validate("abc123XYZ").is_valid
        assert errors_of(string().alpha_numeric(), "abc 123") == ["Value must be alphanumeric"]
        assert errors_of(string().alpha_numeric(), "abc123\n") == ["Value must be alphanumeric"]

    def test_lowercase(self):
        assert string().lowercase().validate("abc").is_valid
        assert errors_of(string().lowercase(), "aBc") == ["Value must be lowercase"]

    def test_uppercase(self):
        assert string().uppercase().validate("ABC").is_valid
        assert errors_of(string().uppercase(), "ABc") == ["Value must be uppercase"]


class TestEmail:
    """Tests for email"""

    def test_valid_email(self):
        assert string().email().validate("user@example.com").is_valid

    @pytest.mark.parametrize("value", ["invalid_email", "user@", "user@example.toolong", "a b@example.com"])
    def test_invalid_format(self, value):
        assert errors_of(string().email(), value) == ["Value must be a valid email"]

    def test_custom_format_message(self):
        validator = string().email(message=lambda value: f"{value} is not an email")

        assert errors_of(validator, "nope") == ["nope is not an email"]

    def test_allowed_domains(self):
        validator = string().email(domains=["gmail.com", "outlook.com"])

        assert validator.validate("me@gmail.com").is_valid
        assert errors_of(validator, "me@yahoo.com") == ["Email domain must be one of gmail.com, outlook.com"]

    def test_excluded_domains(self):
        validator = string().email(exclude_domains=["gmail.com"])

        assert validator.validate("me@outlook.com").is_valid
        assert errors_of(validator, "me@gmail.com") == ["Email domain must not be one of gmail.com"]

    def test_single_domain_string(self):
        """Test a bare domain string is one domain, not a list of characters"""
        validator = string().email(domains="gmail.com", exclude_domains="yahoo.com")

        assert validator.validate("me@gmail.com").is_valid
        assert errors_of(validator, "me@outlook.com") == ["Email domain must be one of gmail.com"]

    def test_format_checked_before_domain(self):
        validator = string().email(domains=["gmail.com"])

        assert errors_of(validator, "not-an-email") == ["Value must be a valid email"]

    def test_conflicting_domains_disable_all_rules(self):
        """Test a domain in both lists reports only the setup error"""
        validator = string().required().email(domains=["a.com"], exclude_domains=["a.com"]).min(100)
        expected = ["Domains a.com cannot be both allowed and excluded."]

        assert validator.invalid_setup == expected[0]
        assert errors_of(validator, "x@a.com") == expected
        assert errors_of(validator, "") == expected
        assert errors_of(validator, None) == expected
        assert errors_of(validator, 42) == expected


class TestPhone:
    """Tests for phone"""

    def test_us_phone(self):
        assert string().phone("us").validate("(555) 555-5555").is_valid
        assert errors_of(string().phone(), "555-555-5555") == ["Value must be a valid phone number"]

    def test_eu_phone(self):
        validator = string().phone("eu")

        assert validator.validate("+49 123456789").is_valid
        assert validator.validate("33-1234567").is_valid
        assert not validator.validate("(555) 555-5555").is_valid

    def test_custom_pattern(self):
        validator = string().phone("us", pattern=r"^\d{10}$")

        assert validator.validate("5555555555").is_valid
        assert not validator.validate("(555) 555-5555").is_valid

    def test_unsupported_region_raises(self):
        """Test an unknown region is a build-time error"""
        with pytest.raises(SetupError) as exc_info:
            string().phone("mars")

        assert "Unsupported region: mars" in str(exc_info.value)

    def test_setup_error_is_value_error(self):
        with pytest.raises(ValueError):
            string().phone("asia")


class TestPassword:
    """Tests for password"""

    def test_strong_password(self):
        assert string().password().validate("Abcdef1@").is_valid

    @pytest.mark.parametrize("value", [
        "Abcde1@",       # too short
        "abcdef1@",      # no uppercase
        "ABCDEF1@",      # no lowercase
        "Abcdefg@",      # no digit
        "Abcdefg1",      # no special character
        "Abcdef1@#",     # character outside the allowed set
    ])
    def test_weak_passwords(self, value):
        assert errors_of(string().password(), value) == ["Password does not meet the requirements"]

    def test_custom_pattern(self):
        validator = string().password(r"^\d{4}$", message="PIN required")

        assert validator.validate("1234").is_valid
        assert errors_of(validator, "Abcdef1@") == ["PIN required"]


class TestRegexAndOneOf:
    """Tests for regex and one_of"""

    def test_regex_string_pattern(self):
        validator = string().regex(r"^TXN[0-9]{10}$")

        assert validator.validate("TXN0001234567").is_valid
        assert errors_of(validator, "TXN123") == ["Value does not match the pattern"]

    def test_regex_searches_anywhere(self):
        assert string().regex("needle").validate("haystack needle haystack").is_valid

    def test_regex_compiled_pattern(self):
        validator = string().regex(re.compile("^abc$", re.IGNORECASE))

        assert validator.validate("ABC").is_valid

    def test_invalid_regex_raises(self):
        with pytest.raises(SetupError):
            string().regex("[unclosed")

    @given(st.from_regex(r"^TXN[0-9]{10}$", fullmatch=True))
    def test_property_generated_ids_match(self, value):
        """Property test: generated IDs match the pattern"""
        assert string().regex(r"^TXN[0-9]{10}$").validate(value).is_valid

    def test_one_of(self):
        validator = string().one_of(["Male", "Female", "Other"])

        assert validator.validate("Other").is_valid
        assert errors_of(validator, "Unknown") == ["Invalid value"]

    def test_one_of_single_string(self):
        validator = string().one_of("Male")

        assert validator.validate("Male").is_valid
        assert errors_of(validator, "M") == ["Invalid value"]

    def test_one_of_empty_is_setup_error(self):
        validator = string().one_of([])

        assert errors_of(validator, "anything") == ["You must provide at least one allowed value."]


class TestPreprocessAndModifiers:
    """Tests for trim, optional, nullable and equals"""

    def test_trim_runs_before_rules(self):
        validator = string().lowercase().max(5).trim()

        assert validator.validate("  abc  ").is_valid

    def test_preprocessors_run_in_order(self):
        validator = string().trim().preprocess(lambda value: value + "!").max(4)

        assert validator.validate("  abc  ").is_valid
        assert not validator.validate("  abcd  ").is_valid

    def test_raising_preprocessor_keeps_value(self):
        """Test a failing preprocessor leaves the value for the rules to judge"""
        validator = string().preprocess(lambda value: value.upper())

        assert errors_of(validator, 5) == ["Value must be a string"]

    def test_later_preprocessors_still_run(self):
        validator = string().preprocess(lambda value: value[10]).trim().max(3)

        assert validator.validate("  abc  ").is_valid

    def test_raising_custom_rule_is_reported(self):
        validator = string().add_rule("starts_a", lambda value, record: value[0] == "A", "Must start with A")

        assert errors_of(validator, "") == ["Must start with A"]

    def test_optional_empty_string_skips_everything(self):
        validator = string().required().min(3).optional()

        assert validator.validate("").is_valid

    def test_optional_does_not_cover_null(self):
        assert errors_of(string().optional(), None) == ["Value cannot be null"]

    def test_optional_non_empty_value_still_checked(self):
        assert not string().min(3).optional().validate("ab").is_valid

    def test_null_fails_by_default(self):
        """Test None reports only the null message"""
        assert errors_of(string().required().min(3), None) == ["Value cannot be null"]

    def test_nullable_accepts_null(self):
        assert string().required().nullable().validate(None).is_valid

    def test_equals_compares_with_other_field(self):
        validator = string().equals("password")

        assert validator.validate("secret", {"password": "secret"}).is_valid
        assert errors_of(validator, "secret", {"password": "other"}) == ["Value must be equal to password"]

    def test_equals_missing_field_fails(self):
        assert not string().equals("password").validate("secret", {}).is_valid

    def test_equals_sees_raw_other_value(self):
        """Test cross-field rules compare against the untrimmed record value"""
        validator = string().trim().equals("raw")

        assert not validator.validate("  abc  ", {"raw": "  abc  "}).is_valid
        assert validator.validate("  abc  ", {"raw": "abc"}).is_valid

    def test_custom_rule(self):
        validator = string().add_rule("palindrome", lambda value, record: value == value[::-1], "Not a palindrome")

        assert validator.validate("level").is_valid
        assert errors_of(validator, "levels") == ["Not a palindrome"]

    def test_custom_rule_must_be_callable(self):
        with pytest.raises(SetupError):
            string().add_rule("broken", None, "x")


class TestRuleOrder:
    """Tests for rule ordering and error collection"""

    def test_every_failure_reported_in_order(self):
        validator = string().min(5).uppercase().alpha_numeric()

        assert errors_of(validator, "a-b") == [
            "Value must be at least 5 characters long, but got a-b",
            "Value must be uppercase",
            "Value must be alphanumeric",
        ]

    def test_chaining_returns_same_instance(self):
        validator = string()

        assert validator.required() is validator
        assert validator.trim() is validator
        assert validator.optional() is validator

    def test_no_carry_over_between_calls(self):
        validator = string().min(3)

        assert not validator.validate("a").is_valid
        assert validator.validate("abc").errors == []
