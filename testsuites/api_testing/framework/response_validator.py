# ================================================================================
# Response Validator
# ================================================================================
#
# Validation of QADemo API responses. Every endpoint answers with the same
# envelope:
#
#     {"success": true, "data": {...}}
#     {"success": false, "error": "message"}
#
# The validator checks the envelope first, then applies field rules addressed
# by dot paths ("data.items[0].quantity") and reports every failing rule at
# once, so a broken response is diagnosed in a single run.
#
# Key Features:
#   - Envelope validation (success flag and data payload)
#   - Field-level rules with detailed error messages
#   - Allure validation summary attachment
#
# ================================================================================

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


class ValidationType(Enum):
    """Enumeration of supported validation types."""
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    CONTAINS = "contains"
    REGEX_MATCH = "regex_match"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LENGTH_EQUAL = "length_equal"
    LENGTH_GREATER_THAN_OR_EQUAL = "length_greater_than_or_equal"
    TYPE_CHECK = "type_check"
    HAS_KEY = "has_key"
    IN_LIST = "in_list"


@dataclass
class ValidationRule:
    """
    Represents a single validation rule to be applied to a response field.

    Attributes:
        field: The field path to validate (dot notation, ``items[0]`` indexing)
        validation_type: The type of validation to perform
        expected: The expected value or pattern
        description: Human-readable description of the validation
        required: Whether the field must exist
    """
    field: str
    validation_type: ValidationType
    expected: Any = None
    description: str = ""
    required: bool = True


@dataclass
class ValidationResult:
    """Outcome of one rule."""
    passed: bool
    rule: ValidationRule
    actual_value: Any = None
    error_message: str = ""


class ResponseValidator:
    """
    Validator for QADemo API response bodies.

    Example:
        validator = ResponseValidator(response.json())
        validator.expect_success()
        validator.add_rule("data.status", ValidationType.EQUAL, "pending")
        validator.add_rule("data.id", ValidationType.IS_NOT_NULL)
        validator.assert_valid()
    """

    def __init__(self, response_data: Optional[Dict[str, Any]] = None):
        self.response_data = response_data if response_data is not None else {}
        self.rules: List[ValidationRule] = []
        self._validation_handlers = {
            ValidationType.EQUAL: self._validate_equal,
            ValidationType.NOT_EQUAL: self._validate_not_equal,
            ValidationType.IS_NULL: self._validate_is_null,
            ValidationType.IS_NOT_NULL: self._validate_is_not_null,
            ValidationType.CONTAINS: self._validate_contains,
            ValidationType.REGEX_MATCH: self._validate_regex_match,
            ValidationType.GREATER_THAN: self._validate_greater_than,
            ValidationType.GREATER_THAN_OR_EQUAL: self._validate_gte,
            ValidationType.LENGTH_EQUAL: self._validate_length_equal,
            ValidationType.LENGTH_GREATER_THAN_OR_EQUAL: self._validate_length_gte,
            ValidationType.TYPE_CHECK: self._validate_type_check,
            ValidationType.HAS_KEY: self._validate_has_key,
            ValidationType.IN_LIST: self._validate_in_list,
        }

    # =========================================================================
    # Rule Building
    # =========================================================================

    def add_rule(
        self,
        field: str,
        validation_type: ValidationType,
        expected: Any = None,
        description: str = "",
        required: bool = True,
    ) -> "ResponseValidator":
        """Append a rule; returns self for chaining."""
        self.rules.append(
            ValidationRule(
                field=field,
                validation_type=validation_type,
                expected=expected,
                description=description,
                required=required,
            )
        )
        return self

    def expect_success(self) -> "ResponseValidator":
        """Require ``success: true`` and a ``data`` payload."""
        self.add_rule("success", ValidationType.EQUAL, True, "Envelope success flag")
        self.add_rule("data", ValidationType.IS_NOT_NULL, description="Envelope data payload")
        return self

    def expect_failure(self) -> "ResponseValidator":
        """Require ``success: false`` and an ``error`` message."""
        self.add_rule("success", ValidationType.EQUAL, False, "Envelope success flag")
        self.add_rule("error", ValidationType.TYPE_CHECK, "string", "Envelope error message")
        return self

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, rules: Optional[List[ValidationRule]] = None) -> List[ValidationResult]:
        """
        Apply ``rules`` (default: the rules added so far) to the response.

        Returns:
            One ValidationResult per rule, in order
        """
        rules = self.rules if rules is None else rules
        results = []

        for rule in rules:
            result = self._apply_rule(rule)
            results.append(result)

            log_msg = f"{rule.description or rule.field}: {'PASS' if result.passed else 'FAIL'}"
            if result.passed:
                logger.debug(log_msg)
            else:
                logger.warning(f"{log_msg} - {result.error_message}")

        self._attach_validation_summary(results)
        return results

    def assert_valid(self, rules: Optional[List[ValidationRule]] = None) -> None:
        """
        Validate and raise if any rule fails.

        Raises:
            AssertionError: Listing every failed rule
        """
        results = self.validate(rules)
        failures = [r for r in results if not r.passed]

        if failures:
            error_text = "\n".join(f"- {f.rule.field}: {f.error_message}" for f in failures)
            raise AssertionError(
                f"Response validation failed ({len(failures)}/{len(results)} rules):\n"
                f"{error_text}"
            )

    def _apply_rule(self, rule: ValidationRule) -> ValidationResult:
        """Apply a single validation rule to the response data."""
        try:
            actual_value = get_nested_value(self.response_data, rule.field)
        except (KeyError, IndexError, TypeError):
            if rule.required:
                return ValidationResult(
                    passed=False,
                    rule=rule,
                    error_message=f"Required field not found: {rule.field}",
                )
            return ValidationResult(
                passed=True,
                rule=rule,
                error_message=f"Optional field not found: {rule.field}",
            )

        handler = self._validation_handlers[rule.validation_type]
        try:
            passed, error_message = handler(actual_value, rule.expected)
        except TypeError as e:
            # Comparing incompatible types (e.g. None > 0)
            passed, error_message = False, f"Validation error: {e}"

        return ValidationResult(
            passed=passed,
            rule=rule,
            actual_value=actual_value,
            error_message=error_message,
        )

    # Validation handlers
    def _validate_equal(self, actual: Any, expected: Any) -> tuple:
        passed = actual == expected
        error = "" if passed else f"Expected '{expected}', got '{actual}'"
        return passed, error

    def _validate_not_equal(self, actual: Any, expected: Any) -> tuple:
        passed = actual != expected
        error = "" if passed else f"Expected not equal to '{expected}'"
        return passed, error

    def _validate_is_null(self, actual: Any, expected: Any) -> tuple:
        passed = actual is None
        error = "" if passed else f"Expected null, got '{actual}'"
        return passed, error

    def _validate_is_not_null(self, actual: Any, expected: Any) -> tuple:
        passed = actual is not None
        error = "" if passed else "Expected non-null value, got null"
        return passed, error

    def _validate_contains(self, actual: Any, expected: Any) -> tuple:
        """Membership for lists, substring for everything else."""
        if isinstance(actual, (list, tuple)):
            passed = expected in actual
        else:
            passed = str(expected) in str(actual)
        error = "" if passed else f"'{actual}' does not contain '{expected}'"
        return passed, error

    def _validate_regex_match(self, actual: Any, expected: str) -> tuple:
        try:
            passed = re.search(expected, str(actual)) is not None
        except re.error as e:
            return False, f"Invalid regex pattern: {e}"
        error = "" if passed else f"'{actual}' does not match pattern '{expected}'"
        return passed, error

    def _validate_greater_than(self, actual: Any, expected: Any) -> tuple:
        passed = actual > expected
        error = "" if passed else f"Expected > {expected}, got {actual}"
        return passed, error

    def _validate_gte(self, actual: Any, expected: Any) -> tuple:
        passed = actual >= expected
        error = "" if passed else f"Expected >= {expected}, got {actual}"
        return passed, error

    def _validate_length_equal(self, actual: Any, expected: int) -> tuple:
        actual_len = len(actual) if hasattr(actual, "__len__") else 0
        passed = actual_len == expected
        error = "" if passed else f"Expected length {expected}, got {actual_len}"
        return passed, error

    def _validate_length_gte(self, actual: Any, expected: int) -> tuple:
        actual_len = len(actual) if hasattr(actual, "__len__") else 0
        passed = actual_len >= expected
        error = "" if passed else f"Expected length >= {expected}, got {actual_len}"
        return passed, error

    def _validate_type_check(self, actual: Any, expected: str) -> tuple:
        type_map = {
            "string": str,
            "str": str,
            "int": int,
            "integer": int,
            "float": float,
            "number": (int, float),
            "bool": bool,
            "boolean": bool,
            "list": list,
            "array": list,
            "dict": dict,
            "object": dict,
            "null": type(None),
        }
        expected_type = type_map.get(expected.lower())
        if expected_type is None:
            return False, f"Unknown type: {expected}"

        # bool is a subclass of int; a flag is not a number
        if isinstance(actual, bool) and expected_type is not bool:
            passed = False
        else:
            passed = isinstance(actual, expected_type)
        error = "" if passed else f"Expected type {expected}, got {type(actual).__name__}"
        return passed, error

    def _validate_has_key(self, actual: Any, expected: str) -> tuple:
        passed = isinstance(actual, dict) and expected in actual
        error = "" if passed else f"Key '{expected}' not present"
        return passed, error

    def _validate_in_list(self, actual: Any, expected: List) -> tuple:
        passed = actual in expected
        error = "" if passed else f"'{actual}' not in {expected}"
        return passed, error

    def _attach_validation_summary(self, results: List[ValidationResult]) -> None:
        """Attach validation summary to Allure report."""
        passed_count = sum(1 for r in results if r.passed)

        summary_lines = [
            f"Total Rules: {len(results)}",
            f"Passed: {passed_count}",
            f"Failed: {len(results) - passed_count}",
            "",
            "Details:",
            "-" * 40,
        ]
        for result in results:
            status = "✅ PASS" if result.passed else "❌ FAIL"
            line = f"{status} | {result.rule.field}"
            if not result.passed:
                line += f" | {result.error_message}"
            summary_lines.append(line)

        allure.attach(
            "\n".join(summary_lines),
            name="Validation Summary",
            attachment_type=allure.attachment_type.TEXT,
        )


_INDEXED_KEY = re.compile(r"^(\w+)\[(\d+)\]$")


def get_nested_value(data: Any, key_path: str) -> Any:
    """
    Get a value from nested data using dot notation.

    Args:
        data: The parsed JSON document
        key_path: Dot-separated path (e.g., "data.items[0].productId")

    Raises:
        KeyError, IndexError, TypeError: If the path doesn't exist
    """
    current = data
    for key in key_path.split("."):
        indexed = _INDEXED_KEY.match(key)
        if indexed:
            current = current[indexed.group(1)][int(indexed.group(2))]
        else:
            current = current[key]
    return current


__all__ = [
    "ResponseValidator",
    "ValidationRule",
    "ValidationResult",
    "ValidationType",
    "get_nested_value",
]
