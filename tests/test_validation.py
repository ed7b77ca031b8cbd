"""Tests for tool argument validation."""
import pytest

from tools.validation import ValidationError, validate_arguments, validate_tool_arguments

SCHEMA = {
    "type": "object",
    "properties": {
        "content": {"type": "string", "minLength": 1, "pattern": r"\S"},
        "priority": {"type": "integer", "enum": [1, 2, 3, 4]},
        "limit": {"type": "integer", "minimum": 1},
        "favorite": {"type": "boolean"},
        "task_id": {"type": "string"},
        "task_name": {"type": "string"},
    },
    "required": ["content"],
}


class TestValidateArguments:
    def test_valid(self):
        assert validate_arguments(SCHEMA, {"content": "Buy milk", "priority": 4}) == {}

    def test_missing_required(self):
        errors = validate_arguments(SCHEMA, {})
        assert errors == {"content": "'content' is a required property"}

    def test_missing_required_among_several(self):
        schema = {**SCHEMA, "required": ["content", "limit"]}
        errors = validate_arguments(schema, {"content": "x"})
        assert errors == {"limit": "'limit' is a required property"}

    def test_empty_string(self):
        errors = validate_arguments(SCHEMA, {"content": ""})
        assert set(errors) == {"content"}

    def test_whitespace_only_string(self):
        errors = validate_arguments(SCHEMA, {"content": "   "})
        assert "does not match" in errors["content"]

    def test_wrong_type(self):
        errors = validate_arguments(SCHEMA, {"content": 42})
        assert errors["content"] == "42 is not of type 'string'"

    def test_bool_is_not_integer(self):
        errors = validate_arguments(SCHEMA, {"content": "x", "priority": True})
        assert errors["priority"] == "True is not of type 'integer'"

    def test_enum(self):
        errors = validate_arguments(SCHEMA, {"content": "x", "priority": 5})
        assert errors["priority"] == "5 is not one of [1, 2, 3, 4]"

    def test_minimum(self):
        errors = validate_arguments(SCHEMA, {"content": "x", "limit": 0})
        assert errors["limit"] == "0 is less than the minimum of 1"

    def test_null_optional_is_ignored(self):
        assert validate_arguments(SCHEMA, {"content": "x", "priority": None}) == {}

    def test_null_required_is_missing(self):
        errors = validate_arguments(SCHEMA, {"content": None})
        assert errors == {"content": "'content' is a required property"}

    def test_unknown_fields_are_ignored(self):
        assert validate_arguments(SCHEMA, {"content": "x", "extra": object()}) == {}

    def test_not_an_object(self):
        assert validate_arguments(SCHEMA, ["content"]) == {"arguments": "must be an object"}

    def test_one_error_per_field(self):
        errors = validate_arguments(SCHEMA, {"content": "x", "priority": 5, "limit": 0})
        assert set(errors) == {"priority", "limit"}

    def test_one_of_satisfied(self):
        errors = validate_arguments(
            SCHEMA, {"content": "x", "task_name": "Book"}, one_of=("task_id", "task_name")
        )
        assert errors == {}

    def test_one_of_missing(self):
        errors = validate_arguments(SCHEMA, {"content": "x"}, one_of=("task_id", "task_name"))
        assert errors == {"task_id": "provide either task_id or task_name"}

    def test_one_of_empty_strings_count_as_missing(self):
        errors = validate_arguments(
            SCHEMA, {"content": "x", "task_id": "", "task_name": ""}, one_of=("task_id", "task_name")
        )
        assert "task_id" in errors

    def test_one_of_keeps_schema_error(self):
        errors = validate_arguments(SCHEMA, {"content": "x", "task_id": 7}, one_of=("task_id", "task_name"))
        assert errors["task_id"] == "7 is not of type 'string'"


class TestValidateToolArguments:
    def test_returns_arguments(self):
        args = {"content": "x"}
        assert validate_tool_arguments("todoist_create_task", SCHEMA, args) is args

    def test_error_names_tool_and_field(self):
        with pytest.raises(ValidationError) as exc:
            validate_tool_arguments("todoist_create_task", SCHEMA, {"priority": 9})
        message = str(exc.value)
        assert message.startswith("Invalid arguments for todoist_create_task")
        assert "content: 'content' is a required property" in message
        assert "priority: 9 is not one of [1, 2, 3, 4]" in message
        assert set(exc.value.errors) == {"content", "priority"}
