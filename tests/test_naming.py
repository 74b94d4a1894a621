"""Tests for the naming module."""

from ftrack_typegen.naming import (
    TYPED_CONTEXT_GENERIC,
    entity_type_field_type,
    get_interface_name,
    is_typed_context_subtype,
    omit_clause,
    ts_literal,
)


class TestGetInterfaceName:
    """Test declaration names for schemas."""

    def test_plain_schema(self):
        assert get_interface_name({"id": "Project"}) == "Project"

    def test_typed_context_is_generic(self):
        assert get_interface_name({"id": "TypedContext"}) == TYPED_CONTEXT_GENERIC
        assert TYPED_CONTEXT_GENERIC.startswith("TypedContext<K extends TypedContextSubtype")

    def test_missing_id(self):
        assert get_interface_name({"properties": {}}) is None

    def test_empty_id(self):
        assert get_interface_name({"id": ""}) is None


class TestIsTypedContextSubtype:
    """Only alias_for Task marks a subtype."""

    def test_task_alias(self):
        assert is_typed_context_subtype({"id": "Shot", "alias_for": {"id": "Task"}})

    def test_other_alias(self):
        assert not is_typed_context_subtype({"id": "Shot", "alias_for": {"id": "Asset"}})

    def test_string_alias_ignored(self):
        """alias_for must be an object with an id."""
        assert not is_typed_context_subtype({"id": "Shot", "alias_for": "Task"})

    def test_no_alias(self):
        assert not is_typed_context_subtype({"id": "Shot"})


class TestEntityTypeFieldType:
    def test_literal(self):
        assert entity_type_field_type("Project") == '"Project"'

    def test_typed_context_uses_type_parameter(self):
        assert entity_type_field_type("TypedContext") == "K"


class TestOmitClause:
    def test_meta_properties(self):
        assert omit_clause("Base") == 'Omit<Base, "__entity_type__" | "__permissions">'

    def test_extra_keys(self):
        assert omit_clause("Base", ("custom_attributes",)) == (
            'Omit<Base, "__entity_type__" | "__permissions" | "custom_attributes">'
        )


class TestTsLiteral:
    def test_plain(self):
        assert ts_literal("Shot") == '"Shot"'

    def test_escapes_quotes_and_backslashes(self):
        assert ts_literal('a"b\\c') == '"a\\"b\\\\c"'
