"""
Integration tests for YAML / JSON entity-form documents.
"""

import pytest

from formgen.errors import InputError
from formgen.loaders import load_document, load_generator_result, parse_document


class TestLoadDocument:
    """Test loading documents from disk."""

    def test_yaml(self, fixtures_dir):
        result = load_document(fixtures_dir / "user.yaml")
        assert result.entity_names() == ["address", "user profile"]

        address, user = result.entity_forms
        street = address.fields[0]
        assert [(p.name, p.value) for p in street.properties] == [("label", "Street"), ("maxLength", 120)]
        assert street.validators[0].import_.name == "Validators"
        assert user.fields[1].entity is address
        assert user.fields[2].entity is address

    def test_json_inline_entity(self, fixtures_dir):
        result = load_document(fixtures_dir / "user.json")
        assert result.entity_names() == ["user profile"]

        billing = result.entity_forms[0].fields[1]
        assert billing.is_nested
        assert billing.entity_name == "billing address"
        assert billing.entity.fields[0].field_name == "iban"

    def test_dispatch_by_suffix(self, fixtures_dir):
        assert load_generator_result(fixtures_dir / "user.yaml").entity_names() == ["address", "user profile"]
        assert load_generator_result(fixtures_dir / "user.form").entity_names() == ["Address", "UserProfile"]

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            load_document(temp_output_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_output_dir):
        path = temp_output_dir / "broken.yaml"
        path.write_text("entityForms: [\n", encoding="utf-8")
        with pytest.raises(InputError, match="not a valid YAML/JSON document"):
            load_document(path)


class TestParseDocument:
    """Test building entity forms from parsed documents."""

    def test_undeclared_reference_becomes_placeholder(self):
        result = parse_document({
            "entityForms": [
                {"entityName": "user", "fields": [
                    {"fieldName": "home", "entity": "address"},
                    {"fieldName": "work", "entity": "address"},
                ]},
            ],
        })
        user = result.entity_forms[0]
        assert result.entity_names() == ["user"]
        assert user.fields[0].entity.entity_name == "address"
        assert user.fields[0].entity.fields == []
        assert user.fields[0].entity is user.fields[1].entity

    def test_forward_and_cyclic_references(self):
        result = parse_document({
            "entityForms": [
                {"entityName": "a", "fields": [{"fieldName": "b", "entity": "b"}]},
                {"entityName": "b", "fields": [{"fieldName": "a", "entity": "a"}]},
            ],
        })
        a, b = result.entity_forms
        assert a.fields[0].entity is b
        assert b.fields[0].entity is a

    def test_nested_field_keeps_definition(self):
        result = parse_document({
            "entityForms": [
                {"entityName": "a", "fields": [
                    {"fieldName": "b", "entity": "b", "definition": {"collapsible": True}},
                ]},
            ],
        })
        assert result.entity_forms[0].fields[0].definition == {"collapsible": True}

    def test_entity_without_fields(self):
        result = parse_document({"entityForms": [{"entityName": "empty"}]})
        assert result.entity_forms[0].fields == []

    def test_missing_entity_forms(self):
        with pytest.raises(InputError, match="missing required key 'entityForms'"):
            parse_document({"forms": []})

    def test_entity_forms_must_be_a_list(self):
        with pytest.raises(InputError, match="expected a list"):
            parse_document({"entityForms": {"entityName": "a"}})

    def test_missing_field_name(self):
        with pytest.raises(InputError, match=r"entityForms\[0\]\.fields\[0\]: missing required key 'fieldName'"):
            parse_document({"entityForms": [{"entityName": "a", "fields": [{"properties": []}]}]})

    def test_incomplete_validator_import(self):
        document = {"entityForms": [{"entityName": "a", "fields": [{
            "fieldName": "x",
            "validators": [{"definition": "Validators.required", "import": {"path": "@angular/forms"}}],
        }]}]}
        with pytest.raises(InputError, match="missing required key 'name'"):
            parse_document(document)

    def test_invalid_entity_reference(self):
        document = {"entityForms": [{"entityName": "a", "fields": [{"fieldName": "x", "entity": 3}]}]}
        with pytest.raises(InputError, match="expected an entity name or mapping"):
            parse_document(document)

    def test_document_must_be_a_mapping(self):
        with pytest.raises(InputError, match="expected a mapping"):
            parse_document(["entityForms"])

    def test_property_type_is_not_checked_at_load_time(self):
        """Unsupported types are rejected later, when the entity is synthesized."""
        result = parse_document({"entityForms": [{"entityName": "a", "fields": [{
            "fieldName": "x",
            "properties": [{"name": "born", "type": "date", "value": "2020-01-01"}],
        }]}]})
        assert result.entity_forms[0].fields[0].properties[0].type == "date"
