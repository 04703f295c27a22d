"""
Loading entity forms from files.

Two input formats are supported:

* ``.form`` files written in the entity-form DSL (parsed with textX, see
  ``formgen.language``);
* YAML / JSON documents with camelCase keys::

      entityForms:
        - entityName: address
          fields:
            - fieldName: street
              properties:
                - {name: label, type: string, value: Street}
              validators:
                - definition: Validators.required
                  import: {path: "@angular/forms", name: Validators}
        - entityName: user
          fields:
            - fieldName: address
              entity: address          # by name, or an inline entity mapping

Nested references by name that match no declared entity resolve to a
fieldless placeholder entity: generation still proceeds and the dependency
graph reports the dangling reference.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from formgen.api.gen_logging import get_logger
from formgen.errors import InputError
from formgen.models import (
    EntityForm,
    GeneratorResult,
    NestedField,
    Property,
    ScalarField,
    Validator,
    ValidatorImport,
)

logger = get_logger(__name__)

DOCUMENT_SUFFIXES = (".yaml", ".yml", ".json")


def _require(data: Dict[str, Any], key: str, where: str):
    if not isinstance(data, dict):
        raise InputError(f"{where}: expected a mapping, got {type(data).__name__}")
    if key not in data:
        raise InputError(f"{where}: missing required key '{key}'")
    return data[key]


def _parse_property(raw, where: str) -> Property:
    return Property(
        name=_require(raw, "name", where),
        type=_require(raw, "type", where),
        value=_require(raw, "value", where),
    )


def _parse_validator(raw, where: str) -> Validator:
    imp = _require(raw, "import", where)
    return Validator(
        definition=_require(raw, "definition", where),
        import_=ValidatorImport(
            path=_require(imp, "path", f"{where}.import"),
            name=_require(imp, "name", f"{where}.import"),
        ),
    )


class _DocumentParser:
    """Builds EntityForm objects from a parsed document, sharing entities by name."""

    def __init__(self):
        self.declared: Dict[str, EntityForm] = {}
        self.placeholders: Dict[str, EntityForm] = {}

    def parse(self, document) -> GeneratorResult:
        raw_entities = _require(document, "entityForms", "document")
        if not isinstance(raw_entities, list):
            raise InputError("document.entityForms: expected a list")

        # Declare first so nested references can point forward or cyclically
        forms: List[EntityForm] = []
        for i, raw in enumerate(raw_entities):
            name = _require(raw, "entityName", f"entityForms[{i}]")
            form = EntityForm(entity_name=name)
            self.declared.setdefault(name, form)
            forms.append(form)

        for i, (raw, form) in enumerate(zip(raw_entities, forms)):
            self._fill_fields(form, raw, f"entityForms[{i}]")

        return GeneratorResult(entity_forms=forms)

    def _fill_fields(self, form: EntityForm, raw, where: str) -> None:
        for j, raw_field in enumerate(raw.get("fields") or []):
            form.fields.append(self._parse_field(raw_field, f"{where}.fields[{j}]"))

    def _parse_field(self, raw, where: str):
        field_name = _require(raw, "fieldName", where)
        properties = [
            _parse_property(p, f"{where}.properties[{k}]")
            for k, p in enumerate(raw.get("properties") or [])
        ]
        validators = [
            _parse_validator(v, f"{where}.validators[{k}]")
            for k, v in enumerate(raw.get("validators") or [])
        ]

        if raw.get("entity") is None:
            return ScalarField(field_name=field_name, properties=properties, validators=validators)

        return NestedField(
            field_name=field_name,
            entity=self._resolve_entity(raw["entity"], f"{where}.entity"),
            definition=raw.get("definition"),
            properties=properties,
            validators=validators,
        )

    def _resolve_entity(self, ref, where: str) -> EntityForm:
        if isinstance(ref, str):
            if ref in self.declared:
                return self.declared[ref]
            if ref not in self.placeholders:
                logger.debug(f"[LOAD] {where}: '{ref}' is not declared, using a placeholder")
                self.placeholders[ref] = EntityForm(entity_name=ref)
            return self.placeholders[ref]

        if isinstance(ref, dict):
            name = _require(ref, "entityName", where)
            inline = EntityForm(entity_name=name)
            self._fill_fields(inline, ref, where)
            return inline

        raise InputError(f"{where}: expected an entity name or mapping, got {type(ref).__name__}")


def parse_document(document) -> GeneratorResult:
    """Build a GeneratorResult from an already parsed YAML/JSON document."""
    return _DocumentParser().parse(document)


def load_document(path) -> GeneratorResult:
    """Load a YAML or JSON entity-form document."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InputError(f"{path}: not a valid YAML/JSON document: {e}") from e
    return parse_document(document)


def load_generator_result(path) -> GeneratorResult:
    """Load entity forms from a ``.form`` DSL file or a YAML/JSON document."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in DOCUMENT_SUFFIXES:
        return load_document(path)

    from formgen.language import load_form_file
    return load_form_file(str(path))
