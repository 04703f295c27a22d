"""
Input data model for form template generation.

A generation run takes one ``GeneratorResult``: an ordered list of
``EntityForm`` objects. Each entity owns an ordered list of fields; a field
is either scalar (literal properties + validators) or nested (a reference to
another entity form). Nested references are plain object references, so an
entity graph may contain cycles (A -> B -> A); nothing in this module walks
those references recursively.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


PROPERTY_TYPES = ("number", "string", "boolean")


@dataclass
class ValidatorImport:
    """External symbol a validator expression needs (``import {name} from 'path'``)."""
    path: str
    name: str


@dataclass
class Validator:
    """A verbatim validator expression plus the import it requires."""
    definition: str
    import_: ValidatorImport


@dataclass
class Property:
    """One literal key/value pair baked into a template constant."""
    name: str
    type: str  # "number" | "string" | "boolean"
    value: Any


@dataclass
class ScalarField:
    field_name: str
    properties: List[Property] = field(default_factory=list)
    validators: List[Validator] = field(default_factory=list)

    @property
    def is_nested(self) -> bool:
        return False


@dataclass
class NestedField:
    """
    Field that embeds another entity form as a sub-group.

    The referenced entity is shared, read-only data. It is excluded from
    ``repr`` and equality so cyclic graphs can be printed and compared.
    """
    field_name: str
    entity: "EntityForm" = field(repr=False, compare=False)
    definition: Optional[Dict[str, Any]] = None
    properties: List[Property] = field(default_factory=list)
    validators: List[Validator] = field(default_factory=list)

    @property
    def is_nested(self) -> bool:
        return True

    @property
    def entity_name(self) -> str:
        return self.entity.entity_name


FormField = Union[ScalarField, NestedField]


@dataclass
class EntityForm:
    entity_name: str
    fields: List[FormField] = field(default_factory=list)

    def nested_fields(self) -> List[NestedField]:
        return [f for f in self.fields if f.is_nested]

    def scalar_fields(self) -> List[ScalarField]:
        return [f for f in self.fields if not f.is_nested]


@dataclass
class GeneratorResult:
    """The single input to a generation run."""
    entity_forms: List[EntityForm] = field(default_factory=list)

    def entity_names(self) -> List[str]:
        return [e.entity_name for e in self.entity_forms]
