"""
TextX object processors for the entity-form DSL.

Object processors run during model construction to validate individual
model elements before the model is converted to the dataclass form.
"""

from textx import get_location, TextXSemanticError


_LITERAL_KINDS = {
    "number": "NumberLiteral",
    "string": "StringLiteral",
    "boolean": "BoolLiteral",
}


def property_obj_processor(prop):
    """
    Property validation:
    - The literal must match the declared type (number/string/boolean)
    - The literal value is lifted onto the property as `prop.value`
    """
    literal = prop.literal
    kind = literal.__class__.__name__
    if _LITERAL_KINDS.get(prop.type) != kind:
        raise TextXSemanticError(
            f"Property '{prop.name}' is declared as {prop.type} but its value {literal.value!r} is not.",
            **get_location(prop),
        )
    prop.value = literal.value


def _check_unique_field_names(entity):
    seen = set()
    for fld in getattr(entity, "fields", []) or []:
        if fld.name in seen:
            raise TextXSemanticError(
                f"Entity '{entity.name}' declares field '{fld.name}' more than once.",
                **get_location(fld),
            )
        seen.add(fld.name)


def entity_obj_processor(entity):
    """
    Entity validation:
    - Field names are unique within the entity
    """
    _check_unique_field_names(entity)


def get_obj_processors():
    """Return object processor configuration for the metamodel."""
    return {
        "Property": property_obj_processor,
        "Entity": entity_obj_processor,
    }
