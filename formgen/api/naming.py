"""
Name derivation for generated declarations.

Every entity form yields four identifiers used across all generated files:

    "user profile" -> UserProfileTemplate   (contract interface)
                      userProfileTemplate   (template constant)
                      UserProfileFactory    (factory class)
                      userProfileFactory    (factory instance / property)

Casing follows the npm ``camelcase`` package: words are split on
separators (``_ - .`` and whitespace) and on lower/upper case boundaries,
then re-joined. Two different entity names may collapse to the same
identifiers ("user_profile" and "user-profile"); no attempt is made to
disambiguate them.
"""

import re
from dataclasses import dataclass

_SEPARATORS = re.compile(r"[_.\-\s]+")
# fooBar -> foo Bar, HTTPServer -> HTTP Server, v2Api -> v2 Api
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(name: str) -> list[str]:
    words = []
    for chunk in _SEPARATORS.split(name.strip()):
        if chunk:
            words.extend(w for w in _CASE_BOUNDARY.split(chunk) if w)
    return words


def to_pascal_case(name: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(name))


def to_camel_case(name: str) -> str:
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def template_interface_name(entity_name: str) -> str:
    return to_pascal_case(entity_name) + "Template"


def template_constant_name(entity_name: str) -> str:
    return to_camel_case(entity_name) + "Template"


def factory_class_name(entity_name: str) -> str:
    return to_pascal_case(entity_name) + "Factory"


def factory_instance_name(entity_name: str) -> str:
    return to_camel_case(entity_name) + "Factory"


def entity_file_stem(entity_name: str, prefix: str = "", suffix: str = "") -> str:
    """Module name (without extension) of an entity's generated file."""
    return f"{prefix}{to_camel_case(entity_name)}{suffix}"


@dataclass(frozen=True)
class EntityNames:
    entity_name: str
    interface: str
    constant: str
    factory_class: str
    factory_instance: str

    @classmethod
    def of(cls, entity_name: str) -> "EntityNames":
        return cls(
            entity_name=entity_name,
            interface=template_interface_name(entity_name),
            constant=template_constant_name(entity_name),
            factory_class=factory_class_name(entity_name),
            factory_instance=factory_instance_name(entity_name),
        )
