"""
Per-entity synthesis: one EntityForm -> one TypeScript module.

The synthesizer is a pure function of the entity and the generator options.
It never looks at another entity's synthesis result; nested entities are
referenced only through their derived names, so cyclic entity graphs are
handled without recursion.

The result is an ``EntityArtifact``: the structured pieces of the module
(contract members, template members, ordered factory controls, delegates,
imports) plus the properties the entity referenced, which the assembler
merges into the shared template-property contract.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from formgen.errors import TemplateValueError
from formgen.models import EntityForm, Property
from formgen.templates import env as default_env, ts_quote
from .gen_logging import get_logger
from .naming import EntityNames, entity_file_stem

logger = get_logger(__name__)

ANGULAR_FORMS = "@angular/forms"
TEMPLATE_PROPERTY_MODULE = "./templateProperty"
TYPES_MODULE = "./types"
PROPERTY_VALIDATOR_TYPE = "PropertyValidator"


# ------------------------------------------------------------------------------
# Template values

def format_template_value(prop: Property) -> str:
    """
    Render one property as a ``'key': literal`` pair.

    >>> format_template_value(Property("age", "number", 5))
    "'age': 5"
    >>> format_template_value(Property("label", "string", "Hi"))
    "'label': 'Hi'"
    """
    if prop.type == "number":
        return f"{ts_quote(prop.name)}: {prop.value}"
    if prop.type == "string":
        return f"{ts_quote(prop.name)}: {ts_quote(prop.value)}"
    if prop.type == "boolean":
        if isinstance(prop.value, bool):
            literal = "true" if prop.value else "false"
        else:
            literal = str(prop.value).lower()
        return f"{ts_quote(prop.name)}: {literal}"
    raise TemplateValueError(prop.name, prop.type)


# ------------------------------------------------------------------------------
# Artifact pieces

@dataclass(frozen=True)
class ScalarControl:
    """Leaf control bound with the field's validator expressions."""
    validators: Tuple[str, ...]


@dataclass(frozen=True)
class GroupControl:
    """Sub-group control filled by a held nested factory."""
    delegate: str
    factory_class: str


@dataclass(frozen=True)
class FactoryControl:
    field_name: str
    control: Union[ScalarControl, GroupControl]

    @property
    def is_group(self) -> bool:
        return isinstance(self.control, GroupControl)


@dataclass(frozen=True)
class ContractMember:
    name: str
    type_name: str


@dataclass(frozen=True)
class TemplateMember:
    """
    One entry of the template constant: either a reference to a nested
    entity's template constant or an inline object literal.
    """
    name: str
    reference: Optional[str] = None
    entries: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Delegate:
    factory_instance: str
    factory_class: str


@dataclass
class EntityArtifact:
    names: EntityNames
    file_stem: str
    contract_members: List[ContractMember] = field(default_factory=list)
    template_members: List[TemplateMember] = field(default_factory=list)
    controls: List[FactoryControl] = field(default_factory=list)
    delegates: List[Delegate] = field(default_factory=list)
    imports: Dict[str, List[str]] = field(default_factory=OrderedDict)
    properties: List[Property] = field(default_factory=list)

    @property
    def file_name(self) -> str:
        return f"{self.file_stem}.ts"

    @property
    def scalar_controls(self) -> List[FactoryControl]:
        return [c for c in self.controls if not c.is_group]


def add_import(imports: Dict[str, List[str]], path: str, name: str) -> None:
    """Register ``name`` from ``path``; names are kept unique, first-seen order."""
    names = imports.setdefault(path, [])
    if name not in names:
        names.append(name)


# ------------------------------------------------------------------------------
# Synthesis

def synthesize_entity(
    entity: EntityForm,
    file_prefix: str = "",
    file_suffix: str = "",
    template_property_interface_name: str = "TemplateProperty",
) -> EntityArtifact:
    """Build the EntityArtifact for one entity form."""
    artifact = EntityArtifact(
        names=EntityNames.of(entity.entity_name),
        file_stem=entity_file_stem(entity.entity_name, file_prefix, file_suffix),
    )

    imports = artifact.imports
    add_import(imports, ANGULAR_FORMS, "FormGroup")
    add_import(imports, ANGULAR_FORMS, "FormBuilder")
    add_import(imports, TEMPLATE_PROPERTY_MODULE, template_property_interface_name)
    add_import(imports, TYPES_MODULE, PROPERTY_VALIDATOR_TYPE)

    # Nested module imports go after every validator import
    nested_imports: Dict[str, List[str]] = OrderedDict()
    delegate_names = set()

    for fld in entity.fields:
        if fld.is_nested:
            nested = EntityNames.of(fld.entity_name)

            nested_stem = entity_file_stem(fld.entity_name, file_prefix, file_suffix)
            # Names that collapse to this module's stem would import from themselves
            if nested_stem != artifact.file_stem:
                module = "./" + nested_stem
                add_import(nested_imports, module, nested.constant)
                add_import(nested_imports, module, nested.interface)
                add_import(nested_imports, module, nested.factory_class)

            artifact.contract_members.append(ContractMember(fld.field_name, nested.interface))
            artifact.template_members.append(TemplateMember(fld.field_name, reference=nested.constant))
            artifact.controls.append(
                FactoryControl(fld.field_name, GroupControl(nested.factory_instance, nested.factory_class))
            )
            if nested.factory_instance not in delegate_names:
                delegate_names.add(nested.factory_instance)
                artifact.delegates.append(Delegate(nested.factory_instance, nested.factory_class))
        else:
            artifact.contract_members.append(
                ContractMember(fld.field_name, template_property_interface_name)
            )
            artifact.template_members.append(
                TemplateMember(
                    fld.field_name,
                    entries=tuple(format_template_value(p) for p in fld.properties),
                )
            )
            artifact.controls.append(
                FactoryControl(
                    fld.field_name,
                    ScalarControl(tuple(v.definition for v in fld.validators)),
                )
            )

        # Both field kinds contribute to the property pool and the import map
        artifact.properties.extend(fld.properties)
        for validator in fld.validators:
            add_import(imports, validator.import_.path, validator.import_.name)

    for module, names in nested_imports.items():
        for name in names:
            add_import(imports, module, name)

    logger.debug(
        f"[SYNTH] {entity.entity_name}: {len(artifact.controls)} control(s), "
        f"{len(artifact.delegates)} delegate(s), {len(artifact.properties)} propert(y/ies)"
    )
    return artifact


def render_entity_module(artifact: EntityArtifact, jinja_env=None) -> str:
    """Render an EntityArtifact to raw (unformatted) TypeScript text."""
    template = (jinja_env or default_env).get_template("typescript/entity.ts.jinja")
    return template.render(
        names=artifact.names,
        imports=artifact.imports,
        contract_members=artifact.contract_members,
        template_members=artifact.template_members,
        controls=artifact.controls,
        scalar_controls=artifact.scalar_controls,
        delegates=artifact.delegates,
        property_validator=PROPERTY_VALIDATOR_TYPE,
    )
