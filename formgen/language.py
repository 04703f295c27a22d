"""
Metamodel and model builders for the entity-form DSL.

This module provides the entry points for parsing ``.form`` files with textX
and converting the parsed model into the ``GeneratorResult`` the generation
pipeline consumes. Per-object validation lives in the processors/ package.
"""

import os
import re
from os.path import join, dirname, abspath
from pathlib import Path

from textx import metamodel_from_file

from formgen.api.gen_logging import get_logger
from formgen.models import (
    EntityForm,
    GeneratorResult,
    NestedField,
    Property,
    ScalarField,
    Validator,
    ValidatorImport,
)
from formgen.processors import get_obj_processors

logger = get_logger(__name__)


# ------------------------------------------------------------------------------
# Constants
THIS_DIR = dirname(abspath(__file__))
GRAMMAR_DIR = join(THIS_DIR, "grammar")
FORM_EXTENSION = ".form"


# ------------------------------------------------------------------------------
# Public model builders

def build_model(model_path: str):
    """Parse & validate a model from a file path, resolving imports by inlining."""
    expanded_content = _expand_imports(model_path)
    return FormsMetaModel.model_from_str(expanded_content)


def build_model_str(model_str: str):
    """Parse & validate a model from a string."""
    return FormsMetaModel.model_from_str(model_str)


def get_model_entities(model):
    return list(getattr(model, "entities", []) or [])


# ------------------------------------------------------------------------------
# Conversion to the generator input

def _convert_property(prop) -> Property:
    return Property(name=prop.name, type=prop.type, value=prop.value)


def _convert_validator(validator) -> Validator:
    return Validator(
        definition=validator.definition,
        import_=ValidatorImport(path=validator.path, name=validator.symbol),
    )


def model_to_generator_result(model) -> GeneratorResult:
    """
    Convert a parsed textX model to a GeneratorResult.

    Every Entity becomes exactly one EntityForm; nested fields point at those
    same EntityForm objects, so cyclic references are preserved as cycles.
    """
    entities = get_model_entities(model)
    forms = {id(e): EntityForm(entity_name=e.name) for e in entities}

    for entity in entities:
        form = forms[id(entity)]
        for fld in getattr(entity, "fields", []) or []:
            properties = [_convert_property(p) for p in fld.properties or []]
            validators = [_convert_validator(v) for v in fld.validators or []]

            if fld.__class__.__name__ == "NestedField":
                form.fields.append(
                    NestedField(
                        field_name=fld.name,
                        entity=forms[id(fld.entity)],
                        properties=properties,
                        validators=validators,
                    )
                )
            else:
                form.fields.append(
                    ScalarField(
                        field_name=fld.name,
                        properties=properties,
                        validators=validators,
                    )
                )

    return GeneratorResult(entity_forms=[forms[id(e)] for e in entities])


def load_form_file(model_path: str) -> GeneratorResult:
    return model_to_generator_result(build_model(model_path))


# ------------------------------------------------------------------------------
# Imports

def _expand_imports(model_path: str, visited=None) -> str:
    """
    Recursively expand import statements by inlining the content of imported files.
    Returns the fully expanded file content with all imports resolved.
    """
    if visited is None:
        visited = set()

    model_file = Path(model_path).resolve()

    # Already inlined (diamond or circular import)
    if model_file in visited:
        return ""
    visited.add(model_file)

    if not model_file.exists():
        raise FileNotFoundError(f"File not found: {model_file}")

    content = model_file.read_text(encoding="utf-8")
    base_dir = model_file.parent

    import_pattern = r'^\s*import\s+([a-zA-Z_][a-zA-Z0-9_.]*)\s*$'

    def replace_import(match):
        imp_uri = match.group(1)
        # "address" -> "address.form", "shop.address" -> "shop/address.form"
        rel_path = imp_uri.replace(".", os.sep) + FORM_EXTENSION
        import_path = (base_dir / rel_path).resolve()

        if not import_path.exists():
            raise FileNotFoundError(f"Import not found: {import_path}")

        logger.debug(f"[IMPORT] Inlining {import_path.name}")
        imported_content = _expand_imports(str(import_path), visited)
        return f"// ========== Imported from {import_path.name} ==========\n{imported_content}\n// ========== End of {import_path.name} ==========\n"

    return re.sub(import_pattern, replace_import, content, flags=re.MULTILINE)


# ------------------------------------------------------------------------------
# Metamodel creation

def get_metamodel(debug: bool = False, global_repo: bool = False):
    """
    Load the textX metamodel from grammar/forms.tx and register the
    object processors.
    """
    mm = metamodel_from_file(
        join(GRAMMAR_DIR, "forms.tx"),
        auto_init_attributes=True,
        global_repository=global_repo,
        debug=debug,
    )
    mm.register_obj_processors(get_obj_processors())
    return mm


FormsMetaModel = get_metamodel(debug=False)
