"""
Pytest configuration and shared fixtures for the formgen test suite.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from formgen.config import GeneratorOptions
from formgen.models import (
    EntityForm,
    GeneratorResult,
    NestedField,
    Property,
    ScalarField,
    Validator,
    ValidatorImport,
)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def fixtures_dir():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated code output."""
    temp_dir = tempfile.mkdtemp(prefix="formgen_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def _reset_gen_logging():
    """CLI tests install a non-propagating handler; undo it so caplog keeps working."""
    yield
    root = logging.getLogger("formgen.gen")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def options(temp_output_dir):
    return GeneratorOptions(output_folder=temp_output_dir)


# Builders for dataclass entity forms

def required_validator():
    return Validator(
        definition="Validators.required",
        import_=ValidatorImport(path="@angular/forms", name="Validators"),
    )


def max_length_validator(n: int):
    return Validator(
        definition=f"Validators.maxLength({n})",
        import_=ValidatorImport(path="@angular/forms", name="Validators"),
    )


@pytest.fixture
def address_entity():
    return EntityForm(
        entity_name="address",
        fields=[
            ScalarField(
                field_name="street",
                properties=[
                    Property("label", "string", "Street"),
                    Property("maxLength", "number", 120),
                ],
                validators=[required_validator(), max_length_validator(120)],
            ),
            ScalarField(
                field_name="city",
                properties=[Property("label", "string", "City")],
            ),
        ],
    )


@pytest.fixture
def user_entity(address_entity):
    return EntityForm(
        entity_name="user profile",
        fields=[
            ScalarField(
                field_name="name",
                properties=[
                    Property("label", "string", "Name"),
                    Property("visible", "boolean", True),
                ],
                validators=[required_validator()],
            ),
            NestedField(field_name="home", entity=address_entity),
            NestedField(field_name="work", entity=address_entity),
        ],
    )


@pytest.fixture
def sample_result(address_entity, user_entity):
    return GeneratorResult(entity_forms=[address_entity, user_entity])


@pytest.fixture
def sample_form_content():
    """Return a minimal valid entity-form DSL model."""
    return """
Entity Address
  fields:
    - street: control
        property label: string = "Street";
        property maxLength: number = 120;
        validator "Validators.required" from "@angular/forms" import Validators;
    - city: control
        property label: string = "City";
end

Entity User
  fields:
    - name: control
        property label: string = "Name";
        property visible: boolean = true;
    - address: form<Address>
end
"""


@pytest.fixture
def write_form_file(temp_output_dir):
    """Factory fixture to write DSL content to a temporary file."""
    def _write(content: str, filename: str = "model.form") -> Path:
        file_path = temp_output_dir / filename
        file_path.write_text(content, encoding="utf-8")
        return file_path
    return _write
