"""
End-to-end generation tests: model file -> generated TypeScript on disk,
through the Python API and the CLI.
"""

import pytest
from click.testing import CliRunner

from formgen.api import generate
from formgen.cli.cli import cli
from formgen.config import GeneratorOptions, load_options
from formgen.loaders import load_generator_result


@pytest.fixture
def runner():
    return CliRunner()


class TestGenerateFromFiles:
    """Test the full pipeline from input files."""

    def test_form_file(self, fixtures_dir, temp_output_dir):
        result = load_generator_result(fixtures_dir / "user.form")
        report = generate(result, GeneratorOptions(output_folder=temp_output_dir))

        assert report.file_names == [
            "address.ts", "userProfile.ts", "templateProperty.ts", "index.ts", "types.ts",
        ]
        assert report.property_names == ["label", "maxLength", "visible", "collapsed"]

        address = (temp_output_dir / "address.ts").read_text(encoding="utf-8")
        assert "import { FormGroup, FormBuilder, Validators } from '@angular/forms';" in address
        assert "import { zipCode } from './validators';" in address
        assert "        'zip': [zipCode()]," in address.splitlines()

        user = (temp_output_dir / "userProfile.ts").read_text(encoding="utf-8")
        assert "import { addressTemplate, AddressTemplate, AddressFactory } from './address';" in user
        assert "export class UserProfileFactory {" in user
        assert "        form.addControl('work', this.addressFactory.fillForm(this._formBuilder.group({})));" in (
            user.splitlines()
        )

    def test_yaml_and_form_inputs_agree_on_shape(self, fixtures_dir, temp_output_dir):
        result = load_generator_result(fixtures_dir / "user.yaml")
        report = generate(result, GeneratorOptions(output_folder=temp_output_dir))

        assert report.file_names[:2] == ["address.ts", "userProfile.ts"]
        assert report.property_names == ["label", "maxLength", "visible"]

    def test_config_file_options(self, fixtures_dir, temp_output_dir):
        options = load_options(str(fixtures_dir / "formgen.yaml"), output_folder=temp_output_dir)
        report = generate(load_generator_result(fixtures_dir / "user.yaml"), options)

        assert report.file_names[:2] == ["address.form.ts", "userProfile.form.ts"]
        template_property = (temp_output_dir / "templateProperty.ts").read_text(encoding="utf-8")
        assert template_property.splitlines()[:2] == [
            "export interface FieldProperty {",
            "  label?: string;",
        ]


class TestCli:
    """Test the formgen command line."""

    def test_validate(self, runner, fixtures_dir):
        outcome = runner.invoke(cli, ["validate", str(fixtures_dir / "user.form")])
        assert outcome.exit_code == 0
        assert "Model validation success" in outcome.output

    def test_validate_failure(self, runner, write_form_file):
        path = write_form_file("Entity A\n  fields:\n    - x: control\n    - x: control\nend\n")
        outcome = runner.invoke(cli, ["validate", str(path)])
        assert outcome.exit_code == 1
        assert "Validation failed" in outcome.output

    def test_inspect(self, runner, fixtures_dir):
        outcome = runner.invoke(cli, ["inspect", str(fixtures_dir / "user.yaml"), "--prefix", "gen-"])
        assert outcome.exit_code == 0
        assert "=== ENTITIES ===" in outcome.output
        assert "- user profile -> gen-userProfile.ts" in outcome.output
        assert "address, user profile" in outcome.output

    def test_inspect_reports_dangling(self, runner, fixtures_dir):
        outcome = runner.invoke(cli, ["inspect", str(fixtures_dir / "user.json")])
        assert outcome.exit_code == 0
        assert "=== DANGLING REFERENCES ===" in outcome.output
        assert "user profile.billing -> billing address" in outcome.output

    def test_generate(self, runner, fixtures_dir, temp_output_dir):
        out = temp_output_dir / "forms"
        outcome = runner.invoke(cli, [
            "generate", str(fixtures_dir / "user.form"),
            "--out", str(out), "--suffix", ".gen", "--interface-name", "Props", "-q",
        ])

        assert outcome.exit_code == 0, outcome.output
        assert "5 file(s) emitted" in outcome.output
        assert sorted(p.name for p in out.iterdir()) == [
            "address.gen.ts", "index.ts", "templateProperty.ts", "types.ts", "userProfile.gen.ts",
        ]
        assert "export { Props } from './templateProperty';" in (out / "index.ts").read_text(encoding="utf-8")

    def test_generate_with_config_and_workers(self, runner, fixtures_dir, temp_output_dir):
        outcome = runner.invoke(cli, [
            "generate", str(fixtures_dir / "user.yaml"),
            "--out", str(temp_output_dir), "--config", str(fixtures_dir / "formgen.yaml"),
            "--prefix", "x-", "--workers", "2", "-q",
        ])

        assert outcome.exit_code == 0, outcome.output
        assert (temp_output_dir / "x-address.form.ts").exists()

    def test_generate_invalid_property_type(self, runner, temp_output_dir):
        model = temp_output_dir / "bad.yaml"
        model.write_text(
            "entityForms:\n"
            "  - entityName: event\n"
            "    fields:\n"
            "      - fieldName: when\n"
            "        properties:\n"
            "          - {name: default, type: date, value: '2020-01-01'}\n",
            encoding="utf-8",
        )
        out = temp_output_dir / "out"
        outcome = runner.invoke(cli, ["generate", str(model), "--out", str(out), "-q"])

        assert outcome.exit_code == 1
        assert "out of range" in outcome.output
        assert not out.exists()

    def test_generate_missing_model(self, runner, temp_output_dir):
        outcome = runner.invoke(cli, ["generate", str(temp_output_dir / "none.form"), "-q"])
        assert outcome.exit_code == 1
        assert "Generate failed" in outcome.output
