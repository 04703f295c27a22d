from pathlib import Path
import click

from datetime import date
from rich import pretty
from rich.console import Console

from formgen.api.assembler import Assembler
from formgen.api.gen_logging import configure_gen_logging
from formgen.config import load_options
from formgen.loaders import load_generator_result
from formgen.utils import print_model_debug

pretty.install()
console = Console()


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


@click.group()
@click.pass_context
def cli(context):
    context.ensure_object(dict)


@cli.command("validate", help="Load a .form / .yaml / .json model and report errors.")
@click.pass_context
@click.argument("model_path")
def validate(context, model_path):
    try:
        result = load_generator_result(model_path)
        console.print(f"{_stamp()} Model validation success! ({len(result.entity_forms)} entity form(s))", style='green')
    except Exception as e:
        console.print(f"{_stamp()} Validation failed with error(s): {e}", style='red')
        context.exit(1)
    else:
        context.exit(0)


@cli.command("inspect", help="Print entities, derived names, dangling references and cycles.")
@click.pass_context
@click.argument("model_path")
@click.option("--prefix", "file_prefix", default="", help="File name prefix used for entity modules.")
@click.option("--suffix", "file_suffix", default="", help="File name suffix used for entity modules.")
def inspect_cmd(context, model_path, file_prefix, file_suffix):
    try:
        result = load_generator_result(model_path)
        console.print(f"{_stamp()} Model validation success!", style='green')
        print_model_debug(result, file_prefix=file_prefix, file_suffix=file_suffix)
    except Exception as e:
        console.print(f"{_stamp()} Inspect failed with error(s): {e}", style='red')
        context.exit(1)
    else:
        context.exit(0)


@cli.command("generate", help="Emit TypeScript form templates and factories.")
@click.pass_context
@click.argument("model_path")
@click.option("--out", "out_dir", default=None, help="Output folder (default: ./)")
@click.option("--prefix", "file_prefix", default=None, help="Prefix for entity file names.")
@click.option("--suffix", "file_suffix", default=None, help="Suffix for entity file names.")
@click.option("--interface-name", "interface_name", default=None,
              help="Name of the shared template-property interface (default: TemplateProperty).")
@click.option("--config", "config_path", default=None, help="YAML config file with generator options.")
@click.option(
    "--formatter",
    type=click.Choice(["builtin", "prettier"], case_sensitive=False),
    default=None,
    help="Formatting backend (default: builtin)."
)
@click.option("--workers", type=int, default=None, help="Threads used for synthesis and writing.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show per-entity detail.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only show warnings and errors.")
def generate(context, model_path, out_dir, file_prefix, file_suffix, interface_name,
             config_path, formatter, workers, verbose, quiet):
    configure_gen_logging(verbose=verbose, quiet=quiet)
    try:
        options = load_options(
            config_path,
            output_folder=Path(out_dir).resolve() if out_dir else None,
            file_prefix=file_prefix,
            file_suffix=file_suffix,
            template_property_interface_name=interface_name,
            workers=workers,
            formatting={"backend": formatter.lower() if formatter else None},
        )
        result = load_generator_result(model_path)
        report = Assembler(options).run(result)
        console.print(
            f"{_stamp()} {len(report.written)} file(s) emitted to: {Path(options.output_folder).resolve()}",
            style="green",
        )
    except Exception as e:
        import traceback

        console.print(f"{_stamp()} Generate failed with error(s): {e}", style="red")
        if verbose:
            console.print("\n".join(traceback.format_exc().splitlines()[-50:]), style="red")
        context.exit(1)
    else:
        context.exit(0)


def main():
    cli(prog_name="formgen")
