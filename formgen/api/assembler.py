"""
Global assembly of a generation run.

Synthesizes every entity, merges the properties they reference into one
shared ``TemplateProperty`` contract, builds the barrel (index) and types
modules, then formats and writes every file.

Everything is synthesized and formatted before the first write, so a fatal
error (e.g. an unsupported property type) leaves the output folder untouched.
"""

from collections import Counter, OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from formgen.config import GeneratorOptions
from formgen.errors import TemplateValueError
from formgen.models import EntityForm, GeneratorResult, Property, PROPERTY_TYPES
from formgen.templates import env as default_env
from .gen_logging import get_logger
from .graph import find_cycles, find_dangling_references
from .synthesizer import (
    ANGULAR_FORMS,
    PROPERTY_VALIDATOR_TYPE,
    TEMPLATE_PROPERTY_MODULE,
    EntityArtifact,
    render_entity_module,
    synthesize_entity,
)
from .utils import get_formatter
from .writer import FileWriter

logger = get_logger(__name__)

TEMPLATE_PROPERTY_FILE = "templateProperty.ts"
TYPES_FILE = "types.ts"
INDEX_FILE = "index.ts"


class PropertyPool:
    """Ordered accumulator of properties keyed by name; first occurrence wins."""

    def __init__(self):
        self._props: "OrderedDict[str, Property]" = OrderedDict()

    def merge(self, properties) -> List[Property]:
        added = []
        for prop in properties:
            if prop.name not in self._props:
                self._props[prop.name] = prop
                added.append(prop)
        return added

    def __iter__(self):
        return iter(self._props.values())

    def __len__(self):
        return len(self._props)

    def names(self) -> List[str]:
        return list(self._props.keys())


def _ts_type(prop: Property) -> str:
    if prop.type not in PROPERTY_TYPES:
        raise TemplateValueError(prop.name, prop.type)
    return prop.type


@dataclass
class GenerationReport:
    files: Dict[str, str] = field(default_factory=OrderedDict)
    property_names: List[str] = field(default_factory=list)
    entity_count: int = 0
    written: List[Path] = field(default_factory=list)

    @property
    def file_names(self) -> List[str]:
        return list(self.files.keys())


class Assembler:
    """Runs the whole pipeline for one GeneratorResult."""

    def __init__(self, options: GeneratorOptions = None, formatter=None, writer=None, jinja_env=None):
        self.options = options or GeneratorOptions()
        self.formatter = formatter or get_formatter(self.options.formatting)
        self.writer = writer or FileWriter(self.options.output_folder)
        self.env = jinja_env or default_env

    # ------------------------------------------------------------------
    # Synthesis

    def _synthesize(self, entity: EntityForm) -> EntityArtifact:
        return synthesize_entity(
            entity,
            file_prefix=self.options.file_prefix,
            file_suffix=self.options.file_suffix,
            template_property_interface_name=self.options.template_property_interface_name,
        )

    def synthesize_all(self, result: GeneratorResult) -> List[EntityArtifact]:
        """Synthesize every entity; results keep the input entity order."""
        entities = list(result.entity_forms)
        workers = self.options.workers
        if workers <= 1 or len(entities) <= 1:
            return [self._synthesize(e) for e in entities]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self._synthesize, entities))

    # ------------------------------------------------------------------
    # Shared modules

    def render_template_property(self, pool: PropertyPool) -> str:
        template = self.env.get_template("typescript/template_property.ts.jinja")
        return template.render(
            interface_name=self.options.template_property_interface_name,
            properties=[{"name": p.name, "ts_type": _ts_type(p)} for p in pool],
        )

    def render_index(self, artifacts: List[EntityArtifact]) -> str:
        template = self.env.get_template("typescript/index.ts.jinja")
        return template.render(
            entities=[
                {
                    "constant": a.names.constant,
                    "interface": a.names.interface,
                    "factory_class": a.names.factory_class,
                    "file_stem": a.file_stem,
                }
                for a in artifacts
            ],
            interface_name=self.options.template_property_interface_name,
            template_property_module=TEMPLATE_PROPERTY_MODULE,
        )

    def render_types(self) -> str:
        template = self.env.get_template("typescript/types.ts.jinja")
        return template.render(
            angular_forms=ANGULAR_FORMS,
            property_validator=PROPERTY_VALIDATOR_TYPE,
        )

    # ------------------------------------------------------------------
    # Pipeline

    def _check_references(self, result: GeneratorResult) -> None:
        duplicates = [n for n, c in Counter(result.entity_names()).items() if c > 1]
        for name in duplicates:
            logger.warning(f"[WARN] Entity '{name}' is declared more than once; generated declarations collide")
        for entity_name, field_name, missing in find_dangling_references(result):
            logger.warning(
                f"[WARN] {entity_name}.{field_name} references entity '{missing}' "
                f"which is not generated; its import will not resolve"
            )
        for cycle in find_cycles(result):
            logger.info(f"[INFO] Entity cycle: {' -> '.join(cycle + [cycle[0]])}")

    def build(self, result: GeneratorResult) -> GenerationReport:
        """Synthesize and format every file without writing anything."""
        self._check_references(result)

        report = GenerationReport(entity_count=len(result.entity_forms))
        raw: Dict[str, str] = OrderedDict()
        pool = PropertyPool()

        logger.info(f"[PHASE 1] Synthesizing {len(result.entity_forms)} entity form(s)...")
        artifacts = self.synthesize_all(result)
        for artifact in artifacts:
            raw[artifact.file_name] = render_entity_module(artifact, self.env)
            added = pool.merge(artifact.properties)
            logger.debug(
                f"  {artifact.names.entity_name} -> {artifact.file_name} "
                f"(+{len(added)} shared propert(y/ies))"
            )

        logger.info("[PHASE 2] Building shared modules...")
        raw[TEMPLATE_PROPERTY_FILE] = self.render_template_property(pool)
        raw[INDEX_FILE] = self.render_index(artifacts)
        raw[TYPES_FILE] = self.render_types()

        for file_name, text in raw.items():
            report.files[file_name] = self.formatter.format(text, file_name)
        report.property_names = pool.names()
        return report

    def run(self, result: GeneratorResult) -> GenerationReport:
        """Build every file, then write them all to the output folder."""
        report = self.build(result)
        logger.info(f"[PHASE 3] Writing {len(report.files)} file(s) to {self.writer.output_folder}...")
        report.written = self.writer.write_all(report.files, workers=self.options.workers)
        return report


def generate(result: GeneratorResult, options: GeneratorOptions = None) -> GenerationReport:
    """Main entry point: generate and write every file for ``result``."""
    return Assembler(options).run(result)
