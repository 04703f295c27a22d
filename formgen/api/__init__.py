"""
Generation pipeline for formgen.

Architecture:
    - naming:       entity name -> derived TypeScript identifiers
    - synthesizer:  one entity form -> EntityArtifact + module text
    - assembler:    all entities -> shared modules, formatting, writing
    - graph/:       nested-entity reference graph (dangling refs, cycles)
    - utils/:       output formatters
    - writer:       file persistence
"""

from .assembler import Assembler, GenerationReport, PropertyPool, generate
from .naming import EntityNames
from .synthesizer import (
    EntityArtifact,
    format_template_value,
    render_entity_module,
    synthesize_entity,
)

__all__ = [
    "Assembler",
    "GenerationReport",
    "PropertyPool",
    "generate",
    "EntityNames",
    "EntityArtifact",
    "format_template_value",
    "render_entity_module",
    "synthesize_entity",
]
