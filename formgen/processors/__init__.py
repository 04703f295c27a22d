"""
Processors module for the entity-form DSL.

This module contains TextX object processors that run during model construction
to validate individual model elements.
"""

from formgen.processors.object_processors import (
    get_obj_processors,
    property_obj_processor,
    entity_obj_processor,
)

__all__ = [
    "get_obj_processors",
    "property_obj_processor",
    "entity_obj_processor",
]
