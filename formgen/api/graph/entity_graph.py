"""Entity reference graph: entity -> entities it nests."""

from typing import List, Tuple

import networkx as nx

from formgen.models import GeneratorResult


def build_entity_graph(result: GeneratorResult) -> nx.DiGraph:
    """
    Build a directed graph keyed by entity name.

    Nodes are the declared entities (attribute ``declared=True``) plus any
    entity that is only referenced from a nested field (``declared=False``).
    Each edge carries the list of field names that create it.
    """
    graph = nx.DiGraph()
    for entity in result.entity_forms:
        graph.add_node(entity.entity_name, declared=True)

    for entity in result.entity_forms:
        for fld in entity.nested_fields():
            target = fld.entity_name
            if target not in graph:
                graph.add_node(target, declared=False)
            if graph.has_edge(entity.entity_name, target):
                graph.edges[entity.entity_name, target]["fields"].append(fld.field_name)
            else:
                graph.add_edge(entity.entity_name, target, fields=[fld.field_name])
    return graph


def find_dangling_references(result: GeneratorResult) -> List[Tuple[str, str, str]]:
    """
    Return (entity, field, missing_entity) for nested fields whose entity is
    not among the declared entity forms. Generated code for these imports a
    module that is never emitted.
    """
    declared = set(result.entity_names())
    dangling = []
    for entity in result.entity_forms:
        for fld in entity.nested_fields():
            if fld.entity_name not in declared:
                dangling.append((entity.entity_name, fld.field_name, fld.entity_name))
    return dangling


def find_cycles(result: GeneratorResult) -> List[List[str]]:
    """Return the simple cycles of the entity graph, each rotated to start at its smallest name."""
    graph = build_entity_graph(result)
    cycles = []
    for cycle in nx.simple_cycles(graph):
        start = cycle.index(min(cycle))
        cycles.append(cycle[start:] + cycle[:start])
    return sorted(cycles)


def dependency_order(result: GeneratorResult) -> List[str]:
    """
    Entity names ordered so nested entities come before the entities that
    embed them. Entities on a cycle are kept together in declaration order.
    """
    graph = build_entity_graph(result)
    condensed = nx.condensation(graph)
    position = {name: i for i, name in enumerate(result.entity_names())}
    order = []
    for component in reversed(list(nx.topological_sort(condensed))):
        members = condensed.nodes[component]["members"]
        order.extend(sorted(members, key=lambda n: position.get(n, len(position))))
    return order
