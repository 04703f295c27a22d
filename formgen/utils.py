from formgen.api.graph import dependency_order, find_cycles, find_dangling_references
from formgen.api.naming import EntityNames, entity_file_stem


def print_model_debug(result, file_prefix: str = "", file_suffix: str = ""):
    entities = result.entity_forms
    n_fields = sum(len(e.fields) for e in entities)
    n_scalar = sum(len(e.scalar_fields()) for e in entities)
    n_nested = sum(len(e.nested_fields()) for e in entities)

    print("=== SUMMARY ===")
    print(f"Entities: {len(entities)} | Fields: {n_fields} (scalar: {n_scalar}, nested: {n_nested})\n")

    if entities:
        print("=== ENTITIES ===")
        for e in entities:
            names = EntityNames.of(e.entity_name)
            stem = entity_file_stem(e.entity_name, file_prefix, file_suffix)
            print(f"- {e.entity_name} -> {stem}.ts")
            print(f"    names: {names.interface}, {names.constant}, {names.factory_class}, {names.factory_instance}")
            if not e.fields:
                print("    (no fields)")
            for f in e.fields:
                if f.is_nested:
                    print(f"    • {f.field_name}: form<{f.entity_name}>")
                    continue
                props = ", ".join(f"{p.name}:{p.type}={p.value!r}" for p in f.properties)
                validators = ", ".join(v.definition for v in f.validators)
                bits = []
                if props: bits.append(f"properties=[{props}]")
                if validators: bits.append(f"validators=[{validators}]")
                print(f"    • {f.field_name}: control " + " ".join(bits))
        print()

    dangling = find_dangling_references(result)
    if dangling:
        print("=== DANGLING REFERENCES ===")
        for entity_name, field_name, missing in dangling:
            print(f"- {entity_name}.{field_name} -> {missing} (not declared)")
        print()

    cycles = find_cycles(result)
    if cycles:
        print("=== CYCLES ===")
        for cycle in cycles:
            print("- " + " -> ".join(cycle + [cycle[0]]))
        print()

    print("=== DEPENDENCY ORDER ===")
    print(", ".join(dependency_order(result)) or "(empty)")
