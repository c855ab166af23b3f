"""Canonical type-definition merging.

Combines the type-system definitions of several GraphQL documents into a
single ``DocumentNode``:

- Definitions are keyed by name; first-seen order is preserved
- Object, interface and input types union their fields (first definition of a
  field wins; a redefinition with a different type is a conflict)
- Enums union their values, unions their member types
- ``extend type ...`` nodes are folded into their base definition; an
  extension with no base definition becomes the definition
- ``schema`` definitions and extensions fold into one; an operation bound to
  two different root types is a conflict
- Directive usages, interfaces and arguments are de-duplicated; directive
  definitions union their arguments and locations
- Executable definitions (operations, fragments) are dropped
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    Node,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeSystemDefinitionNode,
    TypeSystemExtensionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    print_ast,
)

from graphql_projects.exceptions import SchemaMergeError

_SCHEMA_KEY = "schema"

_DEFINITION_FOR_EXTENSION: Dict[type, type] = {
    ObjectTypeExtensionNode: ObjectTypeDefinitionNode,
    InterfaceTypeExtensionNode: InterfaceTypeDefinitionNode,
    InputObjectTypeExtensionNode: InputObjectTypeDefinitionNode,
    EnumTypeExtensionNode: EnumTypeDefinitionNode,
    UnionTypeExtensionNode: UnionTypeDefinitionNode,
    ScalarTypeExtensionNode: ScalarTypeDefinitionNode,
    SchemaExtensionNode: SchemaDefinitionNode,
}


def filter_type_definitions(document: DocumentNode) -> DocumentNode:
    """Return ``document`` without operations and fragments."""
    kept = tuple(
        definition
        for definition in document.definitions
        if isinstance(definition, (TypeSystemDefinitionNode, TypeSystemExtensionNode))
    )
    return DocumentNode(definitions=kept)


def merge_type_defs(documents: Iterable[Optional[DocumentNode]]) -> DocumentNode:
    """Merge the type-system definitions of ``documents`` into one document.

    Args:
        documents: Parsed documents, in priority order. ``None`` entries are skipped.

    Returns:
        A new ``DocumentNode``; inputs are not mutated.

    Raises:
        SchemaMergeError: On conflicting definitions.

    Example:
        >>> merged = merge_type_defs([parse("type Query { a: Int }"),
        ...                           parse("extend type Query { b: Int }")])
        >>> print(print_ast(merged))
        type Query {
          a: Int
          b: Int
        }
    """
    merged: Dict[str, Node] = {}
    for document in documents:
        if document is None:
            continue
        for definition in filter_type_definitions(document).definitions:
            key = _definition_key(definition)
            incoming = _as_definition(definition)
            if key in merged:
                merged[key] = _merge_nodes(merged[key], incoming, key)
            else:
                merged[key] = incoming
    return DocumentNode(definitions=tuple(merged.values()))


def _definition_key(node: Node) -> str:
    if isinstance(node, (SchemaDefinitionNode, SchemaExtensionNode)):
        return _SCHEMA_KEY
    name = node.name.value  # type: ignore[attr-defined]
    if node.kind == "directive_definition":
        return f"@{name}"
    return name


def _as_definition(node: Node) -> Node:
    definition_cls = _DEFINITION_FOR_EXTENSION.get(type(node))
    if definition_cls is None:
        return node
    values = {key: getattr(node, key, None) for key in node.keys if key != "loc"}
    values["description"] = None
    return definition_cls(**values)


def _replace(node: Node, **changes: Any) -> Node:
    values = {key: getattr(node, key, None) for key in node.keys}
    values.update(changes)
    return node.__class__(**values)


def _merge_nodes(existing: Node, incoming: Node, key: str) -> Node:
    if type(existing) is not type(incoming):
        raise SchemaMergeError(
            f"Cannot merge '{key}': defined both as {existing.kind} and {incoming.kind}",
            context={"type": key, "kinds": [existing.kind, incoming.kind]},
        )

    changes: Dict[str, Any] = {}
    keys = existing.keys

    if "description" in keys:
        changes["description"] = existing.description or incoming.description  # type: ignore[attr-defined]
    if "directives" in keys:
        changes["directives"] = _union(existing.directives, incoming.directives, print_ast)  # type: ignore[attr-defined]
    if "interfaces" in keys:
        changes["interfaces"] = _union(existing.interfaces, incoming.interfaces, _name_of)  # type: ignore[attr-defined]
    if "fields" in keys:
        changes["fields"] = _merge_fields(existing.fields, incoming.fields, key)  # type: ignore[attr-defined]
    if "values" in keys:
        changes["values"] = _union(existing.values, incoming.values, _name_of)  # type: ignore[attr-defined]
    if "types" in keys:
        changes["types"] = _union(existing.types, incoming.types, _name_of)  # type: ignore[attr-defined]
    if "operation_types" in keys:
        changes["operation_types"] = _merge_operation_types(
            existing.operation_types, incoming.operation_types  # type: ignore[attr-defined]
        )
    if "locations" in keys:
        # Directive definitions
        changes["arguments"] = _union(existing.arguments, incoming.arguments, _name_of)  # type: ignore[attr-defined]
        changes["locations"] = _union(existing.locations, incoming.locations, _value_of)  # type: ignore[attr-defined]
        changes["repeatable"] = bool(existing.repeatable or incoming.repeatable)  # type: ignore[attr-defined]

    return _replace(existing, **changes)


def _merge_fields(
    existing: Optional[Sequence[Node]],
    incoming: Optional[Sequence[Node]],
    type_name: str,
) -> Tuple[Node, ...]:
    by_name: Dict[str, Node] = {_name_of(f): f for f in existing or ()}
    for field in incoming or ():
        name = _name_of(field)
        current = by_name.get(name)
        if current is None:
            by_name[name] = field
            continue
        current_type = print_ast(current.type)  # type: ignore[attr-defined]
        incoming_type = print_ast(field.type)  # type: ignore[attr-defined]
        if current_type != incoming_type:
            raise SchemaMergeError(
                f"Field '{type_name}.{name}' changed type from '{current_type}' to '{incoming_type}'",
                context={"type": type_name, "field": name},
            )
        if "arguments" in current.keys:
            by_name[name] = _replace(
                current,
                arguments=_union(current.arguments, field.arguments, _name_of),  # type: ignore[attr-defined]
            )
    return tuple(by_name.values())


def _merge_operation_types(
    existing: Optional[Sequence[Node]],
    incoming: Optional[Sequence[Node]],
) -> Tuple[Node, ...]:
    by_operation: Dict[Any, Node] = {op.operation: op for op in existing or ()}  # type: ignore[attr-defined]
    for op in incoming or ():
        current = by_operation.get(op.operation)  # type: ignore[attr-defined]
        if current is None:
            by_operation[op.operation] = op  # type: ignore[attr-defined]
            continue
        if _name_of(current.type) != _name_of(op.type):  # type: ignore[attr-defined]
            raise SchemaMergeError(
                f"Schema {op.operation.value} root is both "  # type: ignore[attr-defined]
                f"'{_name_of(current.type)}' and '{_name_of(op.type)}'",  # type: ignore[attr-defined]
                context={"operation": op.operation.value},  # type: ignore[attr-defined]
            )
    return tuple(by_operation.values())


def _union(
    existing: Optional[Sequence[Node]],
    incoming: Optional[Sequence[Node]],
    key: Callable[[Node], str],
) -> Tuple[Node, ...]:
    result: List[Node] = []
    seen: set[str] = set()
    for node in (*(existing or ()), *(incoming or ())):
        k = key(node)
        if k in seen:
            continue
        seen.add(k)
        result.append(node)
    return tuple(result)


def _name_of(node: Node) -> str:
    return node.name.value  # type: ignore[attr-defined]


def _value_of(node: Node) -> str:
    return node.value  # type: ignore[attr-defined]


__all__ = ["filter_type_definitions", "merge_type_defs"]
