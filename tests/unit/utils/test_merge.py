from __future__ import annotations

import pytest
from graphql import parse, print_ast

from graphql_projects.exceptions import SchemaMergeError
from graphql_projects.utils.merge import filter_type_definitions, merge_type_defs


def _merged_sdl(*sources: str) -> str:
    return print_ast(merge_type_defs(parse(s) for s in sources))


def test_merge_type_defs_unions_fields_of_same_type() -> None:
    sdl = _merged_sdl(
        "type Query { users: [String] }",
        "type Query { posts: [String] }",
    )
    assert sdl == "type Query {\n  users: [String]\n  posts: [String]\n}"


def test_merge_type_defs_folds_extensions_into_definition() -> None:
    sdl = _merged_sdl(
        "extend type User { email: String }",
        "type User { id: ID! }",
    )
    assert "extend" not in sdl
    assert "id: ID!" in sdl
    assert "email: String" in sdl


def test_lone_extension_becomes_definition() -> None:
    sdl = _merged_sdl("extend type Query { hello: String }")
    assert sdl == "type Query {\n  hello: String\n}"


def test_same_field_with_same_type_is_kept_once() -> None:
    sdl = _merged_sdl("type Query { a: Int }", "type Query { a: Int }")
    assert sdl.count("a: Int") == 1


def test_field_type_conflict_raises() -> None:
    with pytest.raises(SchemaMergeError) as excinfo:
        _merged_sdl("type Query { a: Int }", "type Query { a: String }")
    assert "Query.a" in str(excinfo.value)


def test_kind_conflict_raises() -> None:
    with pytest.raises(SchemaMergeError):
        _merged_sdl("type Thing { id: ID }", "enum Thing { A }")


def test_enum_values_and_union_members_are_unioned() -> None:
    sdl = _merged_sdl(
        "enum Role { ADMIN }\nunion Result = A",
        "enum Role { ADMIN USER }\nunion Result = B",
    )
    assert "enum Role {\n  ADMIN\n  USER\n}" in sdl
    assert "union Result = A | B" in sdl


def test_schema_definitions_merge_operation_types() -> None:
    sdl = _merged_sdl(
        "schema { query: Q }",
        "extend schema { mutation: M }",
    )
    assert "query: Q" in sdl
    assert "mutation: M" in sdl
    assert "extend schema" not in sdl


def test_conflicting_root_types_raise() -> None:
    with pytest.raises(SchemaMergeError):
        _merged_sdl("schema { query: Q }", "schema { query: Other }")


def test_operations_and_fragments_are_dropped() -> None:
    document = parse(
        "type Query { me: String }\n"
        "query Me { me }\n"
        "fragment F on Query { me }\n"
    )
    filtered = filter_type_definitions(document)
    assert [d.kind for d in filtered.definitions] == ["object_type_definition"]
    assert "query Me" not in print_ast(merge_type_defs([document]))


def test_merge_skips_missing_documents() -> None:
    merged = merge_type_defs([None, parse("scalar Date")])
    assert print_ast(merged) == "scalar Date"


def test_directive_definitions_union_arguments_and_locations() -> None:
    merged = merge_type_defs(
        [
            parse("directive @auth(role: String) on FIELD_DEFINITION"),
            parse("directive @auth(scope: String) on OBJECT | FIELD_DEFINITION"),
        ]
    )

    (directive,) = merged.definitions
    assert [arg.name.value for arg in directive.arguments] == ["role", "scope"]
    assert [loc.value for loc in directive.locations] == ["FIELD_DEFINITION", "OBJECT"]
