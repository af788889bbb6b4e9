from __future__ import annotations

import ast
from collections.abc import Mapping
from typing import List

import pytest

from yieldwalk.engine import traverse
from yieldwalk.steps import Scope, collect_kinds, collect_scopes, count_kinds, fold_binary, max_depth


def _num(value: float) -> dict:
    return {"type": "NumericLiteral", "value": value}


def _binary(op: str, left: dict, right: dict) -> dict:
    return {"type": "BinaryExpression", "left": left, "operator": op, "right": right}


def _program(*statements: dict) -> dict:
    return {"type": "Program", "sourceType": "module", "body": list(statements), "directives": []}


def _add_call() -> dict:
    """Babel tree of ``add(1 + 2 + 3, 4 + 5)``."""
    return _program(
        {
            "type": "ExpressionStatement",
            "expression": {
                "type": "CallExpression",
                "callee": {"type": "Identifier", "name": "add"},
                "arguments": [
                    _binary("+", _binary("+", _num(1), _num(2)), _num(3)),
                    _binary("+", _num(4), _num(5)),
                ],
            },
        }
    )


def test_collect_kinds_lists_babel_tree_in_preorder() -> None:
    tree = _program(
        {
            "type": "VariableDeclaration",
            "declarations": [
                {
                    "type": "VariableDeclarator",
                    "id": {"type": "Identifier", "name": "a"},
                    "init": _num(1),
                }
            ],
            "kind": "const",
        }
    )

    assert traverse(tree, collect_kinds, []) == [
        "Program",
        "VariableDeclaration",
        "VariableDeclarator",
        "Identifier",
        "NumericLiteral",
    ]


def test_collect_kinds_on_python_ast() -> None:
    assert traverse(ast.parse("a = 1"), collect_kinds, []) == [
        "Module",
        "Assign",
        "Name",
        "Store",
        "Constant",
    ]


def test_fold_binary_reports_running_totals() -> None:
    vals: List[float] = []

    traverse(_add_call(), fold_binary(on_result=vals.append), None)

    assert vals == [3, 6, 9]


def test_fold_binary_on_python_ast() -> None:
    vals: List[float] = []

    traverse(ast.parse("add(1 + 2 + 3, 4 + 5)"), fold_binary(on_result=vals.append), None)

    assert vals == [3, 6, 9]


def test_fold_binary_returns_the_root_expression_value() -> None:
    tree = _binary("*", _binary("-", _num(10), _num(4)), _num(2))

    assert traverse(tree, fold_binary(operators="+-*/"), None) == 12


def test_fold_binary_ignores_unselected_operators() -> None:
    vals: List[float] = []
    tree = _program(
        {"type": "ExpressionStatement", "expression": _binary("*", _num(2), _binary("+", _num(1), _num(1)))}
    )

    traverse(tree, fold_binary(on_result=vals.append), None)

    assert vals == [2]


def test_fold_binary_rejects_non_numeric_operands() -> None:
    tree = _binary("+", {"type": "Identifier", "name": "x"}, _num(1))

    with pytest.raises(ValueError, match="Non-numeric operand"):
        traverse(tree, fold_binary(), None)


def test_fold_binary_rejects_unknown_operators() -> None:
    with pytest.raises(ValueError, match="\\*\\*"):
        fold_binary(operators=["+", "**"])


def test_count_kinds_and_max_depth() -> None:
    counts = traverse(_add_call(), count_kinds, None)

    assert counts["NumericLiteral"] == 5
    assert counts["BinaryExpression"] == 3
    assert counts["Program"] == 1
    assert traverse(_add_call(), max_depth, None) == 6
    assert traverse(_num(1), max_depth, None) == 1


def _function_declaration(name: str, *body: dict) -> dict:
    return {
        "type": "FunctionDeclaration",
        "id": {"type": "Identifier", "name": name},
        "generator": False,
        "async": False,
        "params": [],
        "body": {"type": "BlockStatement", "body": list(body), "directives": []},
    }


def _var(name: str, value: float) -> dict:
    return {
        "type": "VariableDeclaration",
        "declarations": [
            {"type": "VariableDeclarator", "id": {"type": "Identifier", "name": name}, "init": _num(value)}
        ],
        "kind": "var",
    }


def test_collect_scopes_nests_function_scopes() -> None:
    # function foo() { var a = 1; function bar() { var b = 2; } }
    tree = _program(_function_declaration("foo", _var("a", 1), _function_declaration("bar", _var("b", 2))))

    scope = traverse(tree, collect_scopes, Scope())

    assert [node["type"] for node in scope.decl] == ["FunctionDeclaration"]
    assert [node["type"] for node in scope.children[0].decl] == [
        "VariableDeclarator",
        "FunctionDeclaration",
    ]
    assert [node["id"]["name"] for node in scope.children[0].children[0].decl] == ["b"]


def test_collect_scopes_opens_block_and_loop_scopes() -> None:
    loop = {
        "type": "ForStatement",
        "init": _var("i", 0),
        "test": None,
        "update": None,
        "body": {"type": "BlockStatement", "body": [_var("j", 1)], "directives": []},
    }

    scope = traverse(_program(loop), collect_scopes, Scope())

    assert scope.decl == []
    loop_scope = scope.children[0]
    assert [node["id"]["name"] for node in loop_scope.decl] == ["i"]
    assert [node["id"]["name"] for node in loop_scope.children[0].decl] == ["j"]


class _FrozenNode(Mapping):
    """Read-only mapping node, as produced by some tree deserialisers."""

    def __init__(self, **fields) -> None:
        self._fields = fields

    def __getitem__(self, key):
        return self._fields[key]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


def test_fold_binary_reads_non_dict_mapping_nodes() -> None:
    tree = _FrozenNode(
        type="BinaryExpression",
        left=_FrozenNode(type="NumericLiteral", value=2),
        operator="+",
        right=_FrozenNode(type="NumericLiteral", value=5),
    )

    assert traverse(tree, fold_binary(), None) == 7


def test_collect_scopes_reads_non_dict_mapping_declarations() -> None:
    declarator = _FrozenNode(type="VariableDeclarator", id=_FrozenNode(type="Identifier", name="a"))
    tree = _FrozenNode(
        type="Program",
        body=[_FrozenNode(type="VariableDeclaration", declarations=[declarator], kind="var")],
    )

    scope = traverse(tree, collect_scopes, Scope())

    assert scope.decl == [declarator]
