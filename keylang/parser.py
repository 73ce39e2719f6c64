from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from lark import Lark, Token, Tree

from .ast import (
    AssignStmt,
    Binary,
    BlockStmt,
    BreakStmt,
    Call,
    Color,
    DeclStmt,
    Expr,
    ExprStmt,
    FunctionDef,
    Index,
    InputCase,
    InputStmt,
    Key,
    ListLiteral,
    Literal,
    Located,
    LoopStmt,
    Name,
    Param,
    Program,
    ReturnStmt,
    Stmt,
    Unary,
)
from .types import BOOL, COLOR, KEY, PRINTABLE, Type, TypeSystemError, int_range, list_of

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    lexer="basic",
    start="program",
    propagate_positions=True,
    maybe_placeholders=False,
)

_TYPE_RULES = frozenset({"int_type", "list_type", "color_type", "key_type", "string_type", "bool_type"})

_SIMPLE_TYPES = {
    "color_type": COLOR,
    "key_type": KEY,
    "string_type": PRINTABLE,
    "bool_type": BOOL,
}


class ParseError(ValueError):
    """
    Raised by the AST builder for input the grammar accepts but the language
    does not, such as `int<5, 2>`.
    """

    def __init__(self, message: str, *, loc: Optional[Located]) -> None:
        if loc is not None:
            message = f"{loc.line}:{loc.column}: {message}"
        super().__init__(message)
        self.loc = loc


def parse_program(source: str) -> Program:
    tree = _PARSER.parse(source)
    return _build_program(tree)


def parse_file(path: Path) -> Program:
    return parse_program(Path(path).read_text(encoding="utf-8"))


def _name(node: Tree) -> str:
    return str(node.data)


def _loc(node: Union[Tree, Token]) -> Located:
    if isinstance(node, Token):
        return Located(line=node.line, column=node.column)
    meta = node.meta
    if getattr(meta, "empty", True):
        return Located(line=0, column=0)
    return Located(line=meta.line, column=meta.column)


def _subtrees(node: Tree) -> List[Tree]:
    return [child for child in node.children if isinstance(child, Tree)]


def _build_program(tree: Tree) -> Program:
    functions = [_build_function(child) for child in _subtrees(tree)]
    return Program(functions=functions)


def _build_function(tree: Tree) -> FunctionDef:
    return_type: Optional[Type] = None
    params: List[Param] = []
    name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
    for child in tree.children[:-1]:
        if isinstance(child, Tree) and _name(child) == "params":
            params = [_build_param(p) for p in _subtrees(child)]
        elif isinstance(child, Tree) and _name(child) in _TYPE_RULES:
            return_type = _build_type(child)
    body = _build_stmt(tree.children[-1])
    return FunctionDef(name=name_token.value, params=params, return_type=return_type, body=body, loc=_loc(tree))


def _build_param(tree: Tree) -> Param:
    type_node, name_token = tree.children
    return Param(name=name_token.value, type=_build_type(type_node))


def _build_type(tree: Tree) -> Type:
    kind = _name(tree)
    simple = _SIMPLE_TYPES.get(kind)
    if simple is not None:
        return simple
    try:
        if kind == "int_type":
            if not tree.children:
                return int_range(0)
            low, high = tree.children
            return int_range(int(low), int(high))
        if kind == "list_type":
            element_node, length = tree.children
            return list_of(_build_type(element_node), int(length))
    except TypeSystemError as exc:
        raise ParseError(str(exc), loc=_loc(tree)) from exc
    raise ParseError(f"unknown type '{kind}'", loc=_loc(tree))


def _build_stmt(tree: Tree) -> Stmt:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "block":
        return BlockStmt(loc=loc, statements=[_build_stmt(child) for child in _subtrees(tree)])
    if kind == "loop_stmt":
        return LoopStmt(loc=loc, body=_build_stmt(tree.children[0]))
    if kind == "input_stmt":
        return InputStmt(loc=loc, cases=[_build_input_case(child) for child in _subtrees(tree)])
    if kind == "break_stmt":
        return BreakStmt(loc=loc)
    if kind == "decl_stmt":
        children = list(tree.children)
        mutable = isinstance(children[0], Token) and children[0].type == "MUT"
        if mutable:
            children = children[1:]
        type_node, name_token, value = children
        return DeclStmt(
            loc=loc,
            name=name_token.value,
            type=_build_type(type_node),
            value=_build_expr(value),
            mutable=mutable,
        )
    if kind == "return_stmt":
        return ReturnStmt(loc=loc, value=_build_expr(tree.children[0]))
    if kind == "assign_stmt":
        target, value = tree.children
        return AssignStmt(loc=loc, target=target.value, value=_build_expr(value))
    if kind == "expr_stmt":
        return ExprStmt(loc=loc, value=_build_expr(tree.children[0]))
    raise ParseError(f"unexpected statement node '{kind}'", loc=loc)


def _build_input_case(tree: Tree) -> InputCase:
    key_node, body = tree.children
    return InputCase(key=_build_key(key_node), body=_build_stmt(body), loc=_loc(tree))


def _build_key(tree: Tree) -> Key:
    return Key(tree.children[0].value)


def _build_args(tree: Tree) -> List[Expr]:
    args = next((child for child in _subtrees(tree) if _name(child) == "args"), None)
    if args is None:
        return []
    return [_build_expr(child) for child in args.children]


def _build_expr(node: Union[Tree, Token]) -> Expr:
    if isinstance(node, Token):
        raise ParseError(f"unexpected token {node.value!r}", loc=_loc(node))
    kind = _name(node)
    loc = _loc(node)
    if kind == "true_lit":
        return Literal(loc=loc, value=True)
    if kind == "false_lit":
        return Literal(loc=loc, value=False)
    if kind == "int_lit":
        return Literal(loc=loc, value=int(node.children[0]))
    if kind == "string_lit":
        return Literal(loc=loc, value=node.children[0].value[1:-1])
    if kind == "red_lit":
        return Literal(loc=loc, value=Color.RED)
    if kind == "white_lit":
        return Literal(loc=loc, value=Color.WHITE)
    if kind == "key":
        return Literal(loc=loc, value=_build_key(node))
    if kind == "var":
        return Name(loc=loc, ident=node.children[0].value)
    if kind == "unary":
        target, op = node.children
        return Unary(loc=loc, op=op.value, target=target.value)
    if kind == "call":
        return Call(loc=loc, func=node.children[0].value, args=_build_args(node))
    if kind == "list_lit":
        return ListLiteral(loc=loc, elements=_build_args(node))
    if kind == "index":
        value, index = node.children
        return Index(loc=loc, value=_build_expr(value), index=_build_expr(index))
    if kind == "binary":
        left, op, right = node.children
        return Binary(loc=loc, op=op.value, left=_build_expr(left), right=_build_expr(right))
    raise ParseError(f"unexpected expression node '{kind}'", loc=loc)
