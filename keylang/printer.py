from __future__ import annotations

from . import ast

INDENT = "    "

_PRECEDENCE = {"+": 1, "-": 1, "*": 2}


def format_literal(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (ast.Key, ast.Color)):
        return value.value
    return "<invalid literal>"


def _operand(expr: ast.Expr, parent_op: str, is_right: bool) -> str:
    text = format_expr(expr)
    if not isinstance(expr, ast.Binary):
        return text
    child = _PRECEDENCE.get(expr.op, 0)
    parent = _PRECEDENCE.get(parent_op, 0)
    if child < parent or (is_right and child == parent):
        return f"({text})"
    return text


def format_expr(expr: ast.Expr) -> str:
    if isinstance(expr, ast.Literal):
        return format_literal(expr.value)
    if isinstance(expr, ast.ListLiteral):
        return "[" + ", ".join(format_expr(e) for e in expr.elements) + "]"
    if isinstance(expr, ast.Name):
        return expr.ident
    if isinstance(expr, ast.Unary):
        return f"{expr.target}{expr.op}"
    if isinstance(expr, ast.Call):
        args = ", ".join(format_expr(a) for a in expr.args)
        return f"{expr.func}({args})"
    if isinstance(expr, ast.Index):
        value = format_expr(expr.value)
        if isinstance(expr.value, ast.Binary):
            value = f"({value})"
        return f"{value}[{format_expr(expr.index)}]"
    if isinstance(expr, ast.Binary):
        left = _operand(expr.left, expr.op, is_right=False)
        right = _operand(expr.right, expr.op, is_right=True)
        return f"{left} {expr.op} {right}"
    return "<invalid expr>"


def format_stmt(stmt: ast.Stmt, indent: int = 0) -> str:
    return INDENT * indent + _format_stmt_inline(stmt, indent)


def _format_stmt_inline(stmt: ast.Stmt, indent: int) -> str:
    # The first line carries no padding; nested lines are padded to `indent`.
    if isinstance(stmt, ast.BlockStmt):
        if not stmt.statements:
            return "{}"
        inner = "\n".join(format_stmt(s, indent + 1) for s in stmt.statements)
        return "{\n" + inner + "\n" + INDENT * indent + "}"
    if isinstance(stmt, ast.LoopStmt):
        return "loop " + _format_stmt_inline(stmt.body, indent)
    if isinstance(stmt, ast.InputStmt):
        pad = INDENT * (indent + 1)
        cases = "\n".join(
            f"{pad}{case.key.value} => {_format_stmt_inline(case.body, indent + 1)}" for case in stmt.cases
        )
        return "input {\n" + cases + "\n" + INDENT * indent + "}"
    if isinstance(stmt, ast.BreakStmt):
        return "break;"
    if isinstance(stmt, ast.DeclStmt):
        prefix = "mut " if stmt.mutable else ""
        return f"{prefix}{stmt.type} {stmt.name} = {format_expr(stmt.value)};"
    if isinstance(stmt, ast.AssignStmt):
        return f"{stmt.target} = {format_expr(stmt.value)};"
    if isinstance(stmt, ast.ReturnStmt):
        return f"return {format_expr(stmt.value)};"
    if isinstance(stmt, ast.ExprStmt):
        return f"{format_expr(stmt.value)};"
    return "<invalid stmt>"


def format_function(fn: ast.FunctionDef) -> str:
    params = ", ".join(f"{p.type} {p.name}" for p in fn.params)
    header = f"{fn.name}({params})"
    if fn.return_type is not None:
        header = f"{fn.return_type} {header}"
    return f"{header} {_format_stmt_inline(fn.body, 0)}"


def format_program(program: ast.Program) -> str:
    return "\n\n".join(format_function(fn) for fn in program.functions) + "\n"
