from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from keylang import ast
from keylang.parser import ParseError, parse_file, parse_program
from keylang.types import BOOL, COLOR, KEY, MAX_VALUE, PRINTABLE, int_range, list_of


def _body(src: str):
    return parse_program(f"f() {{ {src} }}").functions[0].body.statements


def test_parse_function_signature():
    prog = parse_program("int<0, 10> add(int<0, 5> a, int<0, 5> b) { return a + b; }")
    assert len(prog.functions) == 1
    fn = prog.functions[0]
    assert fn.name == "add"
    assert fn.return_type == int_range(0, 10)
    assert [(p.name, p.type) for p in fn.params] == [("a", int_range(0, 5)), ("b", int_range(0, 5))]
    assert isinstance(fn.body, ast.BlockStmt)
    ret = fn.body.statements[0]
    assert isinstance(ret, ast.ReturnStmt)
    assert isinstance(ret.value, ast.Binary)
    assert ret.value.op == "+"


def test_parse_function_without_return_type():
    fn = parse_program("main() { }").functions[0]
    assert fn.return_type is None
    assert fn.params == []
    assert fn.body.statements == []


def test_parse_types():
    prog = parse_program("f(int n, color c, key k, string s, bool b, list<list<int<1, 4>, 2>, 3> xs) { }")
    types = [p.type for p in prog.functions[0].params]
    assert types == [
        int_range(0, MAX_VALUE),
        COLOR,
        KEY,
        PRINTABLE,
        BOOL,
        list_of(list_of(int_range(1, 4), 2), 3),
    ]


def test_invalid_int_bounds_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse_program("f(int<5, 2> n) { }")
    assert excinfo.value.loc.line == 1


def test_declarations():
    mut_decl, const_decl = _body("mut int<0, 10> x = 5; string s = \"hi\";")
    assert isinstance(mut_decl, ast.DeclStmt)
    assert mut_decl.mutable is True
    assert mut_decl.type == int_range(0, 10)
    assert mut_decl.value == ast.Literal(loc=mut_decl.value.loc, value=5)
    assert const_decl.mutable is False
    assert const_decl.value.value == "hi"


def test_literals():
    stmts = _body("true; false; 7; \"x\"; W; D; red; white;")
    values = [stmt.value.value for stmt in stmts]
    assert values == [True, False, 7, "x", ast.Key.W, ast.Key.D, ast.Color.RED, ast.Color.WHITE]


def test_key_letters_only_reserved_alone():
    (stmt,) = _body("Wide = 1;")
    assert isinstance(stmt, ast.AssignStmt)
    assert stmt.target == "Wide"


def test_keywords_are_reserved():
    with pytest.raises(UnexpectedInput):
        parse_program("f() { bool loop = true; }")


def test_multiplication_binds_tighter():
    (stmt,) = _body('"a" + "b" * 3;')
    expr = stmt.value
    assert expr.op == "+"
    assert isinstance(expr.right, ast.Binary)
    assert expr.right.op == "*"


def test_addition_is_left_associative():
    (stmt,) = _body("1 - 2 + 3;")
    expr = stmt.value
    assert expr.op == "+"
    assert expr.left.op == "-"


def test_parentheses_group():
    (stmt,) = _body("1 - (2 - 3);")
    assert stmt.value.right.op == "-"


def test_unary_call_index_and_list():
    inc, dec, call, idx, lst, empty = _body("x++; y--; go(1, z); xs[2]; [1, 2]; [];")
    assert inc.value == ast.Unary(loc=inc.value.loc, op="++", target="x")
    assert dec.value.op == "--"
    assert call.value.func == "go"
    assert len(call.value.args) == 2
    assert isinstance(call.value.args[1], ast.Name)
    assert isinstance(idx.value, ast.Index)
    assert idx.value.index.value == 2
    assert [e.value for e in lst.value.elements] == [1, 2]
    assert empty.value.elements == []


def test_control_flow():
    loop, inp = _body("loop { break; } input { W => x++; A => { return 1; } }")
    assert isinstance(loop, ast.LoopStmt)
    assert isinstance(loop.body.statements[0], ast.BreakStmt)
    assert isinstance(inp, ast.InputStmt)
    assert [case.key for case in inp.cases] == [ast.Key.W, ast.Key.A]
    assert isinstance(inp.cases[0].body, ast.ExprStmt)
    assert isinstance(inp.cases[1].body, ast.BlockStmt)


def test_comments_are_ignored():
    prog = parse_program(
        """
        // leading comment
        f() {
            // inside
            bool b = true; // trailing
        }
        """
    )
    assert len(prog.functions[0].body.statements) == 1


def test_locations_are_recorded():
    prog = parse_program("f() {\n  bool b = true;\n}")
    stmt = prog.functions[0].body.statements[0]
    assert (stmt.loc.line, stmt.loc.column) == (2, 3)


def test_empty_source_rejected():
    with pytest.raises(UnexpectedInput):
        parse_program("")


def test_parse_file(tmp_path):
    src = tmp_path / "main.key"
    src.write_text("main() { println(\"hi\"); }")
    prog = parse_file(src)
    assert prog.functions[0].name == "main"
