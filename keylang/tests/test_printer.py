from __future__ import annotations

import pytest

from keylang import ast
from keylang.parser import parse_program
from keylang.printer import format_expr, format_program, format_stmt

SAMPLE = (
    "int<0, 10> f(int<0, 3> a) { mut int<0, 10> x = 5; "
    "loop { input { W => { x++; } S => break; } } return x; }"
)


def test_format_program_layout():
    assert format_program(parse_program(SAMPLE)) == (
        "int<0, 10> f(int<0, 3> a) {\n"
        "    mut int<0, 10> x = 5;\n"
        "    loop {\n"
        "        input {\n"
        "            W => {\n"
        "                x++;\n"
        "            }\n"
        "            S => break;\n"
        "        }\n"
        "    }\n"
        "    return x;\n"
        "}\n"
    )


def test_indent_is_a_parameter():
    stmt = parse_program("f() { loop { break; } }").functions[0].body.statements[0]
    assert format_stmt(stmt, 0) == "loop {\n    break;\n}"
    assert format_stmt(stmt, 2) == "        loop {\n            break;\n        }"
    # no state carried between calls
    assert format_stmt(stmt, 0) == "loop {\n    break;\n}"


@pytest.mark.parametrize(
    "src",
    [
        "1 - (2 - 3)",
        "(1 - 2) - 3",
        '("a" + "b") * 3',
        '"a" + "b" * 3',
        "xs[i]",
        "go(x++, [red, white], \"s\")",
    ],
)
def test_expression_round_trip(src):
    (stmt,) = parse_program(f"f() {{ {src}; }}").functions[0].body.statements
    text = format_expr(stmt.value)
    (again,) = parse_program(f"f() {{ {text}; }}").functions[0].body.statements
    assert format_expr(again.value) == text
    assert text == src.replace("(1 - 2) - 3", "1 - 2 - 3")


def test_program_round_trip():
    src = """
    list<color, 2> pair() { return [red, white]; }
    main() {
        mut int<0, 100> score = 0;
        bool on = true;
        loop {
            input { W => score++; A => {} D => { break; } }
            println("score " + score);
        }
    }
    """
    text = format_program(parse_program(src))
    assert format_program(parse_program(text)) == text


def test_format_literals():
    loc = ast.Located(line=1, column=1)
    assert format_expr(ast.Literal(loc=loc, value=True)) == "true"
    assert format_expr(ast.Literal(loc=loc, value=ast.Key.S)) == "S"
    assert format_expr(ast.Literal(loc=loc, value=ast.Color.WHITE)) == "white"
    assert format_expr(ast.Literal(loc=loc, value="hi")) == '"hi"'
