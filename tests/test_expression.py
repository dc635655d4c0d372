import pytest
from fractions import Fraction
from wick_generator.Expression import Expression, string_to_expr, string_to_term
from wick_generator.mo_space import make_default_spaces


osi = make_default_spaces()


def test_string_to_term():
    term, coeff = string_to_term("-1/2 f^{v0}_{o0} a+(o1) a-(v1)", osi)
    assert coeff == Fraction(-1, 2)
    assert len(term.tensors) == 1
    assert term.rank == 2
    assert str(term) == "f^{v0}_{o0} a+(o1) a-(v1)"

    term, coeff = string_to_term("-f^{v0}_{o0}", osi)
    assert coeff == -1
    assert str(term) == "f^{v0}_{o0}"

    term, coeff = string_to_term("3", osi)
    assert coeff == 3
    assert str(term) == ""


def test_string_to_term_error():
    with pytest.raises(ValueError):
        string_to_term("t^{o0}", osi)
    with pytest.raises(ValueError):
        string_to_term("t^{x0}_{o0}", osi)


def test_string_to_expr():
    expr = string_to_expr("f^{v0}_{o0} t^{o0}_{v0}", osi)
    assert len(expr) == 1
    assert str(expr) == "f^{v0}_{o0} t^{o0}_{v0}"


def test_string_to_expr_combine():
    expr = string_to_expr("1/4 t^{o0,o1}_{v0,v1} v^{v0,v1}_{o0,o1}\n"
                          "-1/4 t^{o1,o0}_{v0,v1} v^{v0,v1}_{o0,o1}\n", osi)
    assert len(expr) == 1
    assert list(expr.terms.values()) == [Fraction(1, 2)]


def test_arithmetic():
    e = string_to_expr("f^{v0}_{o0} t^{o0}_{v0}", osi)
    assert str(e + e) == "2 f^{v0}_{o0} t^{o0}_{v0}"
    assert str(e * Fraction(1, 2)) == "1/2 f^{v0}_{o0} t^{o0}_{v0}"
    assert str(e * -1) == "-f^{v0}_{o0} t^{o0}_{v0}"
    assert len(e - e) == 0
    assert e - e == Expression()

    with pytest.raises(TypeError):
        e * 0.5
    with pytest.raises(TypeError):
        e.add("f^{v0}_{o0}")


def test_canonicalize():
    expr = Expression()
    for text in ["t^{o3}_{v2} f^{v2}_{o3}", "t^{o0}_{v0} f^{v0}_{o0}"]:
        term, coeff = string_to_term(text, osi)
        expr.add(term, coeff)
    assert len(expr) == 2

    canonical = expr.canonicalize()
    assert len(canonical) == 1
    assert str(canonical) == "2 f^{v0}_{o0} t^{o0}_{v0}"


def test_latex():
    expr = string_to_expr("f^{v0}_{o0} t^{o0}_{v0}", osi)
    assert expr.latex(osi) == "f^{ a }_{ i } t^{ i }_{ a }"
    assert (expr * Fraction(-1, 4)).latex(osi) == "- \\frac{1}{4} f^{ a }_{ i } t^{ i }_{ a }"
