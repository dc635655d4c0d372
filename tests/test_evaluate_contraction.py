import pytest
from fractions import Fraction
from wick_generator.DiagOperator import make_operator
from wick_generator.evaluate_contraction import evaluate_contraction, combinatorial_factor, contraction_tensors_sqops
from wick_generator.elementary_contractions import generate_elementary_contractions
from wick_generator.mo_space import OrbitalSpaceInfo, SpaceType, make_default_spaces


osi = make_default_spaces()
osi_general = OrbitalSpaceInfo()
osi_general.add_space('a', SpaceType.General, ['u', 'v', 'w', 'x', 'y', 'z'])


def operators(*exprs):
    return [op for expr in exprs for (op,), _ in expr]


def test_tensors_sqops():
    ops = operators(make_operator("v", ["vv->oo"], osi))
    tensors, sqops, op_map = contraction_tensors_sqops(ops, osi)
    assert [str(t) for t in tensors] == ["v^{v1,v0}_{o0,o1}"]
    assert [str(s) for s in sqops] == ["a+(o0)", "a+(o1)", "a-(v0)", "a-(v1)"]
    # annihilation operators are laid out in reversed order
    assert op_map[(0, 1, False, 1)] == 2
    assert op_map[(0, 1, False, 0)] == 3


def test_pairwise():
    ops = operators(make_operator("f", ["v->o"], osi), make_operator("t", ["o->v"], osi))
    e_occ, e_unocc = generate_elementary_contractions(ops, osi, 3)
    term, coeff = evaluate_contraction(ops, [e_unocc, e_occ], 1, osi)
    assert str(term) == "f^{v0}_{o0} t^{o0}_{v0}"
    assert coeff == 1


def test_pairwise_residual():
    ops = operators(make_operator("f", ["v->v"], osi), make_operator("t", ["o->v"], osi))
    contractions = generate_elementary_contractions(ops, osi, 3)
    assert len(contractions) == 1
    term, coeff = evaluate_contraction(ops, contractions, Fraction(1, 3), osi)
    assert str(term) == "f^{v1}_{v0} t^{o0}_{v1} a+(v0) a-(o0)"
    assert coeff == Fraction(1, 3)


def test_repeated():
    ops = operators(make_operator("v", ["vv->oo"], osi), make_operator("t", ["oo->vv"], osi))
    e_occ, e_unocc = generate_elementary_contractions(ops, osi, 3)
    contractions = [e_unocc, e_unocc, e_occ, e_occ]
    assert combinatorial_factor(ops, contractions) == 4

    term, coeff = evaluate_contraction(ops, contractions, 1, osi)
    assert str(term) == "t^{o0,o1}_{v1,v0} v^{v1,v0}_{o0,o1}"
    assert coeff == Fraction(1, 4)


def test_repeated_triples():
    ops = operators(make_operator("v", ["vvv->ooo"], osi), make_operator("t", ["ooo->vvv"], osi))
    e_occ, e_unocc = generate_elementary_contractions(ops, osi, 3)
    # 3 * 3 * 2 * 2 ways over 3! orderings of the same contraction
    assert combinatorial_factor(ops, [e_occ] * 3) == 6
    assert combinatorial_factor(ops, [e_unocc] * 3 + [e_occ] * 3) == 36

    term, coeff = evaluate_contraction(ops, [e_unocc] * 3 + [e_occ] * 3, 1, osi)
    assert coeff == Fraction(1, 36)


def test_combinatorial_factor():
    ops = operators(make_operator("v", ["vv->oo"], osi), make_operator("t", ["o->v"], osi),
                    make_operator("t", ["o->v"], osi))
    e_occ_1, e_occ_2, e_unocc_1, e_unocc_2 = generate_elementary_contractions(ops, osi, 3)
    assert combinatorial_factor(ops, [e_occ_1]) == 2
    assert combinatorial_factor(ops, [e_unocc_2, e_unocc_1, e_occ_2, e_occ_1]) == 4


def test_general():
    ops = operators(make_operator("A", ["a->a"], osi_general), make_operator("B", ["a->a"], osi_general))
    eta, gamma, cumulant = generate_elementary_contractions(ops, osi_general, 3)

    term, coeff = evaluate_contraction(ops, [gamma], 1, osi_general)
    assert str(term) == "A^{a1}_{a0} B^{a3}_{a2} gamma1^{a0}_{a3} a+(a2) a-(a1)"
    assert coeff == -1

    term, coeff = evaluate_contraction(ops, [eta], 1, osi_general)
    assert str(term) == "A^{a1}_{a0} B^{a3}_{a2} eta1^{a2}_{a1} a+(a0) a-(a3)"
    assert coeff == 1

    term, coeff = evaluate_contraction(ops, [cumulant], 1, osi_general)
    assert str(term) == "A^{a1}_{a0} B^{a3}_{a2} lambda2^{a0,a2}_{a3,a1}"
    assert coeff == -1

    term, coeff = evaluate_contraction(ops, [], 1, osi_general)
    assert str(term) == "A^{a1}_{a0} B^{a3}_{a2} a+(a0) a+(a2) a-(a1) a-(a3)"
    assert coeff == -1


def test_missing_leg():
    ops = operators(make_operator("f", ["v->o"], osi), make_operator("t", ["o->v"], osi))
    e_occ, _ = generate_elementary_contractions(ops, osi, 3)
    with pytest.raises(RuntimeError):
        evaluate_contraction(ops, [e_occ, e_occ], 1, osi)
