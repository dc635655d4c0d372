import pytest
from wick_generator.DiagOperator import DiagOperator, make_operator
from wick_generator.DiagVertex import DiagVertex
from wick_generator.canonicalize_contraction import canonicalize_contraction
from wick_generator.elementary_contractions import generate_elementary_contractions
from wick_generator.evaluate_contraction import evaluate_contraction
from wick_generator.mo_space import make_default_spaces


osi = make_default_spaces()


def operators(*exprs):
    return [op for expr in exprs for (op,), _ in expr]


def test_sort_contractions():
    ops = operators(make_operator("f", ["v->o"], osi), make_operator("t", ["o->v"], osi))
    e_occ, e_unocc = generate_elementary_contractions(ops, osi, 3)

    # f and t are connected, so their order is kept
    canonical_ops, canonical_contractions = canonicalize_contraction(ops, [e_occ, e_unocc])
    assert [op.label for op in canonical_ops] == ['f', 't']
    assert canonical_contractions == [e_unocc, e_occ]


def test_disconnected_operators():
    ops = operators(make_operator("t", ["o->v"], osi), make_operator("f", ["v->o"], osi))
    canonical_ops, canonical_contractions = canonicalize_contraction(ops, [])
    assert [op.label for op in canonical_ops] == ['f', 't']
    assert canonical_contractions == []


def test_odd_rank():
    op = DiagOperator("x", DiagVertex([1, 0], [0, 0]))
    with pytest.raises(ValueError):
        canonicalize_contraction([op, op], [])


def test_permutation_sign():
    ops = operators(make_operator("v", ["vv->oo"], osi), make_operator("t", ["o->v"], osi),
                    make_operator("f", ["v->o"], osi))
    elementary = generate_elementary_contractions(ops, osi, 3)
    contractions = [elementary[0]]

    # f is not contracted and moves to the front, t stays to the right of v
    canonical_ops, canonical_contractions = canonicalize_contraction(ops, contractions)
    assert [op.label for op in canonical_ops] == ['f', 'v', 't']
    assert canonical_contractions == [(DiagVertex.zero(2),) + elementary[0][:2]]

    # the reordering does not change the value of the contraction
    term, coeff = evaluate_contraction(ops, contractions, 1, osi)
    sign = term.canonicalize()
    canonical_term, canonical_coeff = evaluate_contraction(canonical_ops, canonical_contractions, 1, osi)
    canonical_sign = canonical_term.canonicalize()
    assert term == canonical_term
    assert coeff * sign == canonical_coeff * canonical_sign


def test_idempotent():
    ops = operators(make_operator("v", ["vv->oo"], osi), make_operator("t", ["o->v"], osi),
                    make_operator("f", ["v->o"], osi))
    elementary = generate_elementary_contractions(ops, osi, 3)
    canonical_ops, canonical_contractions = canonicalize_contraction(ops, elementary)
    assert canonicalize_contraction(canonical_ops, canonical_contractions) == (canonical_ops, canonical_contractions)
