from wick_generator.DiagOperator import make_operator
from wick_generator.DiagVertex import DiagVertex, vertices_space
from wick_generator.elementary_contractions import generate_elementary_contractions
from wick_generator.mo_space import OrbitalSpaceInfo, SpaceType, make_default_spaces


osi = make_default_spaces()
osi_general = OrbitalSpaceInfo()
osi_general.add_space('a', SpaceType.General, ['u', 'v', 'w', 'x', 'y', 'z'])


def operators(*exprs):
    ops = []
    for expr in exprs:
        (op,), _ = next(iter(expr))
        ops.append(op)
    return ops


def test_pairwise():
    ops = operators(make_operator("f", ["v->o"], osi), make_operator("t", ["o->v"], osi))
    contractions = generate_elementary_contractions(ops, osi, 3)
    assert len(contractions) == 2

    # occupied: creation on the left operator, annihilation on the right one
    assert contractions[0] == (DiagVertex([1, 0], [0, 0]), DiagVertex([0, 0], [1, 0]))
    # unoccupied: annihilation on the left operator, creation on the right one
    assert contractions[1] == (DiagVertex([0, 0], [0, 1]), DiagVertex([0, 1], [0, 0]))
    assert [vertices_space(c) for c in contractions] == [0, 1]


def test_pairwise_order():
    # t on the left cannot be contracted with f on the right
    ops = operators(make_operator("t", ["o->v"], osi), make_operator("f", ["v->o"], osi))
    assert generate_elementary_contractions(ops, osi, 3) == []


def test_general():
    ops = operators(make_operator("A", ["a->a"], osi_general), make_operator("B", ["a->a"], osi_general))
    contractions = generate_elementary_contractions(ops, osi_general, 3)
    assert contractions == [(DiagVertex([0], [1]), DiagVertex([1], [0])),
                            (DiagVertex([1], [0]), DiagVertex([0], [1])),
                            (DiagVertex([1], [1]), DiagVertex([1], [1]))]


def test_general_max_cumulant():
    ops = operators(make_operator("A", ["a->a"], osi_general), make_operator("B", ["a->a"], osi_general))
    assert len(generate_elementary_contractions(ops, osi_general, 1)) == 2
    assert len(generate_elementary_contractions(ops, osi_general, 0)) == 0


def test_general_three_operators():
    ops = operators(make_operator("A", ["aa->aa"], osi_general), make_operator("B", ["a->a"], osi_general),
                    make_operator("C", ["a->a"], osi_general))
    contractions = generate_elementary_contractions(ops, osi_general, 4)

    # every contraction connects at least two operators and has the same number of cre and ann legs
    for contraction in contractions:
        assert sum(1 for v in contraction if v.rank() > 0) >= 2
        assert sum(v.cre(0) for v in contraction) == sum(v.ann(0) for v in contraction)
    assert len(set(contractions)) == len(contractions)

    # the largest one contracts all legs
    assert (DiagVertex([2], [2]), DiagVertex([1], [1]), DiagVertex([1], [1])) in contractions
