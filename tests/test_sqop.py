import pytest
from wick_generator.Index import Index
from wick_generator.SQOperator import SecondQuantizedOperator, SQOperatorType
from wick_generator.mo_space import make_default_spaces


osi = make_default_spaces()


def make_sq(op_type, name, osi):
    return SecondQuantizedOperator(op_type, Index.from_name(name, osi))


def test_init():
    a = make_sq(SQOperatorType.Creation, "o0", osi)
    assert a.is_creation()
    assert a.index == Index(0, 0, 'o')
    assert a.type == SQOperatorType.Creation

    with pytest.raises(TypeError):
        SecondQuantizedOperator('+', Index(0, 0, 'o'))
    with pytest.raises(TypeError):
        SecondQuantizedOperator(SQOperatorType.Creation, "o0")


def test_str():
    assert str(make_sq(SQOperatorType.Creation, "o0", osi)) == "a+(o0)"
    assert str(make_sq(SQOperatorType.Annihilation, "v3", osi)) == "a-(v3)"


def test_lt():
    # creation operators come first
    assert make_sq(SQOperatorType.Creation, "v3", osi) < make_sq(SQOperatorType.Annihilation, "o0", osi)
    assert make_sq(SQOperatorType.Creation, "o1", osi) < make_sq(SQOperatorType.Creation, "v0", osi)
    with pytest.raises(TypeError):
        assert make_sq(SQOperatorType.Creation, "o1", osi) < Index(0, 1, 'o')


def test_reindex():
    a = make_sq(SQOperatorType.Annihilation, "v3", osi)
    b = a.reindex({Index.from_name("v3", osi): Index.from_name("v0", osi)})
    assert b == make_sq(SQOperatorType.Annihilation, "v0", osi)


def test_latex():
    assert make_sq(SQOperatorType.Creation, "o0", osi).latex(osi) == "\\hat{a}^{\\dagger}_{i}"
    assert make_sq(SQOperatorType.Annihilation, "v1", osi).latex(osi) == "\\hat{a}_{b}"
