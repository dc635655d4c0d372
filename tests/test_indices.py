import pytest
from wick_generator.Index import Index
from wick_generator.Indices import Indices, IndicesAntisymmetric, IndicesNonsymmetric, sort_and_count_inversions
from wick_generator.mo_space import make_default_spaces


osi = make_default_spaces()


def make_indices(names, osi, indices_type='antisymmetric'):
    return Indices.make_indices([Index.from_name(i, osi) for i in names.split(",")], indices_type)


def test_sort_and_count_inversions():
    assert sort_and_count_inversions([3, 1, 2]) == ([1, 2, 3], 2)
    assert sort_and_count_inversions([1, 2, 3]) == ([1, 2, 3], 0)
    assert sort_and_count_inversions([]) == ([], 0)


def test_init():
    a = make_indices("o0,o1", osi, 'asymm')
    assert isinstance(a, IndicesAntisymmetric)
    assert a.size == 2
    assert str(a) == "o0,o1"
    assert Index.from_name("o1", osi) in a

    assert isinstance(make_indices("o0", osi, 'nsymm'), IndicesNonsymmetric)


def test_init_error():
    # repeated indices
    with pytest.raises(ValueError):
        make_indices("o0,o0", osi)

    # not a list of Index
    with pytest.raises(TypeError):
        IndicesAntisymmetric("o0,o1")
    with pytest.raises(TypeError):
        IndicesAntisymmetric(["o0", "o1"])

    # unknown symmetry
    with pytest.raises(KeyError):
        make_indices("o0", osi, 'symmetric')


def test_eq():
    assert make_indices("o0,v1", osi) == make_indices("o0,v1", osi)
    assert make_indices("o0,v1", osi) != make_indices("v1,o0", osi)
    with pytest.raises(TypeError):
        assert make_indices("o0", osi) == make_indices("o0", osi, 'nonsymmetric')


def test_lt():
    assert make_indices("v0", osi) < make_indices("o0,o1", osi)
    assert make_indices("o0,o1", osi) < make_indices("o0,v0", osi)


def test_canonicalize():
    a, sign = make_indices("o1,o0", osi).canonicalize()
    assert a == make_indices("o0,o1", osi)
    assert sign == -1

    a, sign = make_indices("v0,o1,o0", osi).canonicalize()
    assert a == make_indices("o0,o1,v0", osi)
    assert sign == -1

    a, sign = make_indices("v0,o1,o0", osi, 'nonsymmetric').canonicalize()
    assert a == make_indices("v0,o1,o0", osi, 'nonsymmetric')
    assert sign == 1


def test_reindex():
    a = make_indices("o0,v0", osi)
    b = a.reindex({Index.from_name("v0", osi): Index.from_name("v3", osi)})
    assert b == make_indices("o0,v3", osi)
    assert a == make_indices("o0,v0", osi)


def test_latex():
    assert make_indices("o0,v1", osi).latex(osi) == "{ i b }"
