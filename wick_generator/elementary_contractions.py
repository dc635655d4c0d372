from sympy.utilities.iterables import multiset_permutations

from wick_generator.DiagVertex import DiagVertex, vertices_to_string
from wick_generator.helper.integer_partition import integer_partition
from wick_generator.helper.print_level import PrintLevel
from wick_generator.mo_space import SpaceType


def generate_elementary_contractions(ops, osi, max_cumulant, print_level=PrintLevel.No):
    """
    Generate all elementary contractions of a list of diagrammatic operators.
    :param ops: a list of DiagOperator objects
    :param osi: the OrbitalSpaceInfo object
    :param max_cumulant: the max number of creation (or annihilation) legs in a general-space contraction
    :param print_level: the PrintLevel of diagnostic output
    :return: a list of elementary contractions, each a tuple of DiagVertex (one per operator)

    Contractions are generated space by space, following the order of spaces in osi.
    """
    n_spaces = osi.num_spaces()

    if print_level >= PrintLevel.Summary:
        print("\n  Operator   Space   Cre.   Ann.")
        print("  ------------------------------")
        for i, op in enumerate(ops):
            for s in range(n_spaces):
                print(f"  {i:>8} {osi.label(s):>7} {op.cre(s):>6} {op.ann(s):>6}")

    results = []
    for s in range(n_spaces):
        space_type = osi.space_type(s)
        if space_type == SpaceType.Occupied:
            contractions = _pairwise_contractions(ops, s, n_spaces, cre_first=True)
        elif space_type == SpaceType.Unoccupied:
            contractions = _pairwise_contractions(ops, s, n_spaces, cre_first=False)
        else:
            contractions = _general_contractions(ops, s, n_spaces, max_cumulant)

        if print_level >= PrintLevel.Summary:
            print(f"\n  Elementary contractions for space {osi.label(s)}:")
            for i, contraction in enumerate(contractions, len(results) + 1):
                print(f"    {i:5d}: {vertices_to_string(contraction)}")

        results += contractions

    return results


def _pairwise_contractions(ops, space, n_spaces, cre_first):
    """
    Generate all pairwise (delta function) contractions in a given space.
    :param ops: a list of DiagOperator objects
    :param space: the orbital space
    :param n_spaces: the total number of orbital spaces
    :param cre_first: the creation leg is on the left operator if True (occupied), right otherwise (unoccupied)
    :return: a list of elementary contractions
    """
    out = []
    n_ops = len(ops)
    for left in range(n_ops):
        for right in range(left + 1, n_ops):
            i_cre, i_ann = (left, right) if cre_first else (right, left)
            if ops[i_cre].cre(space) * ops[i_ann].ann(space) == 0:
                continue
            contraction = [DiagVertex.zero(n_spaces)] * n_ops
            contraction[i_cre] = DiagVertex.single(n_spaces, space, 1, 0)
            contraction[i_ann] = DiagVertex.single(n_spaces, space, 0, 1)
            out.append(tuple(contraction))
    return out


def _general_contractions(ops, space, n_spaces, max_cumulant):
    """
    Generate all multi-legged contractions (density matrices and cumulants) in a given space.
    :param ops: a list of DiagOperator objects
    :param space: the orbital space
    :param n_spaces: the total number of orbital spaces
    :param max_cumulant: the max number of creation (or annihilation) legs
    :return: a list of elementary contractions

    For k half legs, the k creation (annihilation) legs are distributed among operators
    according to the integer partitions of k, e.g., 3 = 2 + 1 = 1 + 1 + 1.
    Each partition (padded with zeros) is assigned to operators by all its distinct permutations.
    Creation and annihilation distributions are then combined, excluding those touching a single operator.
    """
    out = []
    n_ops = len(ops)
    n_cre = sum(op.cre(space) for op in ops)
    n_ann = sum(op.ann(space) for op in ops)
    max_half_legs = min(n_cre, n_ann, max_cumulant)

    for half_legs in range(1, max_half_legs + 1):
        cre_legs_list, ann_legs_list = [], []

        for part in integer_partition(half_legs, n_ops):
            padded = sorted(part + [0] * (n_ops - len(part)))
            for legs in multiset_permutations(padded):
                if all(op.cre(space) >= n for op, n in zip(ops, legs)):
                    cre_legs_list.append(legs)
                if all(op.ann(space) >= n for op, n in zip(ops, legs)):
                    ann_legs_list.append(legs)

        for cre_legs in cre_legs_list:
            for ann_legs in ann_legs_list:
                n_touched = sum(1 for c, a in zip(cre_legs, ann_legs) if c + a > 0)
                if n_touched < 2:
                    continue
                out.append(tuple(DiagVertex.single(n_spaces, space, c, a) for c, a in zip(cre_legs, ann_legs)))

    return out
