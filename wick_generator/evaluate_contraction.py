from collections import Counter
from fractions import Fraction
from math import comb, factorial
from sympy.combinatorics import Permutation

from wick_generator.DiagVertex import vertices_rank, vertices_space
from wick_generator.Index import IndexCounter
from wick_generator.SQOperator import SecondQuantizedOperator, SQOperatorType
from wick_generator.Tensor import Tensor
from wick_generator.Term import SymbolicTerm
from wick_generator.helper.print_level import PrintLevel
from wick_generator.mo_space import SpaceType


def contraction_tensors_sqops(ops, osi):
    """
    Assign indices to all legs of a list of operators.
    :param ops: a list of DiagOperator objects
    :param osi: the OrbitalSpaceInfo object
    :return: a tuple of (operator tensors, second-quantized operators, leg map)

    The leg map is {(operator, space, is creation, slot): position in the list of second-quantized operators}.
    For each operator, creation operators are laid out with ascending spaces,
    annihilation operators are laid out in reversed order, i.e., descending spaces and slots.
    The tensor of an operator has creation indices as lower and annihilation indices as upper indices.
    """
    sqops, tensors, op_map = [], [], {}
    counter = IndexCounter(osi)
    n_spaces = osi.num_spaces()

    for o, op in enumerate(ops):
        lower = []
        for s in range(n_spaces):
            for c in range(op.cre(s)):
                index = counter.next_index(s)
                op_map[(o, s, True, c)] = len(sqops)
                sqops.append(SecondQuantizedOperator(SQOperatorType.Creation, index))
                lower.append(index)

        upper = []
        for s in reversed(range(n_spaces)):
            for a in reversed(range(op.ann(s))):
                index = counter.next_index(s)
                op_map[(o, s, False, a)] = len(sqops)
                sqops.append(SecondQuantizedOperator(SQOperatorType.Annihilation, index))
                upper.append(index)
        upper.reverse()

        tensors.append(Tensor(op.label, lower, upper))

    return tensors, sqops, op_map


def _legs_to_positions(contraction, space, offsets, op_map, creation):
    """
    Find the positions of the legs used by a contraction, starting from the first unused slot of each operator.
    :param contraction: an elementary contraction
    :param space: the orbital space of this contraction
    :param offsets: the number of used slots, {(operator, space, is creation): count}, updated in place
    :param op_map: the leg map of contraction_tensors_sqops
    :param creation: look for creation legs if True, annihilation legs otherwise
    :return: a list of positions
    """
    positions = []
    for o, vertex in enumerate(contraction):
        n = vertex.cre(space) if creation else vertex.ann(space)
        start = offsets[(o, space, creation)]
        for slot in range(start, start + n):
            key = (o, space, creation, slot)
            if key not in op_map:
                raise RuntimeError(f"Cannot find leg (operator {o}, space {space}, "
                                   f"{'creation' if creation else 'annihilation'}, slot {slot}) "
                                   f"required by contraction {contraction}.")
            positions.append(op_map[key])
        offsets[(o, space, creation)] = start + n
    return positions


def combinatorial_factor(ops, contractions):
    """
    Compute the number of equivalent ways to apply a list of contractions.
    :param ops: a list of DiagOperator objects
    :param contractions: a list of elementary contractions
    :return: the combinatorial factor as a Fraction

    Each contraction chooses its legs among the uncontracted ones, C(n_free, k) per operator, space and type.
    Applying the same contraction m times is counted m! times, hence the division.
    """
    factor = Fraction(1)
    free = [op.vertex for op in ops]
    for contraction in contractions:
        for o, vertex in enumerate(contraction):
            for s in range(vertex.n_spaces):
                factor *= comb(free[o].cre(s), vertex.cre(s)) * comb(free[o].ann(s), vertex.ann(s))
            free[o] = free[o] - vertex

    for count in Counter(contractions).values():
        factor /= factorial(count)

    return factor


def print_contraction(ops, tensors, contracted, sqops, sign_order):
    """ Print the operator string with one row of marks per contraction. """
    print("\n  Operators: " + " ".join(str(op) for op in ops))
    print("  Tensors:   " + " ".join(str(tensor) for tensor in tensors))
    width = max(len(str(sqop)) for sqop in sqops) + 1 if sqops else 1
    print("  " + "".join(f"{str(sqop):<{width}}" for sqop in sqops))
    for positions in contracted:
        print("  " + "".join(f"{'|' if i in positions else '':<{width}}" for i in range(len(sqops))))
    print("  " + "".join(f"{order:<{width}}" for order in sign_order))


def evaluate_contraction(ops, contractions, factor, osi, print_level=PrintLevel.No):
    """
    Evaluate a composite contraction.
    :param ops: a list of DiagOperator objects
    :param contractions: a list of elementary contractions (tuples of DiagVertex), same operator order as ops
    :param factor: the overall factor
    :param osi: the OrbitalSpaceInfo object
    :param print_level: the PrintLevel of diagnostic output
    :return: a tuple of (SymbolicTerm, coefficient)
    """
    tensors, sqops, op_map = contraction_tensors_sqops(ops, osi)

    offsets = Counter()
    sign_order = [-1] * len(sqops)
    position = 0
    n_contracted = 0
    sign = 1
    index_map = dict()
    contracted = []

    for contraction in contractions:
        rank = vertices_rank(contraction)
        s = vertices_space(contraction)
        n_contracted += rank

        pos_cre = _legs_to_positions(contraction, s, offsets, op_map, True)
        pos_ann = _legs_to_positions(contraction, s, offsets, op_map, False)
        for i in pos_cre + pos_ann:
            sign_order[i] = position
            position += 1
        contracted.append(set(pos_cre + pos_ann))

        space_type = osi.space_type(s)
        if space_type == SpaceType.Occupied:
            # a+(i) a-(j) = delta(i,j)
            index_map[sqops[pos_ann[0]].index] = sqops[pos_cre[0]].index
        elif space_type == SpaceType.Unoccupied:
            # a-(i) a+(j) = delta(i,j), annihilator placed to the left of the creator
            index_map[sqops[pos_cre[0]].index] = sqops[pos_ann[0]].index
            sign *= -1
        else:
            upper = [sqops[i].index for i in pos_cre]
            lower = [sqops[i].index for i in reversed(pos_ann)]
            if rank == 2:
                if pos_cre[0] < pos_ann[0]:
                    label = "gamma1"
                else:
                    label = "eta1"
                    sign *= -1
            else:
                label = f"lambda{rank // 2}"
            tensors.append(Tensor(label, lower, upper))

    # uncontracted operators: creation before annihilation, then by space
    for op_type in (SQOperatorType.Creation, SQOperatorType.Annihilation):
        for s in range(osi.num_spaces()):
            for i, sqop in enumerate(sqops):
                if sign_order[i] == -1 and sqop.index.space == s and sqop.type == op_type:
                    sign_order[i] = position
                    position += 1

    if print_level >= PrintLevel.Basic:
        print_contraction(ops, tensors, contracted, sqops, sign_order)

    if sign_order:
        sign *= Permutation(sign_order).signature()

    residual = [sqop for _, sqop in sorted(zip(sign_order, sqops), key=lambda x: x[0])][n_contracted:]

    comb_factor = combinatorial_factor(ops, contractions)
    factor = Fraction(factor)
    for op in ops:
        factor *= op.factor

    term = SymbolicTerm(tensors, residual)
    term.reindex(index_map)

    if print_level >= PrintLevel.Summary:
        print(f"  sign =                 {sign}")
        print(f"  factor =               {factor}")
        print(f"  combinatorial factor = {comb_factor}")

    return term, sign * factor * comb_factor
