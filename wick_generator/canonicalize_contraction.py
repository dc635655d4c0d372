from itertools import permutations

from wick_generator.DiagVertex import vertices_signature, vertices_to_string
from wick_generator.helper.print_level import PrintLevel


def contraction_signature(ops, permuted_contractions, ops_perm):
    """
    The key used to rank equivalent forms of a contraction.
    :param ops: the list of DiagOperator in the original order
    :param permuted_contractions: the sorted contractions expressed in permuted operator order
    :param ops_perm: the permutation of operators
    :return: a tuple of (operator labels and vertices, contraction vertices)
    """
    ops_part = tuple((ops[i].label, ops[i].vertex.signature()) for i in ops_perm)
    contractions_part = tuple(vertices_signature(contraction) for contraction in permuted_contractions)
    return ops_part, contractions_part


def canonicalize_contraction(ops, contractions, print_level=PrintLevel.No):
    """
    Find the canonical ordering of the operators and contractions of a composite contraction.
    :param ops: a list of DiagOperator objects
    :param contractions: a list of elementary contractions (tuples of DiagVertex, one per operator)
    :param print_level: the PrintLevel of diagnostic output
    :return: a tuple of (permuted operators, permuted and sorted contractions)

    Operators connected by a contraction keep their relative order, so a permutation is admissible
    only when every operator is placed to the right of all connected operators originally on its left.
    Among the admissible permutations, the one giving the smallest signature is chosen.
    The operators have an even number of legs, thus the reordering does not change the sign.
    """
    for op in ops:
        if op.rank() % 2 != 0:
            raise ValueError(f"Cannot canonicalize contractions of operator {op} with odd rank {op.rank()}.")

    n_ops = len(ops)

    # connected operators to the left of each operator
    left_connections = [set() for _ in range(n_ops)]
    for contraction in contractions:
        connected = [i for i, vertex in enumerate(contraction) if vertex.rank() > 0]
        for i in connected:
            left_connections[i].update(j for j in connected if j < i)

    if print_level >= PrintLevel.Detailed:
        print("\n  Contraction canonicalization")
        print("\n  Operators connected to the left:")
        for i, connections in enumerate(left_connections):
            print(f"    {i}: {sorted(connections)}")

    best = None
    for ops_perm in permutations(range(n_ops)):
        placed = set()
        allowed = True
        for i in ops_perm:
            if not left_connections[i] <= placed:
                allowed = False
                break
            placed.add(i)

        if print_level >= PrintLevel.Detailed:
            print(f"  Operator permutation: {list(ops_perm)} is {'allowed' if allowed else 'not allowed!'}")

        if not allowed:
            continue

        permuted = sorted(tuple(contraction[i] for i in ops_perm) for contraction in contractions)
        signature = contraction_signature(ops, permuted, ops_perm)
        if best is None or signature < best[0]:
            best = signature, ops_perm, permuted

    _, best_perm, best_contractions = best

    if print_level >= PrintLevel.Detailed:
        print(f"\n  Best permutation of operators: {list(best_perm)}")
        print("  Canonical contraction:")
        print("    " + "  ".join(ops[i].label for i in best_perm))
        for contraction in best_contractions:
            print(f"    {vertices_to_string(contraction)}")

    return [ops[i] for i in best_perm], best_contractions
