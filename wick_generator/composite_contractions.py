from wick_generator.DiagVertex import vertices_rank, vertices_to_string
from wick_generator.helper.print_level import PrintLevel


def generate_composite_contractions(ops, elementary_contractions, minrank, maxrank, print_level=PrintLevel.No):
    """
    Generate all composite contractions by backtracking over elementary contractions.
    :param ops: a list of DiagOperator objects
    :param elementary_contractions: a list of elementary contractions (tuples of DiagVertex)
    :param minrank: the min number of uncontracted operators
    :param maxrank: the max number of uncontracted operators
    :param print_level: the PrintLevel of diagnostic output
    :return: a list of composite contractions, each a tuple of non-decreasing elementary contraction indices

    Every node of the search tree (including the empty contraction) is a candidate.
    The children of a node add one elementary contraction, with index not smaller than the last one,
    that fits in the uncontracted legs.
    The tree is traversed depth first with an explicit stack, children visited in increasing index order.
    """
    if print_level >= PrintLevel.Summary:
        print("\n    Contractions found by backtracking:")
        print("\n      N   Op. Rank  Elementary      Uncontracted operators")
        print("                    Contractions")
        print("    " + "-" * 58)

    n_elementary = len(elementary_contractions)
    results = []

    stack = [((), tuple(op.vertex for op in ops))]
    while stack:
        chosen, free = stack.pop()

        rank = vertices_rank(free)
        if rank < minrank:
            continue  # contracting further only lowers the rank

        if rank <= maxrank:
            results.append(chosen)
            if print_level >= PrintLevel.Summary:
                print(f"    {len(results):>3} {rank:>7}   {str(list(chosen)):<15} {vertices_to_string(free)}")

        children = []
        for c in range(chosen[-1] if chosen else 0, n_elementary):
            contraction = elementary_contractions[c]
            if all(f.contains(v) for f, v in zip(free, contraction)):
                children.append((chosen + (c,), tuple(f - v for f, v in zip(free, contraction))))
        stack.extend(reversed(children))

    if print_level >= PrintLevel.Summary:
        print(f"\n    Total contractions: {len(results)}")

    return results
