from fractions import Fraction

from wick_generator.DiagOperator import DiagOperator, DiagOpExpression, operators_rank
from wick_generator.DiagVertex import vertices_rank
from wick_generator.Expression import Expression
from wick_generator.canonicalize_contraction import canonicalize_contraction
from wick_generator.composite_contractions import generate_composite_contractions
from wick_generator.elementary_contractions import generate_elementary_contractions
from wick_generator.evaluate_contraction import evaluate_contraction
from wick_generator.helper.Timer import Timer
from wick_generator.helper.print_level import PrintLevel


class WickTheorem:
    def __init__(self, osi, max_cumulant=3, print_level=PrintLevel.No):
        """
        Contract products of operators using the generalized Wick's theorem.
        :param osi: the OrbitalSpaceInfo object
        :param max_cumulant: the max number of creation (or annihilation) legs of a general-space contraction
        :param print_level: the PrintLevel of diagnostic output
        """
        self._osi = osi
        self._max_cumulant = 0
        self._print_level = PrintLevel.No
        self.set_max_cumulant(max_cumulant)
        self.set_print(print_level)

        self.elementary_contractions = []
        self.composite_contractions = []

    @property
    def osi(self):
        return self._osi

    @property
    def max_cumulant(self):
        return self._max_cumulant

    @property
    def print_level(self):
        return self._print_level

    def set_max_cumulant(self, n):
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"Invalid max cumulant level '{n}', required a non-negative integer.")
        self._max_cumulant = n

    def set_print(self, print_level):
        self._print_level = PrintLevel(print_level)

    def contract(self, factor, ops, minrank, maxrank):
        """
        Contract a product of operators.
        :param factor: the overall factor
        :param ops: a list of DiagOperator or a DiagOpExpression
        :param minrank: the min number of uncontracted second-quantized operators
        :param maxrank: the max number of uncontracted second-quantized operators
        :return: an Expression of all contributions with rank in [minrank, maxrank]
        """
        for rank in (minrank, maxrank):
            if not isinstance(rank, int) or rank < 0:
                raise ValueError(f"Invalid rank '{rank}', required a non-negative integer.")

        if isinstance(ops, DiagOpExpression):
            result = Expression()
            for ops_list, f in ops:
                result += self.contract(Fraction(factor) * f, list(ops_list), minrank, maxrank)
            return result

        for op in ops:
            if not isinstance(op, DiagOperator):
                raise TypeError(f"Invalid operator, given '{op.__class__.__name__}', required 'DiagOperator'.")
            if op.rank() % 2 != 0:
                raise ValueError(f"Cannot contract operator {op} with odd rank {op.rank()}.")

        verbose = self._print_level >= PrintLevel.Summary
        if verbose:
            print(f"\nContracting the operators: {' '.join(str(op) for op in ops)}")

        if minrank > maxrank:
            if verbose:
                print(f"\n  Empty rank window [{minrank}, {maxrank}]: no contractions generated")
            return Expression()

        with Timer("Generating elementary contractions", verbose=verbose):
            if verbose:
                print("\n- Step 1. Generating elementary contractions")
            self.elementary_contractions = generate_elementary_contractions(ops, self._osi, self._max_cumulant,
                                                                            self._print_level)

        with Timer("Generating composite contractions", verbose=verbose):
            if verbose:
                print("\n- Step 2. Generating composite contractions")
            self.composite_contractions = generate_composite_contractions(ops, self.elementary_contractions,
                                                                          minrank, maxrank, self._print_level)

        with Timer("Processing contractions", verbose=verbose):
            if verbose:
                print("\n- Step 3. Processing contractions")
            result = self.process_contractions(factor, ops, minrank, maxrank)

        return result

    def process_contractions(self, factor, ops, minrank, maxrank):
        """
        Canonicalize and evaluate all composite contractions with rank in [minrank, maxrank].
        :param factor: the overall factor
        :param ops: a list of DiagOperator objects
        :param minrank: the min number of uncontracted second-quantized operators
        :param maxrank: the max number of uncontracted second-quantized operators
        :return: an Expression
        """
        result = Expression()

        n_processed = 0
        ops_rank = operators_rank(ops)
        for composite in self.composite_contractions:
            contractions = [self.elementary_contractions[c] for c in composite]
            term_rank = ops_rank - sum(vertices_rank(contraction) for contraction in contractions)
            if term_rank < minrank or term_rank > maxrank:
                continue

            n_processed += 1
            if self._print_level >= PrintLevel.Basic:
                print(f"\n\n  Contraction: {n_processed}  Operator rank: {term_rank}")

            canonical_ops, canonical_contractions = canonicalize_contraction(ops, contractions, self._print_level)
            term, coeff = evaluate_contraction(canonical_ops, canonical_contractions, factor, self._osi,
                                               self._print_level)

            sign = term.canonicalize()
            if sign == 0:
                continue
            result.add(term, coeff * sign)

            if self._print_level >= PrintLevel.Summary:
                print(f"\n    term: {coeff * sign} {term}")

        if n_processed == 0 and self._print_level >= PrintLevel.Summary:
            print("\n  No contractions generated\n")

        return result
