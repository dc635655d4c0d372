from fractions import Fraction

from wick_generator.Tensor import Tensor
from wick_generator.Term import SymbolicTerm


class Equation:
    def __init__(self, lhs, rhs, factor=1):
        """
        A contribution to a many-body equation: lhs += factor * rhs.
        :param lhs: the Tensor of the left-hand side
        :param rhs: a SymbolicTerm without second-quantized operators
        :param factor: the coefficient of rhs
        """
        if not isinstance(lhs, Tensor):
            raise TypeError(f"Invalid lhs, given '{lhs.__class__.__name__}', required 'Tensor'.")
        if not isinstance(rhs, SymbolicTerm):
            raise TypeError(f"Invalid rhs, given '{rhs.__class__.__name__}', required 'SymbolicTerm'.")
        if rhs.rank != 0:
            raise ValueError(f"Invalid rhs '{rhs}', second-quantized operators are not allowed.")
        self._lhs = lhs
        self._rhs = rhs
        self._factor = Fraction(factor)

    @property
    def lhs(self):
        return self._lhs

    @property
    def rhs(self):
        return self._rhs

    @property
    def factor(self):
        return self._factor

    @property
    def comparison_tuple(self):
        return self.lhs, self.rhs, self.factor

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, Equation):
            raise TypeError(f"Cannot compare between 'Equation' and '{other.__class__.__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple == other.comparison_tuple

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple != other.comparison_tuple

    def __repr__(self):
        return f"{self.lhs} += {self.factor} {self.rhs}"

    def latex(self, osi=None):
        """
        Translate to latex form.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string of latex format
        """
        factor = self.factor
        if factor.denominator != 1:
            factor = f"\\frac{{{factor.numerator}}}{{{factor.denominator}}}"
        return f"{self.lhs.latex(osi)} \\mathrel{{+}}= {factor} {self.rhs.latex(osi)}"
