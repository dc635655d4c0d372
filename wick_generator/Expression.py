import re
from collections import Counter
from fractions import Fraction
from math import factorial

from wick_generator.Equation import Equation
from wick_generator.Index import Index
from wick_generator.SQOperator import SecondQuantizedOperator, SQOperatorType
from wick_generator.Tensor import Tensor
from wick_generator.Term import SymbolicTerm


class Expression:
    """
    A sum of symbolic terms with rational coefficients, i.e., {SymbolicTerm: Fraction}.
    Terms with zero coefficient are removed.
    """

    def __init__(self):
        self._terms = dict()

    @property
    def terms(self):
        return self._terms

    def add(self, term, coeff=1):
        """
        Add a term to this expression.
        :param term: a SymbolicTerm
        :param coeff: the coefficient of this term
        """
        if not isinstance(term, SymbolicTerm):
            raise TypeError(f"Invalid term, given '{term.__class__.__name__}', required 'SymbolicTerm'.")
        value = self._terms.get(term, 0) + Fraction(coeff)
        if value == 0:
            self._terms.pop(term, None)
        else:
            self._terms[term] = value

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        return iter(sorted(self._terms.items()))

    def __contains__(self, term):
        return term in self._terms

    def __getitem__(self, term):
        return self._terms[term]

    def __eq__(self, other):
        if not isinstance(other, Expression):
            raise TypeError(f"Cannot compare between 'Expression' and '{other.__class__.__name__}'.")
        return self._terms == other.terms

    def __add__(self, other):
        result = Expression()
        for term, coeff in self._terms.items():
            result.add(term, coeff)
        for term, coeff in other.terms.items():
            result.add(term, coeff)
        return result

    def __sub__(self, other):
        return self + other * -1

    def __mul__(self, other):
        if not isinstance(other, (int, Fraction)):
            raise TypeError(f"Cannot multiply 'Expression' by '{other.__class__.__name__}'.")
        result = Expression()
        for term, coeff in self._terms.items():
            result.add(term, coeff * other)
        return result

    __rmul__ = __mul__

    def canonicalize(self):
        """ Return a new Expression with all terms in canonical form. """
        result = Expression()
        for term, coeff in self._terms.items():
            term = term.copy()
            sign = term.canonicalize()
            if sign != 0:
                result.add(term, coeff * sign)
        return result

    def to_manybody_equation(self, label):
        """
        Project every term onto its operator string to form the terms of a many-body equation.
        :param label: the label of the left-hand-side tensor, e.g., 'r' for residuals
        :return: a list of Equation objects

        The term c T {a+(p) a+(q) a-(s) a-(r)} contributes to label^{rs}_{pq}, i.e., creation indices
        go to the lower and annihilation indices (in reversed order) go to the upper indices of the left-hand side,
        the same layout used for operator tensors. The left-hand side is then brought to canonical order.
        Operators of the same space and type are equivalent in the sum over indices,
        thus the coefficient is multiplied by the factorial of each of their counts.
        """
        equations = []
        for term, coeff in self:
            lower = [sqop.index for sqop in term.sqops if sqop.is_creation()]
            upper = [sqop.index for sqop in term.sqops if not sqop.is_creation()]

            for count in Counter((sqop.index.space, sqop.is_creation()) for sqop in term.sqops).values():
                coeff *= factorial(count)

            lhs, sign = Tensor(label, lower, upper[::-1]).canonicalize()

            rhs = SymbolicTerm(term.tensors)
            sign *= rhs.canonicalize()
            if sign == 0:
                continue
            equations.append(Equation(lhs, rhs, coeff * sign))

        return equations

    @staticmethod
    def _coeff_to_string(coeff, term):
        if str(term) == "":
            return str(coeff)
        if coeff == 1:
            return f"{term}"
        if coeff == -1:
            return f"-{term}"
        return f"{coeff} {term}"

    def __repr__(self):
        return "\n".join(self._coeff_to_string(coeff, term) for term, coeff in self)

    def latex(self, osi=None):
        """
        Translate to latex form.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string of latex format
        """
        out = []
        for i, (term, coeff) in enumerate(self):
            sign = "-" if coeff < 0 else ("+" if i != 0 else "")
            value = abs(coeff)
            if value.denominator != 1:
                value = f"\\frac{{{value.numerator}}}{{{value.denominator}}}"
            elif value == 1 and term.latex(osi):
                value = ""
            out.append(f"{sign} {value} {term.latex(osi)}".strip())
        return " ".join(out)


_tensor_pattern = re.compile(r'^([A-Za-z]\w*)\^\{([^}]*)\}_\{([^}]*)\}$')
_sqop_pattern = re.compile(r'^a([+-])\(([^)]+)\)$')
_coeff_pattern = re.compile(r'^[+-]?\d+(/\d+)?$')


def _string_to_indices(text, osi):
    return [Index.from_name(name, osi) for name in text.split(",") if name.strip()]


def string_to_term(text, osi):
    """
    Parse a term written as '1/4 t^{o0,o1}_{v0,v1} v^{v0,v1}_{o0,o1} a+(o2) a-(v2)'.
    :param text: the string of a single term
    :param osi: the OrbitalSpaceInfo that defines the space labels
    :return: a tuple of (SymbolicTerm, coefficient)
    """
    tokens = text.split()
    coeff = Fraction(1)
    if tokens and _coeff_pattern.match(tokens[0]):
        coeff = Fraction(tokens.pop(0))
    elif tokens and tokens[0] in ("+", "-"):
        coeff = Fraction(-1 if tokens.pop(0) == "-" else 1)
    elif tokens and tokens[0][0] in "+-":
        coeff = Fraction(-1 if tokens[0][0] == "-" else 1)
        tokens[0] = tokens[0][1:]

    term = SymbolicTerm()
    for token in tokens:
        match = _tensor_pattern.match(token)
        if match is not None:
            label, upper, lower = match.groups()
            term.add(Tensor(label, _string_to_indices(lower, osi), _string_to_indices(upper, osi)))
            continue

        match = _sqop_pattern.match(token)
        if match is not None:
            op_type = SQOperatorType.Creation if match.group(1) == '+' else SQOperatorType.Annihilation
            term.add(SecondQuantizedOperator(op_type, Index.from_name(match.group(2), osi)))
            continue

        raise ValueError(f"Cannot parse '{token}' in term '{text}'.")

    return term, coeff


def string_to_expr(text, osi):
    """
    Parse an expression, one term per line, and bring every term to canonical form.
    :param text: the string of the expression
    :param osi: the OrbitalSpaceInfo that defines the space labels
    :return: an Expression
    """
    expr = Expression()
    for line in text.splitlines():
        if not line.strip():
            continue
        term, coeff = string_to_term(line, osi)
        sign = term.canonicalize()
        if sign != 0:
            expr.add(term, coeff * sign)
    return expr
