from fractions import Fraction
from math import factorial

from wick_generator.DiagVertex import DiagVertex


class DiagOperator:
    def __init__(self, label, vertex, factor=1):
        """
        The diagrammatic operator class, i.e., a labeled vertex with a scalar prefactor.
        :param label: the operator label, used as the tensor label upon evaluation, e.g., 't'
        :param vertex: a DiagVertex that counts creation/annihilation operators per space
        :param factor: the scalar prefactor
        """
        if not isinstance(label, str) or len(label) == 0:
            raise TypeError(f"Invalid operator label, given '{label}' ('{label.__class__.__name__}'), "
                            f"required a non-empty 'str'.")
        if not isinstance(vertex, DiagVertex):
            raise TypeError(f"Invalid operator vertex, given '{vertex.__class__.__name__}', required 'DiagVertex'.")
        self._label = label
        self._vertex = vertex
        self._factor = Fraction(factor)

    @property
    def label(self):
        return self._label

    @property
    def vertex(self):
        return self._vertex

    @property
    def factor(self):
        return self._factor

    def cre(self, space):
        return self._vertex.cre(space)

    def ann(self, space):
        return self._vertex.ann(space)

    def rank(self):
        return self._vertex.rank()

    @property
    def comparison_tuple(self):
        return self.label, self.vertex, self.factor

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, DiagOperator):
            raise TypeError(f"Cannot compare between 'DiagOperator' and '{other.__class__.__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple == other.comparison_tuple

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple != other.comparison_tuple

    def __lt__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple < other.comparison_tuple

    def __hash__(self):
        return hash(self.comparison_tuple)

    def __repr__(self):
        return f"{self.label}{self.vertex}"


def operators_rank(ops):
    """ Return the total number of second-quantized operators of a list of DiagOperator. """
    return sum(op.rank() for op in ops)


class DiagOpExpression:
    """
    A linear combination of products of diagrammatic operators, i.e., {(op1, op2, ...): factor}.
    """

    def __init__(self, ops=None, factor=1):
        self._terms = dict()
        if ops is not None:
            self.add(ops, factor)

    @property
    def terms(self):
        return self._terms

    def add(self, ops, factor=1):
        """
        Add a product of operators to this expression, terms of zero factor are removed.
        :param ops: a list of DiagOperator objects
        :param factor: the factor of this product
        """
        for op in ops:
            if not isinstance(op, DiagOperator):
                raise TypeError(f"Invalid operator, given '{op.__class__.__name__}', required 'DiagOperator'.")
        key = tuple(ops)
        value = self._terms.get(key, 0) + Fraction(factor)
        if value == 0:
            self._terms.pop(key, None)
        else:
            self._terms[key] = value

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms.items())

    def __eq__(self, other):
        if not isinstance(other, DiagOpExpression):
            raise TypeError(f"Cannot compare between 'DiagOpExpression' and '{other.__class__.__name__}'.")
        return self._terms == other.terms

    def __add__(self, other):
        result = DiagOpExpression()
        for ops, factor in self:
            result.add(ops, factor)
        for ops, factor in other:
            result.add(ops, factor)
        return result

    def __sub__(self, other):
        return self + other * -1

    def __mul__(self, other):
        """ Multiply by a scalar or by another DiagOpExpression (product of operators). """
        result = DiagOpExpression()
        if isinstance(other, DiagOpExpression):
            for ops_l, factor_l in self:
                for ops_r, factor_r in other:
                    result.add(ops_l + ops_r, factor_l * factor_r)
        elif isinstance(other, (int, Fraction)):
            for ops, factor in self:
                result.add(ops, factor * other)
        else:
            raise TypeError(f"Cannot multiply 'DiagOpExpression' by '{other.__class__.__name__}'.")
        return result

    def __rmul__(self, other):
        if isinstance(other, DiagOpExpression):
            return other.__mul__(self)
        return self.__mul__(other)

    def __repr__(self):
        lines = []
        for ops, factor in self:
            lines.append(" ".join([str(factor)] + [str(op) for op in ops]))
        return "\n".join(lines)


def commutator(a, b):
    """ Return the commutator [a, b] = a b - b a of two DiagOpExpression. """
    return a * b - b * a


def make_operator(label, components, osi):
    """
    Create a DiagOpExpression from a list of operator components.
    :param label: the operator label, e.g., 't'
    :param components: a list of strings "<annihilated spaces>-><created spaces>", e.g., ['oo->vv']
    :param osi: the OrbitalSpaceInfo object
    :return: a DiagOpExpression containing one single-operator term per component

    The prefactor of each component is 1 / prod_s (n_cre(s)! n_ann(s)!).
    """
    if isinstance(components, str):
        components = [components]

    result = DiagOpExpression()
    n_spaces = osi.num_spaces()
    for component in components:
        parts = component.replace(" ", "").split("->")
        if len(parts) != 2:
            raise ValueError(f"Invalid operator component '{component}', required '<ann spaces>-><cre spaces>'.")

        ann = [0] * n_spaces
        cre = [0] * n_spaces
        for label_ann in parts[0]:
            ann[osi.label_to_space(label_ann)] += 1
        for label_cre in parts[1]:
            cre[osi.label_to_space(label_cre)] += 1

        factor = Fraction(1)
        for s in range(n_spaces):
            factor /= factorial(cre[s]) * factorial(ann[s])

        result.add([DiagOperator(label, DiagVertex(cre, ann), factor)])
    return result
