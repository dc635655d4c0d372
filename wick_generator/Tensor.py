from wick_generator.Indices import Indices


class Tensor:
    def __init__(self, label, lower, upper, symmetry='antisymmetric'):
        """
        The tensor class.
        :param label: the tensor label, e.g., 't', 'gamma1'
        :param lower: a list of Index objects (or an Indices object) for lower indices
        :param upper: a list of Index objects (or an Indices object) for upper indices
        :param symmetry: the permutational symmetry within upper and within lower indices
        """
        if not isinstance(label, str) or len(label) == 0:
            raise TypeError(f"Invalid tensor label, given '{label}' ('{label.__class__.__name__}'), "
                            f"required a non-empty 'str'.")
        self._label = label

        self._lower = lower if isinstance(lower, Indices) else Indices.make_indices(lower, symmetry)
        self._upper = upper if isinstance(upper, Indices) else Indices.make_indices(upper, symmetry)

        if self._lower.__class__ is not self._upper.__class__:
            raise TypeError(f"Inconsistent symmetry for lower ('{self._lower.__class__.__name__}') "
                            f"and upper ('{self._upper.__class__.__name__}') indices.")

    @property
    def label(self):
        return self._label

    @property
    def lower(self):
        return self._lower

    @property
    def upper(self):
        return self._upper

    @property
    def symmetry(self):
        return self._lower.symmetry

    @property
    def n_lower(self):
        return self._lower.size

    @property
    def n_upper(self):
        return self._upper.size

    @property
    def size(self):
        return self.n_lower + self.n_upper

    def indices(self):
        """ Return all indices, upper indices first. """
        return self.upper.indices + self.lower.indices

    @property
    def type_key(self):
        """ Tensors sharing this key are interchangeable in a product. """
        return self.label, self.n_upper, self.n_lower, self.symmetry

    @property
    def comparison_tuple(self):
        return self.type_key, self.upper, self.lower

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot compare between 'Tensor' and '{other.__class__.__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple == other.comparison_tuple

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple != other.comparison_tuple

    def __lt__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple < other.comparison_tuple

    def __le__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple <= other.comparison_tuple

    def __gt__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple > other.comparison_tuple

    def __ge__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple >= other.comparison_tuple

    def __hash__(self):
        return hash(self.comparison_tuple)

    def __repr__(self):
        return f"{self.label}^{{{self.upper}}}_{{{self.lower}}}"

    def latex(self, osi=None):
        """
        Translate to latex form.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string of latex format
        """
        return f"{self.label}^{self.upper.latex(osi)}_{self.lower.latex(osi)}"

    def reindex(self, index_map):
        """
        Substitute indices.
        :param index_map: a dictionary of {old Index: new Index}
        :return: a new Tensor
        """
        return Tensor(self.label, self.lower.reindex(index_map), self.upper.reindex(index_map))

    def canonicalize(self):
        """
        Sort the Tensor indices to canonical order.
        :return: a tuple of (tensor with sorted indices, sign)
        """
        upper, upper_sign = self.upper.canonicalize()
        lower, lower_sign = self.lower.canonicalize()
        return Tensor(self.label, lower, upper), upper_sign * lower_sign
