from enum import IntEnum

from wick_generator.Index import Index


class SQOperatorType(IntEnum):
    """ Creation operators sort before annihilation operators. """
    Creation = 0
    Annihilation = 1


class SecondQuantizedOperator:
    def __init__(self, op_type, index):
        """
        The second-quantized operator class, i.e., a single creation or annihilation operator.
        :param op_type: a SQOperatorType
        :param index: the Index carried by this operator
        """
        if not isinstance(op_type, SQOperatorType):
            raise TypeError(f"Invalid operator type, given '{op_type.__class__.__name__}', "
                            f"required 'SQOperatorType'.")
        if not isinstance(index, Index):
            raise TypeError(f"Invalid operator index, given '{index.__class__.__name__}', required 'Index'.")
        self._type = op_type
        self._index = index

    @property
    def type(self):
        return self._type

    @property
    def index(self):
        return self._index

    def is_creation(self):
        return self._type == SQOperatorType.Creation

    @property
    def comparison_tuple(self):
        return self.type, self.index

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, SecondQuantizedOperator):
            raise TypeError(f"Cannot compare between 'SecondQuantizedOperator' and '{other.__class__.__name__}'.")

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
        return f"a{'+' if self.is_creation() else '-'}({self.index})"

    def latex(self, osi=None):
        """
        Translate to latex form.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string of latex format
        """
        dagger = "^{\\dagger}" if self.is_creation() else ""
        return f"\\hat{{a}}{dagger}_{{{self.index.latex(osi)}}}"

    def reindex(self, index_map):
        """ Return a new operator with the index substituted according to index_map. """
        return SecondQuantizedOperator(self.type, index_map.get(self.index, self.index))
