import re


_index_name = re.compile(r'^([A-Za-z])(\d+)$')


class Index:
    def __init__(self, space, number, label):
        """
        The Index class to handle an orbital space and a number.
        :param space: the orbital space number (see OrbitalSpaceInfo)
        :param number: the index number within the space
        :param label: the label of the orbital space, e.g., 'o'
        """
        if not isinstance(space, int) or not isinstance(number, int):
            raise TypeError(f"Index space and number have to be integers, "
                            f"given '{space.__class__.__name__}' and '{number.__class__.__name__}'.")
        if space < 0 or number < 0:
            raise ValueError(f"Improper Index: space ({space}) and number ({number}) cannot be negative.")

        self._space = space
        self._number = number
        self._label = label

    @classmethod
    def from_name(cls, name, osi):
        """
        Create an Index from its name.
        :param name: the name of index, e.g., o0, v12
        :param osi: the OrbitalSpaceInfo object that defines the space labels
        :return: an Index object
        """
        if not isinstance(name, str):
            raise TypeError("Index name has to be string type.")

        match = _index_name.match(name.strip())
        if match is None:
            raise ValueError(f"Improper Index name: '{name}' is not a space label followed by an integer.")

        label, number = match.groups()
        return cls(osi.label_to_space(label), int(number), label)

    @property
    def space(self):
        return self._space

    @property
    def number(self):
        return self._number

    @property
    def label(self):
        return self._label

    @property
    def name(self):
        return f"{self._label}{self._number}"

    def __repr__(self):
        return self.name

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, Index):
            raise TypeError(f"Cannot compare between 'Index' and '{type(other).__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) == (other.space, other.number)

    def __ne__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) != (other.space, other.number)

    def __lt__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) < (other.space, other.number)

    def __le__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) <= (other.space, other.number)

    def __gt__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) > (other.space, other.number)

    def __ge__(self, other):
        self._is_valid_operand(other)
        return (self.space, self.number) >= (other.space, other.number)

    def __hash__(self):
        return hash((self.space, self.number))

    def latex(self, osi=None):
        """
        The latex form of this Index.
        :param osi: use the index labels of this OrbitalSpaceInfo when given, e.g., o1 -> j
        :return: a string for the latex form
        """
        if osi is not None:
            pool = osi.indices(self.space)
            if self.number < len(pool):
                return pool[self.number]
            if pool:
                return f"{pool[0]}_{{{self.number}}}"
        return f"{self.label}_{{{self.number}}}"


class IndexCounter:
    """ Hand out fresh indices, one counter per orbital space. """

    def __init__(self, osi):
        self._osi = osi
        self._counter = [0] * osi.num_spaces()

    def next_index(self, space):
        index = Index(space, self._counter[space], self._osi.label(space))
        self._counter[space] += 1
        return index
