from enum import Enum


class SpaceType(Enum):
    """
    The contraction rule of an orbital space.
    Occupied/Unoccupied spaces only allow pairwise contractions (Kronecker deltas),
    General spaces allow contractions of any even number of legs (density matrices and cumulants).
    """
    Occupied = 'occupied'
    Unoccupied = 'unoccupied'
    General = 'general'


class OrbitalSpaceInfo:
    """
    The OrbitalSpaceInfo class.
    A registry of orbital spaces that is passed explicitly to every part of the contraction machinery.
    Spaces are numbered in the order they are added and this number defines the space priority.
    """

    def __init__(self):
        self._labels = []
        self._space_types = []
        self._indices = []
        self._label_to_space = {}

    def add_space(self, label, space_type, indices):
        """
        Add an orbital space.
        :param label: a one-character label for this space, e.g., 'o'
        :param space_type: a SpaceType (or its value, e.g., 'occupied')
        :param indices: a list of index labels used for printing, e.g., ['i', 'j', 'k']
        """
        if not isinstance(label, str) or len(label) != 1 or not label.isalpha():
            raise ValueError(f"Invalid space label '{label}', required a single letter.")
        if label in self._label_to_space:
            raise ValueError(f"Space label '{label}' is already defined.")

        try:
            space_type = SpaceType(space_type)
        except ValueError:
            raise ValueError(f"Invalid space type '{space_type}'. "
                             f"Available: {', '.join(i.value for i in SpaceType)}.")

        indices = list(indices)
        if any(not isinstance(i, str) for i in indices):
            raise TypeError(f"Invalid index labels for space '{label}': {indices}, required a list of strings.")

        self._label_to_space[label] = len(self._labels)
        self._labels.append(label)
        self._space_types.append(space_type)
        self._indices.append(indices)

    def num_spaces(self):
        return len(self._labels)

    def label(self, space):
        return self._labels[space]

    def space_type(self, space):
        return self._space_types[space]

    def indices(self, space):
        return self._indices[space]

    def label_to_space(self, label):
        """
        Find the space number of a space label.
        :param label: the space label, e.g., 'v'
        :return: the space number
        """
        if label not in self._label_to_space:
            raise ValueError(f"Space label '{label}' is not defined. "
                             f"Available: {', '.join(self._labels)}.")
        return self._label_to_space[label]

    def __repr__(self):
        lines = [f"{'space':>6} {'label':>6} {'type':>12}  indices"]
        for s in range(self.num_spaces()):
            lines.append(f"{s:>6} {self.label(s):>6} {self.space_type(s).value:>12}  "
                         f"{', '.join(self.indices(s))}")
        return "\n".join(lines)


def make_default_spaces(single_reference=True):
    """
    Return a commonly used orbital space partitioning.
    :param single_reference: occupied/unoccupied spaces if True, otherwise core/active/virtual
    :return: an OrbitalSpaceInfo object
    """
    osi = OrbitalSpaceInfo()
    if single_reference:
        osi.add_space('o', SpaceType.Occupied, ['i', 'j', 'k', 'l', 'm', 'n'])
        osi.add_space('v', SpaceType.Unoccupied, ['a', 'b', 'c', 'd', 'e', 'f'])
    else:
        osi.add_space('c', SpaceType.Occupied, ['m', 'n', 'o', 'p'])
        osi.add_space('a', SpaceType.General, ['u', 'v', 'w', 'x', 'y', 'z'])
        osi.add_space('v', SpaceType.Unoccupied, ['e', 'f', 'g', 'h'])
    return osi
