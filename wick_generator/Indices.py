from collections.abc import Sequence

from wick_generator.Index import Index


def sort_and_count_inversions(array):
    """ Sort an array and count the number of inversions via merge sort. """
    n = len(array)
    if n <= 1:
        return list(array), 0
    else:
        n_half = n // 2

        left, x = sort_and_count_inversions(array[:n_half])
        right, y = sort_and_count_inversions(array[n_half:])
        result, z = merge_and_count_split_inversion(left, right)

        return result, x + y + z


def merge_and_count_split_inversion(left, right):
    """ Merge two lists (left, right) into sorted_result and count inversions. """
    i, j = 0, 0
    count = 0
    n_left = len(left)
    n_right = len(right)
    sorted_result = []

    for _ in range(n_left + n_right):
        if i == n_left:
            sorted_result.append(right[j])
            j += 1
            continue

        if j == n_right:
            sorted_result.append(left[i])
            i += 1
            continue

        if left[i] <= right[j]:
            sorted_result.append(left[i])
            i += 1
        else:
            sorted_result.append(right[j])
            count += n_left - i
            j += 1

    return sorted_result, count


class Indices:
    # available keys: nonsymmetric, antisymmetric
    symmetry = None
    subclasses = dict()
    subclasses_alias = {'nonsymmetric': 'nonsymmetric', 'nsymm': 'nonsymmetric',
                        'antisymmetric': 'antisymmetric', 'asymm': 'antisymmetric'}

    @classmethod
    def register_subclass(cls, indices_type):
        def decorator(subclass):
            cls.subclasses[indices_type] = subclass
            subclass.symmetry = indices_type
            return subclass
        return decorator

    @classmethod
    def make_indices(cls, params, indices_type):
        if indices_type not in cls.subclasses_alias:
            raise KeyError(f"Invalid indices type '{indices_type}'. "
                           f"Available: {', '.join(Indices.subclasses_alias.keys())}.")
        return cls.subclasses[cls.subclasses_alias[indices_type]](params)

    def __init__(self, list_of_indices):
        """
        The Indices class to handle a list of Index.
        :param list_of_indices: a sequence of Index objects without repetition
        """
        if not isinstance(list_of_indices, Sequence) or isinstance(list_of_indices, str):
            raise TypeError(f"Indices only accepts a sequence of Index, "
                            f"given '{list_of_indices.__class__.__name__}'.")

        for i in list_of_indices:
            if not isinstance(i, Index):
                raise TypeError(f"Invalid input for Indices initialization: {list_of_indices}\n"
                                f"Cannot use {i} ('{i.__class__.__name__}') as Index.")

        indices = list(list_of_indices)
        indices_set = set(indices)
        if len(indices_set) != len(indices):
            raise ValueError(f"Indices class does not support repeated indices: {indices}.")

        self._indices = indices
        self._indices_set = indices_set

    @property
    def indices(self):
        return self._indices

    @property
    def size(self):
        return len(self._indices)

    @property
    def indices_set(self):
        return self._indices_set

    def __repr__(self):
        return ",".join(map(str, self.indices))

    def _is_valid_operand(self, other):
        if self.__class__ is not other.__class__:
            raise TypeError(f"Cannot compare between '{self.__class__.__name__}' and '{other.__class__.__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self.indices == other.indices

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self.indices != other.indices

    def __lt__(self, other):
        self._is_valid_operand(other)
        return (self.size, self.indices) < (other.size, other.indices)

    def __le__(self, other):
        self._is_valid_operand(other)
        return (self.size, self.indices) <= (other.size, other.indices)

    def __gt__(self, other):
        self._is_valid_operand(other)
        return (self.size, self.indices) > (other.size, other.indices)

    def __ge__(self, other):
        self._is_valid_operand(other)
        return (self.size, self.indices) >= (other.size, other.indices)

    def __iter__(self):
        return iter(self.indices)

    def __getitem__(self, key):
        return self.indices[key]

    def __len__(self):
        return self.size

    def __hash__(self):
        return hash(tuple(self.indices))

    def __contains__(self, value):
        return value in self.indices_set

    def clone(self):
        """ Clone this object. """
        return self.__class__(self.indices)

    def reindex(self, index_map):
        """
        Substitute indices.
        :param index_map: a dictionary of {old Index: new Index}, missing indices are kept
        :return: a new Indices object of the same type
        """
        return self.__class__([index_map.get(i, i) for i in self.indices])

    def latex(self, osi=None):
        """
        The latex form of this Indices.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string for the latex form
        """
        return "{{ {} }}".format(" ".join([i.latex(osi) for i in self]))

    def canonicalize(self):
        """
        Bring the indices to canonical form.
        :return: the sorted indices and a sign change
        """
        return self.clone(), 1


@Indices.register_subclass('nonsymmetric')
class IndicesNonsymmetric(Indices):
    def __init__(self, list_of_indices):
        """
        Indices that cannot change ordering.
        :param list_of_indices: list of indices
        """
        Indices.__init__(self, list_of_indices)


@Indices.register_subclass('antisymmetric')
class IndicesAntisymmetric(Indices):
    def __init__(self, list_of_indices):
        """
        Indices that change sign upon a transposition.
        :param list_of_indices: list of indices
        """
        Indices.__init__(self, list_of_indices)

    def canonicalize(self):
        """
        Sort the Indices to canonical form.
        :return: a tuple of (sorted Indices, sign change)
        """
        if self.size <= 1:
            return self.clone(), 1

        list_index, permutation_count = sort_and_count_inversions(self.indices)
        return self.__class__(list_index), (-1) ** permutation_count
