class DiagVertex:
    def __init__(self, cre, ann):
        """
        The DiagVertex class, i.e., the number of creation and annihilation operators per orbital space.
        :param cre: a list of creation counts, one per orbital space
        :param ann: a list of annihilation counts, one per orbital space
        """
        cre, ann = tuple(cre), tuple(ann)
        if len(cre) != len(ann):
            raise ValueError(f"Inconsistent number of spaces for creation ({len(cre)}) "
                             f"and annihilation ({len(ann)}) operators.")
        for n in cre + ann:
            if not isinstance(n, int):
                raise TypeError(f"Invalid operator count, given '{n.__class__.__name__}', required 'int'.")
            if n < 0:
                raise ValueError(f"Invalid vertex: negative operator count in cre {cre}, ann {ann}.")
        self._vertex = tuple(zip(cre, ann))

    @classmethod
    def zero(cls, n_spaces):
        """ Return a vertex without any operator. """
        return cls([0] * n_spaces, [0] * n_spaces)

    @classmethod
    def single(cls, n_spaces, space, n_cre, n_ann):
        """ Return a vertex whose operators all belong to the given space. """
        cre = [0] * n_spaces
        ann = [0] * n_spaces
        cre[space] = n_cre
        ann[space] = n_ann
        return cls(cre, ann)

    @property
    def vertex(self):
        return self._vertex

    @property
    def n_spaces(self):
        return len(self._vertex)

    def cre(self, space):
        return self._vertex[space][0]

    def ann(self, space):
        return self._vertex[space][1]

    def rank(self):
        return sum(c + a for c, a in self._vertex)

    def signature(self):
        """ A compact key of this vertex: a tuple of (cre, ann) per space. """
        return self._vertex

    def _is_valid_operand(self, other):
        if not isinstance(other, DiagVertex):
            raise TypeError(f"Cannot compare between 'DiagVertex' and '{other.__class__.__name__}'.")
        if self.n_spaces != other.n_spaces:
            raise ValueError(f"Inconsistent number of spaces: {self.n_spaces} vs {other.n_spaces}.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self._vertex == other.vertex

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self._vertex != other.vertex

    def __lt__(self, other):
        self._is_valid_operand(other)
        return self._vertex < other.vertex

    def __le__(self, other):
        self._is_valid_operand(other)
        return self._vertex <= other.vertex

    def __gt__(self, other):
        self._is_valid_operand(other)
        return self._vertex > other.vertex

    def __ge__(self, other):
        self._is_valid_operand(other)
        return self._vertex >= other.vertex

    def __hash__(self):
        return hash(self._vertex)

    def __add__(self, other):
        self._is_valid_operand(other)
        return DiagVertex([c1 + c2 for (c1, _), (c2, _) in zip(self._vertex, other.vertex)],
                          [a1 + a2 for (_, a1), (_, a2) in zip(self._vertex, other.vertex)])

    def __sub__(self, other):
        self._is_valid_operand(other)
        cre = [c1 - c2 for (c1, _), (c2, _) in zip(self._vertex, other.vertex)]
        ann = [a1 - a2 for (_, a1), (_, a2) in zip(self._vertex, other.vertex)]
        if any(n < 0 for n in cre + ann):
            raise ValueError(f"Cannot subtract vertex {other} from {self}: negative operator count.")
        return DiagVertex(cre, ann)

    def contains(self, other):
        """ Return True if other fits in this vertex, i.e., self - other is a valid vertex. """
        self._is_valid_operand(other)
        return all(c1 >= c2 and a1 >= a2 for (c1, a1), (c2, a2) in zip(self._vertex, other.vertex))

    def __repr__(self):
        return "[" + "|".join(f"{c} {a}" for c, a in self._vertex) + "]"


def vertices_rank(vertices):
    """ Return the total number of operators of a list of vertices. """
    return sum(vertex.rank() for vertex in vertices)


def vertices_space(vertices):
    """
    Find the orbital space touched by a list of vertices.
    :param vertices: a list of DiagVertex, e.g., an elementary contraction
    :return: the first space with a nonzero operator count, -1 if all vertices are empty
    """
    for vertex in vertices:
        for space, (c, a) in enumerate(vertex.vertex):
            if c + a > 0:
                return space
    return -1


def vertices_signature(vertices):
    """ Return the compact key of a list of vertices. """
    return tuple(vertex.signature() for vertex in vertices)


def vertices_to_string(vertices):
    return " ".join(str(vertex) for vertex in vertices)
