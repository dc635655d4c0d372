from collections import Counter
from itertools import groupby
from sympy.combinatorics import Permutation
from sympy.combinatorics.tensor_can import canonicalize, get_symmetric_group_sgs, bsgs_direct_product

from wick_generator.Index import Index
from wick_generator.Indices import sort_and_count_inversions
from wick_generator.SQOperator import SecondQuantizedOperator, SQOperatorType
from wick_generator.Tensor import Tensor


def _block_bsgs(n_first, n_second, antisymmetric):
    """
    Return the base and strong generating set of a two-block object.
    :param n_first: number of slots of the first block
    :param n_second: number of slots of the second block
    :param antisymmetric: slots are antisymmetric within each block if True, otherwise no symmetry
    :return: a tuple of (base, strong generating set)
    """
    sgs = []
    for n in (n_first, n_second):
        if n == 0:
            continue
        if antisymmetric:
            sgs.append(get_symmetric_group_sgs(n, 1))
        else:
            sgs.append(([], [Permutation(list(range(n + 2)))]))

    if len(sgs) == 1:
        return sgs[0]
    return bsgs_direct_product(sgs[0][0], sgs[0][1], sgs[1][0], sgs[1][1])


class SymbolicTerm:
    """
    The SymbolicTerm class.

    A symbolic term is a product of tensors times a normal-ordered string of second-quantized operators.
    The coefficient of a term is stored outside (see Expression).
    Every index appears at most twice: indices appearing twice are summed over (dummy indices),
    indices appearing once are free.
    """

    def __init__(self, tensors=None, sqops=None):
        self._tensors = []
        self._sqops = []
        for tensor in tensors or []:
            self.add(tensor)
        for sqop in sqops or []:
            self.add(sqop)

    @property
    def tensors(self):
        return self._tensors

    @property
    def sqops(self):
        return self._sqops

    @property
    def rank(self):
        return len(self._sqops)

    def add(self, element):
        """
        Append a tensor or a second-quantized operator to this term.
        :param element: a Tensor or a SecondQuantizedOperator
        """
        if isinstance(element, Tensor):
            self._tensors.append(element)
        elif isinstance(element, SecondQuantizedOperator):
            self._sqops.append(element)
        else:
            raise TypeError(f"Invalid element for SymbolicTerm, given '{element.__class__.__name__}', "
                            f"required 'Tensor' or 'SecondQuantizedOperator'.")

    def reindex(self, index_map):
        """
        Substitute indices in place.
        :param index_map: a dictionary of {old Index: new Index}
        """
        self._tensors = [tensor.reindex(index_map) for tensor in self._tensors]
        self._sqops = [sqop.reindex(index_map) for sqop in self._sqops]

    def copy(self):
        return SymbolicTerm(self._tensors, self._sqops)

    @property
    def comparison_tuple(self):
        return tuple(self._sqops), tuple(sorted(self._tensors))

    @staticmethod
    def _is_valid_operand(other):
        if not isinstance(other, SymbolicTerm):
            raise TypeError(f"Cannot compare between 'SymbolicTerm' and '{other.__class__.__name__}'.")

    def __eq__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple == other.comparison_tuple

    def __ne__(self, other):
        self._is_valid_operand(other)
        return self.comparison_tuple != other.comparison_tuple

    def __lt__(self, other):
        self._is_valid_operand(other)
        return (self.rank, self.comparison_tuple) < (other.rank, other.comparison_tuple)

    def __hash__(self):
        return hash(self.comparison_tuple)

    def __repr__(self):
        return " ".join([str(tensor) for tensor in sorted(self._tensors)] + [str(sqop) for sqop in self._sqops])

    def latex(self, osi=None):
        """
        Translate to latex form.
        :param osi: the OrbitalSpaceInfo used to translate index labels
        :return: a string of latex format
        """
        out = [tensor.latex(osi) for tensor in sorted(self._tensors)]
        if self._sqops:
            out.append("\\{ " + " ".join(sqop.latex(osi) for sqop in self._sqops) + " \\}")
        return " ".join(out)

    def canonicalize(self):
        """
        Bring this term to canonical form in place using SymPy (Butler-Portugal algorithm).
        :return: the sign introduced by the reordering, 0 if the term vanishes

        The term is mapped onto a sympy tensor product in which the operator string is the first
        "tensor" (antisymmetric within creation and within annihilation operators), followed by
        the tensors grouped by (label, shape).
        Indices that appear twice are dummies, grouped by orbital space, and relabeled with the
        smallest available numbers of their space.
        Indices that appear once are free and keep their names.
        """
        sign = 1

        # normal-ordered string: creation operators first, antisymmetric upon reordering
        sqops, n_inversions = sort_and_count_inversions(self._sqops)
        sign *= (-1) ** n_inversions

        scalars, tensors = [], []
        for tensor in self._tensors:
            tensor, tensor_sign = tensor.canonicalize()
            sign *= tensor_sign
            (tensors if tensor.size else scalars).append(tensor)
        tensors.sort(key=lambda x: x.type_key)

        cre = [sqop.index for sqop in sqops if sqop.is_creation()]
        ann = [sqop.index for sqop in sqops if not sqop.is_creation()]

        slots = cre + ann
        components = []
        if slots:
            base, gens = _block_bsgs(len(cre), len(ann), True)
            components.append((base, gens, 1, 0))

        groups = []
        for key, group in groupby(tensors, key=lambda x: x.type_key):
            group = list(group)
            groups.append(group)
            for tensor in group:
                slots += tensor.upper.indices + tensor.lower.indices
            base, gens = _block_bsgs(group[0].n_upper, group[0].n_lower, group[0].symmetry == 'antisymmetric')
            components.append((base, gens, len(group), 0))

        if not slots:
            self._sqops, self._tensors = sqops, scalars
            return sign

        counter = Counter(slots)
        if any(count > 2 for count in counter.values()):
            raise ValueError(f"Invalid term {self}: an index appears more than twice.")

        free = sorted(i for i, count in counter.items() if count == 1)
        dummy = sorted(i for i, count in counter.items() if count == 2)
        n_free = len(free)

        # new names of dummy indices, avoiding numbers used by free indices of the same space
        used = {(i.space, i.number) for i in free}
        new_dummy = []
        for space, group in groupby(dummy, key=lambda x: x.space):
            number = 0
            for index in group:
                while (space, number) in used:
                    number += 1
                new_dummy.append(Index(space, number, index.label))
                number += 1

        dummies = []
        for space, group in groupby(range(len(dummy)), key=lambda x: dummy[x].space):
            group = list(group)
            dummies.append(list(range(n_free + 2 * group[0], n_free + 2 * (group[-1] + 1))))

        # initial labels: first occurrence of a dummy gets the even label
        tracker = {index: i for i, index in enumerate(free)}
        tracker.update({index: n_free + 2 * i for i, index in enumerate(dummy)})
        g = []
        for index in slots:
            g.append(tracker[index])
            if counter[index] == 2:
                tracker[index] += 1
        size = len(g)
        g += [size, size + 1]

        gc = canonicalize(Permutation(g), dummies, [0] * len(dummies), *components)
        if gc == 0:
            self._sqops, self._tensors = [], []
            return 0

        def index_at(slot):
            label = gc[slot]
            return free[label] if label < n_free else new_dummy[(label - n_free) // 2]

        shift = 0
        new_sqops = []
        for op_type, n in ((SQOperatorType.Creation, len(cre)), (SQOperatorType.Annihilation, len(ann))):
            new_sqops += [SecondQuantizedOperator(op_type, index_at(shift + i)) for i in range(n)]
            shift += n

        new_tensors = []
        for group in groups:
            for tensor in group:
                upper = [index_at(shift + i) for i in range(tensor.n_upper)]
                shift += tensor.n_upper
                lower = [index_at(shift + i) for i in range(tensor.n_lower)]
                shift += tensor.n_lower
                new_tensors.append(Tensor(tensor.label, lower, upper, tensor.symmetry))

        if gc[-1] == size:
            sign *= -1

        self._sqops = new_sqops
        self._tensors = scalars + new_tensors
        return sign
