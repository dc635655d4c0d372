from wick_generator.mo_space import SpaceType, OrbitalSpaceInfo, make_default_spaces
from wick_generator.Index import Index
from wick_generator.SQOperator import SecondQuantizedOperator, SQOperatorType
from wick_generator.Tensor import Tensor
from wick_generator.Term import SymbolicTerm
from wick_generator.Expression import Expression, string_to_expr, string_to_term
from wick_generator.Equation import Equation
from wick_generator.DiagVertex import DiagVertex
from wick_generator.DiagOperator import DiagOperator, DiagOpExpression, make_operator, commutator
from wick_generator.helper.print_level import PrintLevel
from wick_generator.wick_theorem import WickTheorem
