from .core.builder import FilterBuilder, LeafRootPolicy, NestingMode
from .core.nodes import ConditionKey, Operator
from .core.tree import FilterTree
from .config import Config
