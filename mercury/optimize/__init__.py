"""Derivative-free optimization: simplex searches, Brent and multi-start.

Example
-------
>>> import numpy as np
>>> from mercury.optimize import GoalType, MultiStartOptimizer, NelderMeadOptimizer
>>> from mercury.optimize import UniformRandomVectorGenerator
>>> def bowl(x):
...     return (x[0] - 3.0) ** 2 + (x[1] + 2.0) ** 2
>>> generator = UniformRandomVectorGenerator([-5.0, -5.0], [5.0, 5.0])
>>> campaign = MultiStartOptimizer(NelderMeadOptimizer(), 4, generator,
...                                max_evaluations=20000)
>>> best = campaign.optimize(bowl, GoalType.MINIMIZE, np.zeros(2))
>>> np.round(best.point, 4).tolist()
[3.0, -2.0]
"""

from .convergence import (
    DEFAULT_ABSOLUTE_THRESHOLD,
    DEFAULT_RELATIVE_THRESHOLD,
    ConvergenceChecker,
    SimpleRealPointChecker,
    SimpleScalarValueChecker,
    check_simplex_convergence,
)
from .core import (
    UNLIMITED,
    GoalType,
    PointValuePair,
    RunContext,
    RunOutcome,
    RunState,
    RunStatus,
)
from .direct import DirectSearchOptimizer, IterationCallback
from .multi_directional import MultiDirectionalOptimizer
from .multistart import (
    MultiStartOptimizer,
    StartRunner,
    UnivariateMultiStartOptimizer,
    nelder_mead,
    rank_outcomes,
)
from .nelder_mead import NelderMeadConfig, NelderMeadOptimizer
from .random import (
    UncorrelatedRandomVectorGenerator,
    UniformIntervalGenerator,
    UniformRandomVectorGenerator,
)
from .simplex import Simplex, StartConfiguration
from .univariate import GOLDEN_SECTION, BracketFinder, BrentOptimizer

__all__ = [
    "BracketFinder",
    "BrentOptimizer",
    "ConvergenceChecker",
    "DEFAULT_ABSOLUTE_THRESHOLD",
    "DEFAULT_RELATIVE_THRESHOLD",
    "DirectSearchOptimizer",
    "GOLDEN_SECTION",
    "GoalType",
    "IterationCallback",
    "MultiDirectionalOptimizer",
    "MultiStartOptimizer",
    "NelderMeadConfig",
    "NelderMeadOptimizer",
    "PointValuePair",
    "RunContext",
    "RunOutcome",
    "RunState",
    "RunStatus",
    "SimpleRealPointChecker",
    "SimpleScalarValueChecker",
    "Simplex",
    "StartConfiguration",
    "StartRunner",
    "UNLIMITED",
    "UncorrelatedRandomVectorGenerator",
    "UniformIntervalGenerator",
    "UniformRandomVectorGenerator",
    "UnivariateMultiStartOptimizer",
    "check_simplex_convergence",
    "nelder_mead",
    "rank_outcomes",
]
