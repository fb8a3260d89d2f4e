"""Mercury - derivative-free numerical optimization on numpy."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_simplex_sorted,
    debug_context,
    is_debug_enabled,
    is_simplex_sorted,
    set_debug_enabled,
)

# Errors
from .exceptions import (
    DegenerateSimplexError,
    DimensionMismatchError,
    MaxCountExceededError,
    NoConvergenceError,
    NoOptimumComputedError,
    OptimizationError,
    TooManyEvaluationsError,
    TooManyIterationsError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Optimizers
from .optimize import (
    BracketFinder,
    BrentOptimizer,
    ConvergenceChecker,
    GoalType,
    MultiDirectionalOptimizer,
    MultiStartOptimizer,
    NelderMeadConfig,
    NelderMeadOptimizer,
    PointValuePair,
    RunOutcome,
    SimpleRealPointChecker,
    SimpleScalarValueChecker,
    UncorrelatedRandomVectorGenerator,
    UniformRandomVectorGenerator,
    UnivariateMultiStartOptimizer,
    nelder_mead,
)

__all__ = [
    "__version__",
    "BracketFinder",
    "BrentOptimizer",
    "ConvergenceChecker",
    "DegenerateSimplexError",
    "DimensionMismatchError",
    "GoalType",
    "MaxCountExceededError",
    "MultiDirectionalOptimizer",
    "MultiStartOptimizer",
    "NelderMeadConfig",
    "NelderMeadOptimizer",
    "NoConvergenceError",
    "NoOptimumComputedError",
    "OptimizationError",
    "PointValuePair",
    "RunOutcome",
    "SimpleRealPointChecker",
    "SimpleScalarValueChecker",
    "TooManyEvaluationsError",
    "TooManyIterationsError",
    "UncorrelatedRandomVectorGenerator",
    "UniformRandomVectorGenerator",
    "UnivariateMultiStartOptimizer",
    "assert_simplex_sorted",
    "configure_logging",
    "debug_context",
    "get_logger",
    "is_debug_enabled",
    "is_simplex_sorted",
    "nelder_mead",
    "set_debug_enabled",
    "set_log_level",
]
