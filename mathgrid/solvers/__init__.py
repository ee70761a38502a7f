"""Solution search over math grid boards."""

from .base_solver import BaseSearcher, SearchStats
from .solution_searcher import (
    Solution,
    SolutionSearcher,
    iter_solutions,
    find_all_solutions,
    first_solution,
)

__all__ = [
    "BaseSearcher",
    "SearchStats",
    "Solution",
    "SolutionSearcher",
    "iter_solutions",
    "find_all_solutions",
    "first_solution",
]
