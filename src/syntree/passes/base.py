"""
Base Pass System

A pass consumes a tree and returns a new tree. Passes declare the passes
they must run after through `requires`; the PassManager schedules them in
dependency order and threads one RewriteContext through the run.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Type

from ..shared.nodes import Node

logger = logging.getLogger(__name__)


class RewriteContext:
    """
    Per-run state shared by every pass of one pipeline run.

    - Options (keep_lines)
    - Collaborators (alias table, function-name lookup); None means "use the
      pass default"
    - Analysis results stored here (not in passes)

    A context belongs to exactly one run; concurrent runs each get their own.
    """

    def __init__(
        self,
        keep_lines: bool = False,
        alias_table: Optional[Any] = None,
        function_name: Optional[Callable[[Any], str]] = None,
    ):
        self.keep_lines = keep_lines
        self.alias_table = alias_table
        self.function_name = function_name
        self._analysis_results: Dict[Type['BasePass'], Any] = {}

    def get_analysis(self, pass_class: Type['BasePass']) -> Any:
        """Get analysis results from a pass"""
        if pass_class not in self._analysis_results:
            raise RuntimeError(f"Analysis {pass_class.__name__} not available")
        return self._analysis_results[pass_class]

    def set_analysis(self, pass_class: Type['BasePass'], results: Any) -> None:
        """Store analysis results"""
        self._analysis_results[pass_class] = results


class BasePass(ABC):
    """
    Base class for all tree passes.

    - Explicit dependencies via `requires`
    - Pass results stored in RewriteContext (not in pass)
    - Immutable trees (passes return new trees)
    """
    requires: List[Type['BasePass']] = []  # Dependencies (empty by default)

    @abstractmethod
    def run(self, tree: Node, ctx: RewriteContext) -> Node:
        """Run pass on a tree. Returns the rewritten tree."""
        raise NotImplementedError


class PassManager:
    """
    Pass manager with dependency resolution.

    - Automatic dependency resolution (topological sort)
    - Passes run in dependency order, registration order breaks ties
    - Single RewriteContext shared across all passes of a run
    """

    def __init__(self):
        self.passes: List[Type[BasePass]] = []
        self._dependency_graph: dict[Type[BasePass], set[Type[BasePass]]] = {}

    def register_pass(self, pass_class: Type[BasePass]) -> None:
        """Register a pass"""
        self.passes.append(pass_class)
        self._dependency_graph[pass_class] = set(pass_class.requires)

    def run_all(self, tree: Node, ctx: RewriteContext, dump_tree: bool = False) -> Node:
        """
        Run all passes in dependency order.

        Args:
            tree: Input tree
            ctx: Rewrite context for this run
            dump_tree: If True, log the tree S-expression after each pass (DEBUG)
        """
        for pass_class in self._topological_sort():
            pass_name = pass_class.__name__
            logger.debug(f"Running {pass_name}")
            tree = pass_class().run(tree, ctx)

            if dump_tree:
                from ..serialization import dumps
                logger.debug(f"After {pass_name}:\n{dumps(tree)}")

        return tree

    def _topological_sort(self) -> List[Type[BasePass]]:
        """Topological sort of passes by dependencies"""
        in_degree = {p: len(self._dependency_graph[p] & set(self.passes)) for p in self.passes}
        queue = [p for p, degree in in_degree.items() if degree == 0]
        result = []

        while queue:
            pass_class = queue.pop(0)
            result.append(pass_class)

            for other_pass in self.passes:
                if pass_class in self._dependency_graph[other_pass]:
                    in_degree[other_pass] -= 1
                    if in_degree[other_pass] == 0:
                        queue.append(other_pass)

        if len(result) != len(self.passes):
            raise RuntimeError("Circular dependency detected in passes")

        return result
