"""
Topograph Exception Hierarchy

Errors raised while registering a topology, expanding it into an
instance graph, and exporting that graph. All of them are local and
synchronous: nothing is retried and nothing is converted into a default
value.

    TopographError
    ├── ComponentNameError        (naming conflicts at registration)
    ├── ParallelismParseError     (parallelism is not a non-negative integer)
    ├── DanglingReferenceError    (bolt input names an unknown component)
    ├── GraphModelError
    │   ├── DuplicateVertexError
    │   └── UnknownVertexError
    ├── GraphExportError          (destination unwritable, bad weight token)
    └── MetisFormatError          (unreadable partition file)
"""

from typing import Any, Dict, Optional


class TopographError(Exception):
    """
    Base class for all topograph errors.

    Attributes:
        component: Name of the component involved (if applicable)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.component = component
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'component': self.component,
            'context': self.context,
        }


class ComponentNameError(TopographError, ValueError):
    """Component name contains a reserved character or is already declared."""


class ParallelismParseError(TopographError, ValueError):
    """Parallelism setting is not a non-negative integer."""

    def __init__(self, component: str, raw_value: Any):
        super().__init__(
            f"Parallelism of component '{component}' is not a non-negative integer: {raw_value!r}",
            component=component,
            context={'raw_value': raw_value},
        )
        self.raw_value = raw_value


class DanglingReferenceError(TopographError, LookupError):
    """Bolt input refers to a component that is neither a spout nor a bolt."""

    def __init__(self, bolt: str, source: str):
        super().__init__(
            f"Bolt '{bolt}' declares an input from unknown component '{source}'",
            component=bolt,
            context={'source': source},
        )
        self.source = source


class GraphModelError(TopographError):
    """Structural violation inside a Graph."""


class DuplicateVertexError(GraphModelError, ValueError):
    """A vertex with the same name already exists in the graph."""


class UnknownVertexError(GraphModelError, LookupError):
    """An edge endpoint was not inserted into the graph beforehand."""


class GraphExportError(TopographError, OSError):
    """Export destination could not be written, or the graph cannot be encoded."""


class MetisFormatError(TopographError, ValueError):
    """Text could not be parsed as a METIS graph file."""
