"""
SERP Parser - Pipeline Composition

A single result is assembled by threading a ResultContext through an
ordered list of steps. Every step returns a new context with its own
field(s) merged into `parsed`; the composition routine lays each step's
output over the previous fields, so no step can remove a field another
step already set. A terminal function turns the final context into the
output value and may drop the result entirely by returning None.

The page level follows the same left-to-right accumulation, except that
page steps return feature records instead of fields.

Author: scrape-serp
Date: 2026-10-19
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .serp_nodes import NodeSet


@dataclass(frozen=True)
class RequestDescriptor:
    """Read-only description of the request the page was fetched for."""
    mobile: bool = False
    locale: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RequestDescriptor":
        data = data or {}
        return cls(mobile=bool(data.get("mobile", False)), locale=data.get("locale"))


@dataclass(frozen=True)
class ResultContext:
    """Unit threaded through the per-result pipeline."""
    element_set: NodeSet
    request: RequestDescriptor
    parsed: Mapping[str, Any] = field(default_factory=dict)

    def merge(self, **fields: Any) -> "ResultContext":
        """Return a new context with `fields` merged into parsed."""
        return replace(self, parsed={**self.parsed, **fields})


Step = Callable[[ResultContext], ResultContext]
Terminal = Callable[[ResultContext], Any]
Collaborator = Callable[..., Any]


def pipe(*steps: Step) -> Step:
    """Compose steps into one step."""
    def composed(context: ResultContext) -> ResultContext:
        for step in steps:
            previous = context.parsed
            context = step(context)
            context = replace(context, parsed={**previous, **context.parsed})
        return context

    return composed


def run_pipeline(
    context: ResultContext,
    steps: Sequence[Step],
    terminal: Optional[Terminal] = None,
) -> Any:
    """
    Fold `steps` over `context` left to right.

    Args:
        context: Initial context
        steps: Ordered transform steps
        terminal: Maps the final context to the output (may return None)

    Returns:
        terminal(final_context), or the final parsed mapping without one
    """
    context = pipe(*steps)(context)

    if terminal is None:
        return dict(context.parsed)

    return terminal(context)


def feature_step(field_name: str, collaborator: Collaborator, with_locale: bool = False) -> Step:
    """
    Build a step that stores a collaborator's output under `field_name`.

    Args:
        field_name: Key in parsed
        collaborator: Callable(element_set[, options]) -> value or None
        with_locale: Pass {"locale": request.locale} as options

    Returns:
        Pipeline step
    """
    def step(context: ResultContext) -> ResultContext:
        if with_locale:
            value = collaborator(context.element_set, {"locale": context.request.locale})
        else:
            value = collaborator(context.element_set)
        return context.merge(**{field_name: value})

    step.__name__ = f"add_{field_name}"
    return step


PageStep = Callable[..., Any]


def collect_features(steps: Iterable[PageStep], scope: Any, *args: Any) -> List[Dict[str, Any]]:
    """
    Run page-scoped steps in order and collect their feature records.

    A step may return a record, a list of records, or None. Lists are
    flattened and None values dropped; order is preserved.
    """
    features: List[Dict[str, Any]] = []

    for step in steps:
        output = step(scope, *args)
        if output is None:
            continue
        if isinstance(output, (list, tuple)):
            features.extend(item for item in output if item is not None)
        else:
            features.append(output)

    return features
