"""
Hook points and behavior contributions.

A class builder asks every behavior attached to a table for its
contribution at each hook point and splices the composed result into the
generated class. Contributions are rendered fragments that are parsed on
construction, so a fragment boundary can never break the generated file.
"""

import ast
import textwrap
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple, TYPE_CHECKING

from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..behaviors.base import Behavior

logger = get_logger(__name__)


class ContributionError(Exception):
    """Exception raised when a behavior produces an invalid contribution."""

    pass


class HookPoint(Enum):
    """Extension points of the generated classes, in insertion order."""

    OBJECT_ATTRIBUTES = "object_attributes"
    PRE_INSERT = "pre_insert"
    PRE_UPDATE = "pre_update"
    OBJECT_METHODS = "object_methods"
    QUERY_METHODS = "query_methods"


def _validate_source(source: str, what: str) -> None:
    try:
        ast.parse(textwrap.dedent(source))
    except SyntaxError as e:
        raise ContributionError(f"Invalid {what}: {e.msg} (line {e.lineno})") from e


@dataclass(frozen=True)
class Contribution:
    """
    One behavior's code fragment for one hook point.

    An empty ``code`` means the behavior does not contribute. Non-empty code
    must be a self-contained statement sequence; ``imports`` lists the
    import statements the fragment relies on.
    """

    hook: HookPoint
    code: str = ""
    behavior: Optional[str] = None
    imports: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        code = textwrap.dedent(self.code).strip("\n")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "imports", frozenset(self.imports))

        if code:
            _validate_source(code, f"{self.hook.value} contribution from {self.behavior}")
        for statement in self.imports:
            if not statement.startswith(("import ", "from ")):
                raise ContributionError(f"Not an import statement: {statement!r}")
            _validate_source(statement, "import statement")

    @classmethod
    def empty(cls, hook: HookPoint, behavior: Optional[str] = None) -> "Contribution":
        """Contribution signalling that the behavior has nothing to add."""
        return cls(hook=hook, behavior=behavior)

    def __bool__(self) -> bool:
        return bool(self.code)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ComposedHook:
    """All non-empty contributions for one hook point, in attachment order."""

    hook: HookPoint
    contributions: Tuple[Contribution, ...] = ()

    @property
    def code(self) -> str:
        return "\n\n".join(c.code for c in self.contributions)

    @property
    def imports(self) -> List[str]:
        collected = set()
        for contribution in self.contributions:
            collected.update(contribution.imports)
        return sorted(collected)

    def __bool__(self) -> bool:
        return bool(self.contributions)

    def __len__(self) -> int:
        return len(self.contributions)


def compose(behaviors: Iterable["Behavior"], hook: HookPoint, builder) -> ComposedHook:
    """
    Collect contributions for a hook point from behaviors in order.

    Args:
        behaviors: Behaviors in table attachment order
        hook: Hook point being assembled
        builder: Class builder requesting the contributions

    Returns:
        ComposedHook with the non-empty contributions

    Raises:
        ContributionError: If a behavior returns something other than a
            Contribution for the requested hook
    """
    collected = []

    for behavior in behaviors:
        contribution = behavior.contribute(hook, builder)
        if not isinstance(contribution, Contribution) or contribution.hook is not hook:
            raise ContributionError(
                f"Behavior '{behavior.name}' returned an invalid contribution "
                f"for {hook.value}: {contribution!r}"
            )
        if contribution:
            logger.debug(
                "Behavior %s contributed %d line(s) to %s",
                behavior.name,
                contribution.code.count("\n") + 1,
                hook.value,
            )
            collected.append(contribution)

    return ComposedHook(hook=hook, contributions=tuple(collected))
