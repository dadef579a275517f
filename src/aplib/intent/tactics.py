"""
Tactic trees - decide which action an agent performs next.

A tactic tree is a strict forest of nodes of three kinds (TacticType):
- PRIMITIVE: Leaf wrapping one action. Enabled iff its guard holds AND the
  action reports itself actionable.
- FIRST_OF: Prioritized fallback. Children are tried in declared order and
  the first non-empty result wins; later siblings are never evaluated.
- ANY_OF: Every child is evaluated, all enabled leaves are pooled, and one is
  picked uniformly at random.

All three share one representation, Tactic, which carries its TacticType.
Each operation is a single method that dispatches on that type, so the set
of variants is closed. PrimitiveTactic, FirstOfTactic and AnyOfTactic are
convenience constructors for the three variants.

Structure:
- Parents own their children (strong references, fixed at construction).
- Children hold a weak back-reference to their parent, set exactly once.
  Adopting a node that was already adopted raises TacticTreeError (E2001),
  even if its first parent has since been garbage-collected.

Guards are plain predicates that receive the belief set explicitly. Guards,
actions and the random source are never wrapped in try/except here; their
exceptions propagate to the caller.

Example:
    >>> root = FirstOfTactic([
    ...     PrimitiveTactic(heal, guard=lambda bs: bs.health < 30),
    ...     AnyOfTactic([
    ...         PrimitiveTactic(explore_left),
    ...         PrimitiveTactic(explore_right),
    ...     ]),
    ... ])
    >>> action = root.get_action(belief_set)
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Dict, Iterator, List, Optional, Sequence, cast

from ..belief.belief_set import BeliefSet
from ..errors import NoEnclosingPrimitiveError, TacticTreeError, UnknownTacticTypeError
from ..metadata import Metadata
from ..random_source import RandomSource, choose, get_random_source
from ..status import TacticType
from .actions import ActionLike, Guard, always

logger = logging.getLogger(__name__)


class Tactic:
    """A node in a tactic tree.

    Attributes:
        tactic_type: Which variant this node is.
        guard: Predicate gating whether the node may yield anything.
        children: Ordered child nodes (empty for primitives).
        parent: Enclosing node, or None for a root.
        metadata: Identity and documentation for debugging.
    """

    def __init__(
        self,
        tactic_type: TacticType,
        children: Optional[Sequence["Tactic"]] = None,
        guard: Optional[Guard] = None,
        metadata: Optional[Metadata] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        """Initialize a tactic node and adopt its children.

        Args:
            tactic_type: Variant of this node.
            children: Child nodes in priority order. Must be empty for primitives.
            guard: Predicate over the belief set (default: always true).
            metadata: Identity and documentation for debugging.
            random_source: Tie-break source for this node. Falls back to the
                process-wide source when None.

        Raises:
            TacticTreeError: If a child already belongs to another parent (E2001).
            ValueError: If a primitive is given children, or is built without
                an action (use PrimitiveTactic).
        """
        if tactic_type is TacticType.PRIMITIVE:
            if children:
                raise ValueError("Primitive tactics cannot have children")
            if not isinstance(self, PrimitiveTactic):
                raise ValueError("Primitive tactics need an action; use PrimitiveTactic")

        self._tactic_type = tactic_type
        self._guard: Guard = guard or always
        self._metadata = metadata or Metadata()
        self._random_source = random_source

        self._parent_ref: Optional[weakref.ReferenceType[Tactic]] = None
        self._adopted = False
        self._children: List[Tactic] = []
        for child in children or ():
            self._add_child(child)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def tactic_type(self) -> TacticType:
        return self._tactic_type

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    @property
    def name(self) -> str:
        """Human-readable name (metadata name or class name plus short id)."""
        return self._metadata.display_name(self.__class__.__name__)

    @property
    def children(self) -> tuple["Tactic", ...]:
        """Child nodes in declared order."""
        return tuple(self._children)

    @property
    def parent(self) -> Optional["Tactic"]:
        """Enclosing node (None for root, or once the parent is collected)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def random_source(self) -> RandomSource:
        """Source used when several enabled leaves tie."""
        if self._random_source is not None:
            return self._random_source
        return get_random_source()

    # =========================================================================
    # Hierarchy
    # =========================================================================

    def _add_child(self, child: "Tactic") -> None:
        # Adoption is permanent, even after the parent is collected.
        if child._adopted:
            existing = child.parent
            raise TacticTreeError(
                child.name, existing.name if existing is not None else "<collected>"
            )

        child._parent_ref = weakref.ref(self)
        child._adopted = True
        self._children.append(child)

    @property
    def root(self) -> "Tactic":
        """Topmost node reachable through parent links."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def ancestors(self) -> Iterator["Tactic"]:
        """Yield enclosing nodes from the direct parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator["Tactic"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self._children:
            yield from child.walk()

    def primitives(self) -> List["PrimitiveTactic"]:
        """All primitive leaves of this subtree, in declared order."""
        return [
            cast("PrimitiveTactic", node)
            for node in self.walk()
            if node._tactic_type is TacticType.PRIMITIVE
        ]

    # =========================================================================
    # Evaluation
    # =========================================================================

    def is_actionable(self, belief_set: BeliefSet) -> bool:
        """Whether this node's own guard holds."""
        return bool(self._guard(belief_set))

    def get_first_enabled_actions(self, belief_set: BeliefSet) -> List["PrimitiveTactic"]:
        """Collect the primitive tactics this node enables right now.

        - PRIMITIVE: ``[self]`` if actionable, else ``[]``.
        - FIRST_OF: the first child's non-empty list; later children are not
          evaluated.
        - ANY_OF: the concatenation of every child's list.

        A composite whose own guard fails yields ``[]`` without touching its
        children. A composite without children yields ``[]``.

        Args:
            belief_set: Current beliefs of the agent.

        Returns:
            Enabled primitive tactics, possibly empty.
        """
        tactic_type = self._tactic_type

        if tactic_type is TacticType.PRIMITIVE:
            if self.is_actionable(belief_set):
                return [cast("PrimitiveTactic", self)]
            return []

        if not self.is_actionable(belief_set):
            logger.debug(f"{self.name}: guard false, children not evaluated")
            return []

        if tactic_type is TacticType.FIRST_OF:
            for index, child in enumerate(self._children):
                enabled = child.get_first_enabled_actions(belief_set)
                if enabled:
                    logger.debug(
                        f"{self.name}: child {index} ({child.name}) enabled "
                        f"{len(enabled)} tactic(s)"
                    )
                    return enabled
            return []

        if tactic_type is TacticType.ANY_OF:
            pooled: List[PrimitiveTactic] = []
            for child in self._children:
                pooled.extend(child.get_first_enabled_actions(belief_set))
            logger.debug(f"{self.name}: pooled {len(pooled)} enabled tactic(s)")
            return pooled

        raise UnknownTacticTypeError(tactic_type)

    def get_action(self, belief_set: BeliefSet) -> Optional[ActionLike]:
        """Select the action to perform this cycle.

        Picks uniformly at random among get_first_enabled_actions(); a single
        candidate is returned without drawing from the random source.

        Args:
            belief_set: Current beliefs of the agent.

        Returns:
            The chosen action, or None if nothing is enabled.
        """
        enabled = self.get_first_enabled_actions(belief_set)
        if not enabled:
            return None
        if len(enabled) == 1:
            return enabled[0].action

        chosen = choose(self.random_source, enabled)
        logger.debug(f"{self.name}: picked {chosen.name} among {len(enabled)}")
        return chosen.action

    def get_next_tactic(self) -> "PrimitiveTactic":
        """Resolve navigation by climbing parent links to the root.

        A node with a parent always defers to that parent, so the root
        determines the result. A parentless primitive is its own next
        tactic.

        Raises:
            NoEnclosingPrimitiveError: If the root is a composite (E3001).
        """
        parent = self.parent
        if parent is not None:
            return parent.get_next_tactic()

        if self._tactic_type is TacticType.PRIMITIVE:
            return cast("PrimitiveTactic", self)

        raise NoEnclosingPrimitiveError(self.name)

    # =========================================================================
    # Debug
    # =========================================================================

    def debug_info(self) -> Dict[str, Any]:
        """Return debug information for this node and its subtree."""
        parent = self.parent
        info: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "name": self.name,
            "id": str(self._metadata.id),
            "tactic_type": self._tactic_type.value,
            "parent": parent.name if parent is not None else None,
        }
        if self._children:
            info["children"] = [child.debug_info() for child in self._children]
        return info

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"type={self._tactic_type.name}, "
            f"children={len(self._children)})"
        )


class PrimitiveTactic(Tactic):
    """Leaf tactic wrapping exactly one action.

    Actionable iff its own guard holds and the action is actionable. The
    guard is checked first; the action is not consulted when it fails.
    """

    def __init__(
        self,
        action: ActionLike,
        guard: Optional[Guard] = None,
        metadata: Optional[Metadata] = None,
    ) -> None:
        super().__init__(TacticType.PRIMITIVE, guard=guard, metadata=metadata)
        self._action = action

    @property
    def action(self) -> ActionLike:
        return self._action

    def is_actionable(self, belief_set: BeliefSet) -> bool:
        return super().is_actionable(belief_set) and bool(
            self._action.is_actionable(belief_set)
        )

    def debug_info(self) -> Dict[str, Any]:
        info = super().debug_info()
        info["action"] = repr(self._action)
        return info


class FirstOfTactic(Tactic):
    """Composite that returns the first child with anything enabled."""

    def __init__(
        self,
        children: Optional[Sequence[Tactic]] = None,
        guard: Optional[Guard] = None,
        metadata: Optional[Metadata] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        super().__init__(
            TacticType.FIRST_OF,
            children=children,
            guard=guard,
            metadata=metadata,
            random_source=random_source,
        )


class AnyOfTactic(Tactic):
    """Composite that picks uniformly among all enabled leaves below it."""

    def __init__(
        self,
        children: Optional[Sequence[Tactic]] = None,
        guard: Optional[Guard] = None,
        metadata: Optional[Metadata] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        super().__init__(
            TacticType.ANY_OF,
            children=children,
            guard=guard,
            metadata=metadata,
            random_source=random_source,
        )


__all__ = [
    "Tactic",
    "PrimitiveTactic",
    "FirstOfTactic",
    "AnyOfTactic",
]
