"""
Keyed scene graph shared by the bar and scatter renderers.

A scene holds one `Primitive` per data key. `Scene.join` reconciles the
current primitives against a new keyed data sequence: keys only in the new
data enter, keys in both update, keys only in the old data exit. Each case
gets its own callback, so renderers decide the transition policy.

Transitions are descriptive: a primitive records where an animation starts,
where it ends and how long it takes; the browser-side chart performs the
interpolation. Starting a new transition on a primitive replaces the
previous one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple


@dataclass
class Transition:
    start: Dict[str, Any]
    end: Dict[str, Any]
    duration_ms: int

    def at(self, progress: float) -> Dict[str, Any]:
        """Attribute values at `progress` in [0, 1]; non-numeric values switch at the end."""
        progress = min(max(progress, 0.0), 1.0)
        values: Dict[str, Any] = {}
        for name, target in self.end.items():
            origin = self.start.get(name, target)
            if isinstance(origin, (int, float)) and isinstance(target, (int, float)):
                values[name] = origin + (target - origin) * progress
            else:
                values[name] = target if progress >= 1.0 else origin
        return values


@dataclass
class Primitive:
    key: Hashable
    kind: str
    datum: Any
    attrs: Dict[str, Any] = field(default_factory=dict)
    transition: Optional[Transition] = None

    def animate(self, target: Dict[str, Any], duration_ms: int, progress: Optional[float] = None) -> Transition:
        """Start a transition towards `target`, superseding any in-flight one.

        With `progress`, the new transition starts from where the in-flight
        one currently is; otherwise it starts from the current attributes.
        """
        if self.transition is not None and progress is not None:
            origin = {**self.attrs, **self.transition.at(progress)}
        else:
            origin = dict(self.attrs)
        self.transition = Transition(
            start={name: origin.get(name) for name in target},
            end=dict(target),
            duration_ms=duration_ms,
        )
        self.attrs.update(target)
        return self.transition

    def set(self, **attrs: Any) -> None:
        """Apply attributes immediately, without a transition."""
        self.attrs.update(attrs)


@dataclass(frozen=True)
class JoinResult:
    entered: Tuple[Hashable, ...]
    updated: Tuple[Hashable, ...]
    exited: Tuple[Hashable, ...]


def diff_keys(previous: Iterable[Hashable], current: Iterable[Hashable]) -> JoinResult:
    previous_keys = list(previous)
    current_keys = list(current)
    previous_set = set(previous_keys)
    current_set = set(current_keys)
    return JoinResult(
        entered=tuple(k for k in current_keys if k not in previous_set),
        updated=tuple(k for k in current_keys if k in previous_set),
        exited=tuple(k for k in previous_keys if k not in current_set),
    )


EnterFn = Callable[[Primitive], None]
UpdateFn = Callable[[Primitive], None]


class Scene:
    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._primitives: Dict[Hashable, Primitive] = {}

    def __len__(self) -> int:
        return len(self._primitives)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._primitives

    def __getitem__(self, key: Hashable) -> Primitive:
        return self._primitives[key]

    def keys(self) -> List[Hashable]:
        return list(self._primitives)

    def primitives(self) -> List[Primitive]:
        """Primitives in paint order (last painted on top)."""
        return list(self._primitives.values())

    def join(
        self,
        data: Iterable[Tuple[Hashable, Any]],
        enter: EnterFn,
        update: UpdateFn,
    ) -> JoinResult:
        keyed = list(data)
        result = diff_keys(self._primitives.keys(), (key for key, _ in keyed))
        entered = set(result.entered)
        reconciled: Dict[Hashable, Primitive] = {}
        for key, datum in keyed:
            if key in entered:
                primitive = Primitive(key=key, kind=self.kind, datum=datum)
                enter(primitive)
            else:
                primitive = self._primitives[key]
                primitive.datum = datum
                update(primitive)
            reconciled[key] = primitive
        # Exiting keys are simply not carried over
        self._primitives = reconciled
        return result

    def raise_to_top(self, key: Hashable) -> None:
        primitive = self._primitives.pop(key)
        self._primitives[key] = primitive

    def clear(self) -> None:
        self._primitives = {}
