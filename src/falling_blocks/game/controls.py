from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, Iterable, List, Optional

from .core import Command


DEFAULT_KEY_MAP: Dict[Hashable, Command] = {
    "a": Command.SHIFT_VIEW_LEFT,
    "d": Command.SHIFT_VIEW_RIGHT,
    "w": Command.SHIFT_VIEW_UP,
    "s": Command.SHIFT_VIEW_DOWN,
    "up": Command.ROTATE_CW,
    "space": Command.ROTATE_CW,
    "down": Command.SOFT_DROP,
    "return": Command.SOFT_DROP,
    "left": Command.MOVE_LEFT,
    "right": Command.MOVE_RIGHT,
}

# Keys that must be released before they fire again.
DEFAULT_EDGE_KEYS: FrozenSet[Hashable] = frozenset({"up", "space", "down", "return"})


class KeyRepeatFilter:
    """Turns the set of keys held down this tick into engine commands.

    A key held across consecutive ticks does not fire every tick: edge keys
    stay silent until released, the others fire on every other tick.
    """

    def __init__(
        self,
        key_map: Optional[Dict[Hashable, Command]] = None,
        edge_keys: Optional[Iterable[Hashable]] = None,
    ) -> None:
        self.key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self.edge_keys = frozenset(DEFAULT_EDGE_KEYS if edge_keys is None else edge_keys)
        self.prev_held: FrozenSet[Hashable] = frozenset()
        self.fired: FrozenSet[Hashable] = frozenset()

    def reset(self) -> None:
        self.prev_held = frozenset()
        self.fired = frozenset()

    def commands(self, keys_down: Iterable[Hashable]) -> List[Command]:
        keys = list(dict.fromkeys(keys_down))
        out: List[Command] = []
        fired = set()
        for key in keys:
            if key in self.prev_held:
                # edge keys wait for a release, the others skip one tick after firing
                if key in self.edge_keys or key in self.fired:
                    continue
            command = self.key_map.get(key)
            if command is not None:
                out.append(command)
            fired.add(key)
        self.prev_held = frozenset(keys)
        self.fired = frozenset(fired)
        return out
