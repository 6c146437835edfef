"""OAuth scopes that a bearer token can carry.

See https://dev.twitch.tv/docs/authentication#scopes
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

# Bit position of each scope is its index in this tuple.
SCOPES: Tuple[str, ...] = (
    "analytics:read:extensions",
    "analytics:read:games",
    "bits:read",
    "channel:edit:commercial",
    "channel:manage:broadcast",
    "channel:manage:extensions",
    "channel:manage:redemptions",
    "channel:manage:videos",
    "channel:read:editors",
    "channel:read:hype_train",
    "channel:read:redemptions",
    "channel:read:stream_key",
    "channel:read:subscriptions",
    "clips:edit",
    "moderation:read",
    "user:edit",
    "user:edit:follows",
    "user:read:broadcast",
    "user:read:email",
    "user:read:blocked_users",
    "user:manage:blocked_users",
    # chat and PubSub
    "channel:moderate",
    "chat:edit",
    "chat:read",
    "whispers:read",
    "whispers:edit",
)

_SCOPE_BITS: Dict[str, int] = {name: bit for bit, name in enumerate(SCOPES)}


class ScopeSet:
    """An immutable set of known scopes stored as a bit mask.

    Names that are not known scopes are ignored on construction, and
    iteration always yields scopes in the order of :data:`SCOPES`.

    >>> scopes = ScopeSet(["user:edit", "channel:read:editors"])
    >>> list(scopes)
    ['channel:read:editors', 'user:edit']
    >>> "bits:read" in scopes
    False
    """

    __slots__ = ("_mask",)

    def __init__(self, scopes: Iterable[str] = ()) -> None:
        mask = 0
        for name in scopes:
            bit = _SCOPE_BITS.get(name)
            if bit is not None:
                mask |= 1 << bit
        self._mask = mask

    @classmethod
    def from_mask(cls, mask: int) -> "ScopeSet":
        scopes = cls()
        scopes._mask = mask & ((1 << len(SCOPES)) - 1)
        return scopes

    @property
    def mask(self) -> int:
        return self._mask

    def get(self, bit: int) -> bool:
        """Return whether the scope at position ``bit`` is present."""
        return bool(self._mask & (1 << bit))

    def contains(self, scope: str) -> bool:
        bit = _SCOPE_BITS.get(scope)
        return bit is not None and self.get(bit)

    def with_scopes(self, *scopes: str) -> "ScopeSet":
        return self | ScopeSet(scopes)

    def to_param(self) -> str:
        """Space separated list, as the token endpoint expects for ``scope``."""
        return " ".join(self)

    def __contains__(self, scope: object) -> bool:
        return isinstance(scope, str) and self.contains(scope)

    def __iter__(self) -> Iterator[str]:
        for bit, name in enumerate(SCOPES):
            if self.get(bit):
                yield name

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def __bool__(self) -> bool:
        return self._mask != 0

    def __or__(self, other: "ScopeSet") -> "ScopeSet":
        if not isinstance(other, ScopeSet):
            return NotImplemented
        return ScopeSet.from_mask(self._mask | other._mask)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScopeSet):
            return NotImplemented
        return self._mask == other._mask

    def __hash__(self) -> int:
        return hash(self._mask)

    def __repr__(self) -> str:
        return f"ScopeSet({list(self)!r})"
