from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller extracted from a validated JWT.

    The registry core only ever sees ``identity``; it compares it against
    the owner, the authorized-issuer set, or a credential's issuer.  It
    never verifies the identity itself.
    """

    identity: str
    token_id: str | None = None
