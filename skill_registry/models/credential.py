from __future__ import annotations

from dataclasses import dataclass

MIN_PROFICIENCY = 1  # beginner
MAX_PROFICIENCY = 5  # expert

NO_EXPIRY = 0


@dataclass(frozen=True, slots=True)
class Credential:
    """A skill credential bound to one learner by one issuer.

    Timestamps are Unix seconds supplied by the ledger clock.
    expiry_date == NO_EXPIRY marks a permanent credential.
    """

    id: int
    learner: str
    issuer: str
    skill_name: str
    description: str
    proficiency_level: int
    issue_date: int
    expiry_date: int
    metadata_hash: str = ""
    is_active: bool = True

    @property
    def is_permanent(self) -> bool:
        return self.expiry_date == NO_EXPIRY

    def is_expired_at(self, now: int) -> bool:
        if self.is_permanent:
            return False
        return now > self.expiry_date
