"""Decide whether an installed version is behind the registry.

A stable installed version only ever competes against stable releases, so
nobody running a release build is nudged towards a release candidate. An
installed pre-release opts into pre-release candidates as well.

The registry reports releases in publication order, and by default the last
eligible release is taken as the latest one rather than re-sorting the
list. Pass ``trust_publication_order=False`` to pick the highest version by
semantic ordering instead.
"""
import dataclasses
from enum import Enum
from typing import Iterable, Optional

from version_check.versions import Version, is_pre_release


class OutcomeKind(Enum):
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


@dataclasses.dataclass(frozen=True)
class UpdateOutcome:
    kind: OutcomeKind
    current: Optional[Version] = None
    latest: Optional[Version] = None

    @classmethod
    def up_to_date(cls, current: Version) -> "UpdateOutcome":
        return cls(OutcomeKind.UP_TO_DATE, current=current)

    @classmethod
    def update_available(cls, current: Version, latest: Version) -> "UpdateOutcome":
        return cls(OutcomeKind.UPDATE_AVAILABLE, current=current, latest=latest)

    @classmethod
    def not_found(cls) -> "UpdateOutcome":
        return cls(OutcomeKind.NOT_FOUND)

    @classmethod
    def invalid_input(cls) -> "UpdateOutcome":
        return cls(OutcomeKind.INVALID_INPUT)

    @property
    def should_update(self) -> bool:
        return self.kind == OutcomeKind.UPDATE_AVAILABLE

    def __str__(self) -> str:
        if self.kind == OutcomeKind.UPDATE_AVAILABLE:
            return f"{self.kind.value} ({self.latest} > {self.current})"
        if self.kind == OutcomeKind.UP_TO_DATE:
            return f"{self.kind.value} ({self.current})"
        return self.kind.value


@dataclasses.dataclass(frozen=True)
class PackageQuery:
    name: str
    current: Optional[Version] = None


def eligible_releases(releases: Iterable[Version], current: Version) -> list[Version]:
    if is_pre_release(current):
        return list(releases)
    return [release for release in releases if not is_pre_release(release)]


def latest_version(
    releases: Iterable[Version], current: Version, trust_publication_order: bool = True
) -> Version:
    """Latest release ``current`` could move to, or ``current`` if none qualifies."""
    candidates = eligible_releases(releases, current)
    if not candidates:
        return current

    if trust_publication_order:
        return candidates[-1]
    return max(candidates)


def decide(
    releases: list[Version],
    current: Optional[Version],
    trust_publication_order: bool = True,
) -> UpdateOutcome:
    if current is None:
        return UpdateOutcome.invalid_input()

    if not releases:
        return UpdateOutcome.not_found()

    latest = latest_version(releases, current, trust_publication_order)
    if current < latest:
        return UpdateOutcome.update_available(current, latest)
    return UpdateOutcome.up_to_date(current)
