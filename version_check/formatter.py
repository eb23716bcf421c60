import dataclasses
import logging
from enum import Enum
from typing import Optional

from version_check.decision import OutcomeKind, UpdateOutcome

logger = logging.getLogger(__name__)


class Severity(Enum):
    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return {
            Severity.DEBUG: logging.DEBUG,
            Severity.WARNING: logging.WARNING,
            Severity.ERROR: logging.ERROR,
        }[self]


@dataclasses.dataclass(frozen=True)
class Notice:
    severity: Optional[Severity] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.severity is not None


def format_outcome(outcome: UpdateOutcome, package_name: str) -> Notice:
    """Turn an outcome into the notice a caller should show.

    ``NOT_FOUND`` yields an empty notice: there is nothing worth telling the user.
    """
    if outcome.kind == OutcomeKind.UPDATE_AVAILABLE:
        return Notice(
            Severity.WARNING,
            f"A new {package_name} version is available ({outcome.latest} > {outcome.current})",
        )
    elif outcome.kind == OutcomeKind.UP_TO_DATE:
        return Notice(
            Severity.DEBUG,
            f"Using the latest version of {package_name} ({outcome.current})",
        )
    elif outcome.kind == OutcomeKind.INVALID_INPUT:
        return Notice(Severity.ERROR, "No application defined for version check")

    return Notice()


def emit(notice: Notice, log: Optional[logging.Logger] = None):
    if not notice:
        return

    (log or logger).log(notice.severity.log_level, notice.message)
