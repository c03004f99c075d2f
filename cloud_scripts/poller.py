"""
Convergence poller
Turns "this table / index will become ACTIVE eventually" into a blocking call.

Flow (one iteration):
    describe_resource(name)
        → absent                → NotFound            (stop)
        → status in terminal    → Converged(status)   (stop)
        → status in transient   → progress, sleep     (repeat)
        → any other status      → progress flagged anomalous, sleep (repeat)
        → AwsError raised       → Failed(cause)       (stop, no retry here)

The interval is slept after each response, so a slow describe call never
shortens the gap between calls. Without a deadline the loop runs until the
remote status converges or the caller cancels.
"""

import logging
import time
from dataclasses import dataclass
from typing import FrozenSet, Optional, Protocol, Tuple

from cloud_scripts.errors import AwsError

logger = logging.getLogger(__name__)

ACTIVE = 'ACTIVE'
DEFAULT_INTERVAL_SECONDS = 10.0


# ─────────────────────────────────────────────────────────────────────────────
#  COLLABORATOR SHAPES
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class SubEntity:
    name: str
    status: Optional[str]


@dataclass(frozen=True)
class ResourceDescription:
    name: str
    exists: bool
    status: Optional[str] = None
    sub_entities: Tuple[SubEntity, ...] = ()

    def find(self, sub_entity_name):
        for entity in self.sub_entities:
            if entity.name == sub_entity_name:
                return entity
        return None


class ResourceDescriber(Protocol):
    def describe_resource(self, name: str) -> ResourceDescription:
        ...


@dataclass(frozen=True)
class PollTarget:
    """What to watch and which statuses end the wait.

    ``sub_entity`` names a secondary index; leave it None to watch the
    table's own status.
    """
    resource_name: str
    sub_entity: Optional[str] = None
    terminal: FrozenSet[str] = frozenset({ACTIVE})
    intermediate: FrozenSet[str] = frozenset({'CREATING', 'UPDATING'})

    @property
    def label(self):
        if self.sub_entity:
            return f"{self.resource_name}/{self.sub_entity}"
        return self.resource_name


@dataclass(frozen=True)
class ProgressEvent:
    target: PollTarget
    attempt: int
    status: str
    anomalous: bool = False


# ─────────────────────────────────────────────────────────────────────────────
#  OUTCOMES
# ─────────────────────────────────────────────────────────────────────────────
class PollOutcome:
    converged = False
    not_found = False
    failed = False


@dataclass(frozen=True)
class Converged(PollOutcome):
    status: str
    attempts: int = 0
    converged = True


@dataclass(frozen=True)
class StillPending(PollOutcome):
    status: str


@dataclass(frozen=True)
class NotFound(PollOutcome):
    attempts: int = 0
    not_found = True


@dataclass(frozen=True)
class Failed(PollOutcome):
    cause: Exception
    attempts: int = 0
    failed = True

    @property
    def timed_out(self):
        return isinstance(self.cause, DeadlineExceeded)


class PollError(Exception):
    """Base for failures raised by the poll loop itself."""


class DeadlineExceeded(PollError):
    pass


class AttemptsExhausted(PollError):
    pass


class PollCancelled(PollError):
    pass


def classify(target, description):
    """Map a single describe response onto an outcome for ``target``."""
    if not description.exists:
        return NotFound()

    if target.sub_entity is None:
        status = description.status
    else:
        entity = description.find(target.sub_entity)
        if entity is None:
            return NotFound()
        status = entity.status

    if status in target.terminal:
        return Converged(status)
    return StillPending(status)


# ─────────────────────────────────────────────────────────────────────────────
#  POLLER
# ─────────────────────────────────────────────────────────────────────────────
class ConvergencePoller:
    """Poll a describer at a fixed interval until a target converges.

    Args:
        describer: object with ``describe_resource(name)``
        on_progress: called with a ProgressEvent after every non-final status
        cancel: ``threading.Event``; once set, the loop returns
            ``Failed(PollCancelled)`` at the next iteration boundary
        sleep: ``sleep(seconds)`` between checks; defaults to ``cancel.wait``
            when a cancel event is given (wakes early on cancel), otherwise
            ``time.sleep``
        clock: monotonic clock, injectable for tests

    One instance may be reused for sequential waits; concurrent use of the
    same instance is not supported.
    """

    def __init__(self, describer, on_progress=None, cancel=None,
                 sleep=None, clock=time.monotonic):
        self.describer = describer
        self.on_progress = on_progress
        self.cancel = cancel
        if sleep is None:
            sleep = cancel.wait if cancel is not None else time.sleep
        self._sleep = sleep
        self._clock = clock

    def wait_for_status(self, target, interval=DEFAULT_INTERVAL_SECONDS,
                        deadline=None, max_attempts=None):
        """Block until ``target`` converges, disappears, fails or times out.

        Returns Converged, NotFound or Failed; never StillPending.
        ``deadline`` is in seconds from the first describe call; None waits
        without limit. ``max_attempts`` optionally caps the number of calls.
        """
        if interval < 0:
            raise ValueError("interval must be >= 0")

        started = self._clock()
        attempt = 0

        while True:
            if self._cancelled():
                return Failed(PollCancelled(f"wait for {target.label} cancelled"), attempt)

            attempt += 1
            try:
                description = self.describer.describe_resource(target.resource_name)
            except AwsError as e:
                logger.warning("describe %s failed on attempt %d: %s", target.label, attempt, e)
                return Failed(e, attempt)

            outcome = classify(target, description)
            if isinstance(outcome, Converged):
                logger.info("%s reached %s after %d attempt(s)", target.label, outcome.status, attempt)
                return Converged(outcome.status, attempt)
            if isinstance(outcome, NotFound):
                logger.info("%s not found on attempt %d", target.label, attempt)
                return NotFound(attempt)

            self._report(target, attempt, outcome.status)

            if max_attempts is not None and attempt >= max_attempts:
                return Failed(AttemptsExhausted(
                    f"{target.label} still {outcome.status} after {attempt} attempts"), attempt)

            elapsed = self._clock() - started
            if deadline is not None and elapsed + interval > deadline:
                return Failed(DeadlineExceeded(
                    f"{target.label} still {outcome.status} after {elapsed:.0f}s "
                    f"(deadline {deadline:.0f}s)"), attempt)

            if self._cancelled():
                return Failed(PollCancelled(f"wait for {target.label} cancelled"), attempt)
            self._sleep(interval)

    # ── helpers ─────────────────────────────────────────────────────────────
    def _report(self, target, attempt, status):
        anomalous = status not in target.intermediate
        if anomalous:
            logger.warning("[check %d] %s has unexpected status %r; still waiting",
                           attempt, target.label, status)
        else:
            logger.debug("[check %d] %s is %s", attempt, target.label, status)
        if self.on_progress is not None:
            self.on_progress(ProgressEvent(target, attempt, status, anomalous))

    def _cancelled(self):
        return self.cancel is not None and self.cancel.is_set()
