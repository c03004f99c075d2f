"""
Queue drainer
Empties a queue with long-poll receives, acknowledging each message on its own.

Flow:
    receive (up to max_batch, blocking up to wait_seconds)
        → empty batch           → stop, return totals
        → for each message      → process(message)
              ok                → delete with its receipt handle (acknowledged)
              raises / False    → leave it; it comes back after the
                                  visibility timeout (failed)

Notes for callers:
    - Standard queues give no ordering guarantee. Messages inside one batch
      are processed in receive order, nothing more.
    - "Drained" means the last receive came back empty. A later receive can
      still return messages that were in flight or not yet visible.
    - A failed message is never deleted, retried or de-duplicated here; its
      natural redelivery is the recovery path.
    - Errors from receive / delete themselves abort the drain and propagate.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

# SQS per-call limits
MAX_BATCH_LIMIT = 10
MAX_WAIT_SECONDS_LIMIT = 20


class ReceiptHandleConsumed(RuntimeError):
    """Raised when a message's receipt handle is taken a second time."""


class Message:
    """Local copy of one delivery.

    The receipt handle is only valid for this delivery and is handed out
    once, when the message is acknowledged.
    """

    def __init__(self, message_id, body, receipt_handle, attributes=None):
        self.message_id = message_id
        self.body = body
        self.attributes = dict(attributes or {})
        self._receipt_handle = receipt_handle

    def __repr__(self):
        return f"Message(message_id={self.message_id!r})"

    @property
    def acknowledged(self):
        return self._receipt_handle is None

    def take_receipt_handle(self):
        if self._receipt_handle is None:
            raise ReceiptHandleConsumed(f"receipt handle of {self.message_id} already used")
        handle, self._receipt_handle = self._receipt_handle, None
        return handle


class QueueBackend(Protocol):
    def receive_messages(self, queue_url: str, max_messages: int, wait_seconds: int,
                         visibility_timeout: Optional[int] = None) -> List[Message]:
        ...

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        ...


@dataclass(frozen=True)
class BatchReport:
    batch_number: int
    received: int
    acknowledged: int
    failed: int


@dataclass(frozen=True)
class DrainResult:
    received: int = 0
    acknowledged: int = 0
    failed: int = 0
    batches: int = 0
    cancelled: bool = False


class QueueDrainer:
    """Receive and acknowledge until a receive comes back empty.

    Args:
        backend: object with ``receive_messages`` / ``delete_message``
        max_batch: messages per receive, 1..10
        wait_seconds: long-poll wait per receive, 0..20
        visibility_timeout: optional per-receive override, in seconds
        on_batch: called with a BatchReport after every non-empty batch
        cancel: ``threading.Event`` checked before every receive
    """

    def __init__(self, backend, max_batch=MAX_BATCH_LIMIT, wait_seconds=MAX_WAIT_SECONDS_LIMIT,
                 visibility_timeout=None, on_batch=None, cancel=None):
        if not 1 <= max_batch <= MAX_BATCH_LIMIT:
            raise ValueError(f"max_batch must be between 1 and {MAX_BATCH_LIMIT}")
        if not 0 <= wait_seconds <= MAX_WAIT_SECONDS_LIMIT:
            raise ValueError(f"wait_seconds must be between 0 and {MAX_WAIT_SECONDS_LIMIT}")
        if visibility_timeout is not None and visibility_timeout < 0:
            raise ValueError("visibility_timeout must be >= 0")
        self.backend = backend
        self.max_batch = max_batch
        self.wait_seconds = wait_seconds
        self.visibility_timeout = visibility_timeout
        self.on_batch = on_batch
        self.cancel = cancel

    def drain(self, queue_url, process):
        """Drain ``queue_url`` and return the totals.

        ``process(message)`` signals failure by raising or returning False;
        any other return value counts as success.
        """
        received = acknowledged = failed = batches = 0

        while True:
            if self.cancel is not None and self.cancel.is_set():
                logger.info("drain of %s cancelled after %d batch(es)", queue_url, batches)
                return DrainResult(received, acknowledged, failed, batches, cancelled=True)

            messages = self.backend.receive_messages(
                queue_url, self.max_batch, self.wait_seconds, self.visibility_timeout)
            if not messages:
                logger.info("queue empty after %d batch(es): received=%d acknowledged=%d failed=%d",
                            batches, received, acknowledged, failed)
                return DrainResult(received, acknowledged, failed, batches)

            batches += 1
            report = self.process_batch(queue_url, messages, process, batches)
            received += report.received
            acknowledged += report.acknowledged
            failed += report.failed

    def process_batch(self, queue_url, messages, process, batch_number=1):
        """Process one received batch; returns its BatchReport."""
        acknowledged = failed = 0

        for message in messages:
            if self._process_one(message, process):
                self.backend.delete_message(queue_url, message.take_receipt_handle())
                acknowledged += 1
            else:
                failed += 1

        report = BatchReport(batch_number, len(messages), acknowledged, failed)
        logger.debug("batch %d: received=%d acknowledged=%d failed=%d",
                    report.batch_number, report.received, report.acknowledged, report.failed)
        if self.on_batch is not None:
            self.on_batch(report)
        return report

    def _process_one(self, message, process):
        try:
            ok = process(message)
        except Exception:
            logger.warning("processing %s failed; leaving it for redelivery",
                           message.message_id, exc_info=True)
            return False
        if ok is False:
            logger.warning("processing %s reported failure; leaving it for redelivery",
                           message.message_id)
            return False
        return True
