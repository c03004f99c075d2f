"""
Drain the queue: long-poll receive until a receive comes back empty

Standard queues do not preserve order, and an empty receive only means the
queue looked empty at that moment.
"""

import signal
import threading

from cloud_scripts import clients, config
from cloud_scripts.adapters import SqsQueueBackend
from cloud_scripts.display import RULE, report_error
from cloud_scripts.drainer import QueueDrainer
from cloud_scripts.sqs.receive_message_longpolling import HINTS, print_order


def print_batch(report):
    print(f"\nBatch {report.batch_number} done: "
          f"received={report.received}, deleted={report.acknowledged}, failed={report.failed}")


def drain_queue(backend, queue_url, max_batch, wait_seconds, process=print_order, cancel=None):
    drainer = QueueDrainer(backend, max_batch=max_batch, wait_seconds=wait_seconds,
                           on_batch=print_batch, cancel=cancel)
    return drainer.drain(queue_url, process)


def main():
    config.configure_logging()
    backend = SqsQueueBackend(clients.sqs_client())

    # Ctrl+C stops before the next receive instead of mid-batch
    cancel = threading.Event()
    signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())

    try:
        print(f"Receiving every message from {config.QUEUE_NAME}")
        print(f"Long polling: WaitTimeSeconds={config.RECEIVE_WAIT_SECONDS}")
        print(RULE)
        queue_url = backend.queue_url(config.QUEUE_NAME)
        print(f"Queue URL: {queue_url}\n")

        result = drain_queue(backend, queue_url, config.RECEIVE_MAX_MESSAGES,
                             config.RECEIVE_WAIT_SECONDS, cancel=cancel)

        print(f"\n{RULE}")
        if result.cancelled:
            print("Stopped before the queue was empty")
        else:
            print(f"✓ Queue empty (last receive waited {config.RECEIVE_WAIT_SECONDS}s)")
        print(f"Batches: {result.batches}")
        print(f"Total: received={result.received}, deleted={result.acknowledged}, failed={result.failed}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
