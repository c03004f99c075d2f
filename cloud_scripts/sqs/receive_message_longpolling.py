"""
Receive one batch with long polling (waits up to 20 seconds)

Each order that parses is printed and deleted; anything else stays in the
queue and becomes visible again after the visibility timeout.
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import SqsQueueBackend
from cloud_scripts.display import RULE, report_error
from cloud_scripts.drainer import QueueDrainer
from cloud_scripts.errors import ResourceNotFound, Throttled
from cloud_scripts.sqs.orders import OrderInfo

HINTS = {
    ResourceNotFound: "The queue does not exist. Run create_queue first.",
    Throttled:        "Request limit exceeded.",
}


def print_order(message):
    """Display one order message. Raises when the body is missing or not an order."""
    print(f"\n[message {message.message_id}]")
    if message.attributes:
        print("Attributes:")
        for key, value in message.attributes.items():
            print(f"  {key}: {value}")

    if not message.body:
        raise ValueError("message has no body")
    order = OrderInfo.from_json(message.body)
    print(f"Order ID:     {order.orderId}")
    print(f"Customer:     {order.customerName}")
    print(f"Total amount: ¥{order.totalAmount:,}")


def receive_once(backend, queue_url, max_messages, wait_seconds, process=print_order):
    """One long-poll receive; returns the BatchReport or None if nothing arrived."""
    drainer = QueueDrainer(backend, max_batch=max_messages, wait_seconds=wait_seconds)
    messages = backend.receive_messages(queue_url, max_messages, wait_seconds)
    if not messages:
        return None
    return drainer.process_batch(queue_url, messages, process)


def main():
    config.configure_logging()
    backend = SqsQueueBackend(clients.sqs_client())

    try:
        print(f"Receiving from {config.QUEUE_NAME}")
        print(f"Long polling: WaitTimeSeconds={config.RECEIVE_WAIT_SECONDS}")
        print(RULE)
        queue_url = backend.queue_url(config.QUEUE_NAME)
        print(f"Queue URL: {queue_url}\n")

        report = receive_once(backend, queue_url, config.RECEIVE_MAX_MESSAGES, config.RECEIVE_WAIT_SECONDS)
        if report is None:
            print(f"✗ No messages (waited {config.RECEIVE_WAIT_SECONDS}s)")
            return

        print(f"\n{RULE}")
        print(f"Received {report.received}: deleted={report.acknowledged}, left in queue={report.failed}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
