"""
Send every order in order_data.json with SendMessageBatch

SendMessageBatch takes at most 10 entries; each response lists which entries
succeeded and which failed, so one call can partially succeed.
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import SqsQueueBackend
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors
from cloud_scripts.sqs.orders import load_orders
from cloud_scripts.sqs.send_message import order_attributes

HINTS = {
    ResourceNotFound: "The queue does not exist. Run create_queue first.",
}

MAX_BATCH_ENTRIES = 10


def create_batch_entries(orders, offset=0):
    entries = []
    for index, order in enumerate(orders, offset):
        attributes = order_attributes(order)
        attributes['OrderId'] = {'DataType': 'String', 'StringValue': order.orderId}
        entries.append({
            'Id':                f"msg-{index}",   # unique within one batch
            'MessageBody':       order.to_json(),
            'MessageAttributes': attributes,
        })
    return entries


def chunked(items, size):
    return [items[i:i + size] for i in range(0, len(items), size)]


def send_batches(client, queue_url, orders):
    """Returns (success_count, failed_entries)."""
    success, failed = 0, []
    for batch_number, chunk in enumerate(chunked(orders, MAX_BATCH_ENTRIES), 1):
        entries = create_batch_entries(chunk, offset=(batch_number - 1) * MAX_BATCH_ENTRIES)
        with translate_errors('SendMessageBatch'):
            response = client.send_message_batch(QueueUrl=queue_url, Entries=entries)

        print(f"\n[batch {batch_number}] {len(entries)} message(s)")
        for ok in response.get('Successful', []):
            print(f"  ✓ {ok['Id']}: {ok['MessageId']}")
        for bad in response.get('Failed', []):
            print(f"  ✗ {bad['Id']}: {bad.get('Code')} {bad.get('Message', '')}")

        success += len(response.get('Successful', []))
        failed.extend(response.get('Failed', []))
    return success, failed


def main():
    config.configure_logging()
    client = clients.sqs_client()

    try:
        queue_url = SqsQueueBackend(client).queue_url(config.QUEUE_NAME)
        orders = load_orders()
        print(f"Sending {len(orders)} order(s) to {config.QUEUE_NAME}")
        print(RULE)

        success, failed = send_batches(client, queue_url, orders)

        print(f"\n{RULE}")
        print(f"Done: success={success}, failed={len(failed)}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
