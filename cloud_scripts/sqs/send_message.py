"""
Send one order message with message attributes
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import SqsQueueBackend
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors
from cloud_scripts.sqs.orders import dummy_order

HINTS = {
    ResourceNotFound: "The queue does not exist. Run create_queue first.",
}


def order_attributes(order):
    return {
        'OrderType': {'DataType': 'String', 'StringValue': 'Standard'},
        'Priority':  {'DataType': 'Number', 'StringValue': '1'},
    }


def send_order(client, queue_url, order):
    with translate_errors('SendMessage'):
        return client.send_message(
            QueueUrl=queue_url,
            MessageBody=order.to_json(),
            MessageAttributes=order_attributes(order),
        )


def main():
    config.configure_logging()
    client = clients.sqs_client()

    try:
        queue_url = SqsQueueBackend(client).queue_url(config.QUEUE_NAME)
        order = dummy_order()

        print(f"Sending order {order.orderId} to {config.QUEUE_NAME}")
        print(RULE)
        response = send_order(client, queue_url, order)

        print("✓ Message sent")
        print(f"Message ID:   {response['MessageId']}")
        print(f"Body MD5:     {response.get('MD5OfMessageBody')}")
        print(f"Customer:     {order.customerName}")
        print(f"Total amount: ¥{order.totalAmount:,}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
