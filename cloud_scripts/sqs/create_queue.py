"""
Create a standard SQS queue
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import Conflict, translate_errors

HINTS = {
    Conflict: ("A queue with this name exists with different attributes, "
               "or it was deleted less than 60 seconds ago."),
}

QUEUE_ATTRIBUTES = {
    'DelaySeconds':                  '0',
    'MessageRetentionPeriod':        '345600',   # 4 days
    'VisibilityTimeout':             '30',
    'ReceiveMessageWaitTimeSeconds': '0',        # short polling unless the receiver asks
}


def create_queue(client, queue_name, attributes=None):
    with translate_errors('CreateQueue'):
        response = client.create_queue(QueueName=queue_name, Attributes=attributes or QUEUE_ATTRIBUTES)
    return response['QueueUrl']


def main():
    config.configure_logging()
    client = clients.sqs_client()

    try:
        print(f"Creating standard queue: {config.QUEUE_NAME}")
        print(RULE)
        queue_url = create_queue(client, config.QUEUE_NAME)
        print("✓ Queue created")
        print(f"Queue URL: {queue_url}")
        print("\nSettings:")
        for key, value in QUEUE_ATTRIBUTES.items():
            print(f"  {key}: {value}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
