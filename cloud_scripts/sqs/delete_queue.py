"""
Delete the queue (looked up by name)

Deletion takes up to 60 seconds; a queue with the same name cannot be
created again during that window.
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import SqsQueueBackend
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The queue does not exist.",
}


def delete_queue(client, queue_name):
    queue_url = SqsQueueBackend(client).queue_url(queue_name)
    with translate_errors('DeleteQueue'):
        client.delete_queue(QueueUrl=queue_url)
    return queue_url


def main():
    config.configure_logging()
    client = clients.sqs_client()

    try:
        print(f"Deleting queue: {config.QUEUE_NAME}")
        print(RULE)
        queue_url = delete_queue(client, config.QUEUE_NAME)
        print("✓ Queue deleted")
        print(f"Queue name: {config.QUEUE_NAME}")
        print(f"Queue URL:  {queue_url}")
        print("\nNote: deletion can take up to 60 seconds to complete.")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
