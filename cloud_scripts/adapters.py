"""
boto3-backed collaborators for the poller and the drainer

DynamoDBTableDescriber  → describe_table, GSIs exposed as sub-entities
SqsQueueBackend         → receive_message / delete_message / get_queue_url
"""

from cloud_scripts.drainer import Message
from cloud_scripts.errors import ResourceNotFound, translate_errors
from cloud_scripts.poller import ResourceDescription, SubEntity


class DynamoDBTableDescriber:
    """Describe a DynamoDB table for ConvergencePoller."""

    def __init__(self, client):
        self.client = client

    def describe_resource(self, name):
        try:
            with translate_errors('DescribeTable'):
                response = self.client.describe_table(TableName=name)
        except ResourceNotFound:
            return ResourceDescription(name=name, exists=False)

        table = response['Table']
        indexes = tuple(
            SubEntity(gsi['IndexName'], gsi.get('IndexStatus'))
            for gsi in table.get('GlobalSecondaryIndexes', [])
        )
        return ResourceDescription(
            name=name,
            exists=True,
            status=table.get('TableStatus'),
            sub_entities=indexes,
        )


class SqsQueueBackend:
    """Receive / delete against an SQS queue for QueueDrainer."""

    def __init__(self, client):
        self.client = client

    def queue_url(self, queue_name):
        with translate_errors('GetQueueUrl'):
            return self.client.get_queue_url(QueueName=queue_name)['QueueUrl']

    def receive_messages(self, queue_url, max_messages, wait_seconds, visibility_timeout=None):
        params = {
            'QueueUrl':              queue_url,
            'MaxNumberOfMessages':   max_messages,
            'WaitTimeSeconds':       wait_seconds,
            'MessageAttributeNames': ['All'],
        }
        if visibility_timeout is not None:
            params['VisibilityTimeout'] = visibility_timeout

        with translate_errors('ReceiveMessage'):
            response = self.client.receive_message(**params)

        return [to_message(m) for m in response.get('Messages', [])]

    def delete_message(self, queue_url, receipt_handle):
        with translate_errors('DeleteMessage'):
            self.client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt_handle)


def to_message(raw):
    """SQS message dict → Message; attribute values flattened to their string/binary value."""
    attributes = {}
    for key, value in raw.get('MessageAttributes', {}).items():
        attributes[key] = value.get('StringValue', value.get('BinaryValue'))
    return Message(
        message_id=raw.get('MessageId'),
        body=raw.get('Body'),
        receipt_handle=raw['ReceiptHandle'],
        attributes=attributes,
    )
