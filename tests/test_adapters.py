import pytest
from botocore.stub import Stubber

from cloud_scripts.adapters import DynamoDBTableDescriber, SqsQueueBackend, to_message
from cloud_scripts.errors import AccessDenied, ResourceNotFound, Throttled

from conftest import make_client

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/order-queue"


@pytest.fixture
def dynamodb():
    client = make_client("dynamodb")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def sqs():
    client = make_client("sqs")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


def test_describe_table_exposes_gsis(dynamodb):
    client, stubber = dynamodb
    stubber.add_response(
        "describe_table",
        {"Table": {
            "TableName": "GameScores",
            "TableStatus": "UPDATING",
            "GlobalSecondaryIndexes": [{"IndexName": "GameScoreIndex", "IndexStatus": "CREATING"}],
        }},
        {"TableName": "GameScores"},
    )

    described = DynamoDBTableDescriber(client).describe_resource("GameScores")

    assert described.exists
    assert described.status == "UPDATING"
    assert described.find("GameScoreIndex").status == "CREATING"
    assert described.find("Missing") is None


def test_missing_table_is_reported_as_not_existing(dynamodb):
    client, stubber = dynamodb
    stubber.add_client_error("describe_table", service_error_code="ResourceNotFoundException",
                             expected_params={"TableName": "GameScores"})

    described = DynamoDBTableDescriber(client).describe_resource("GameScores")

    assert not described.exists
    assert described.status is None


def test_other_describe_errors_propagate(dynamodb):
    client, stubber = dynamodb
    stubber.add_client_error("describe_table", service_error_code="AccessDeniedException",
                             http_status_code=400)

    with pytest.raises(AccessDenied):
        DynamoDBTableDescriber(client).describe_resource("GameScores")


def test_receive_messages_maps_response(sqs):
    client, stubber = sqs
    stubber.add_response(
        "receive_message",
        {"Messages": [{
            "MessageId": "id-1",
            "ReceiptHandle": "rh-1",
            "Body": '{"orderId": "ORD-1"}',
            "MessageAttributes": {"OrderType": {"StringValue": "Standard", "DataType": "String"}},
        }]},
        {
            "QueueUrl": QUEUE_URL,
            "MaxNumberOfMessages": 10,
            "WaitTimeSeconds": 20,
            "MessageAttributeNames": ["All"],
            "VisibilityTimeout": 60,
        },
    )

    messages = SqsQueueBackend(client).receive_messages(QUEUE_URL, 10, 20, visibility_timeout=60)

    assert len(messages) == 1
    assert messages[0].message_id == "id-1"
    assert messages[0].attributes == {"OrderType": "Standard"}
    assert messages[0].take_receipt_handle() == "rh-1"


def test_empty_receive_returns_empty_list(sqs):
    client, stubber = sqs
    stubber.add_response("receive_message", {}, {
        "QueueUrl": QUEUE_URL,
        "MaxNumberOfMessages": 5,
        "WaitTimeSeconds": 0,
        "MessageAttributeNames": ["All"],
    })

    assert SqsQueueBackend(client).receive_messages(QUEUE_URL, 5, 0) == []


def test_delete_and_queue_url(sqs):
    client, stubber = sqs
    stubber.add_response("get_queue_url", {"QueueUrl": QUEUE_URL}, {"QueueName": "order-queue"})
    stubber.add_response("delete_message", {}, {"QueueUrl": QUEUE_URL, "ReceiptHandle": "rh-1"})

    backend = SqsQueueBackend(client)
    assert backend.queue_url("order-queue") == QUEUE_URL
    backend.delete_message(QUEUE_URL, "rh-1")


def test_missing_queue_translates(sqs):
    client, stubber = sqs
    stubber.add_client_error("get_queue_url", service_error_code="AWS.SimpleQueueService.NonExistentQueue")

    with pytest.raises(ResourceNotFound):
        SqsQueueBackend(client).queue_url("nope")


def test_throttled_receive_translates(sqs):
    client, stubber = sqs
    stubber.add_client_error("receive_message", service_error_code="OverLimit")

    with pytest.raises(Throttled):
        SqsQueueBackend(client).receive_messages(QUEUE_URL, 1, 0)


def test_to_message_without_attributes():
    message = to_message({"MessageId": "x", "Body": "b", "ReceiptHandle": "rh"})
    assert message.attributes == {}
    assert not message.acknowledged
