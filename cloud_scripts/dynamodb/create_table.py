"""
Create the GameScores table and wait until it is ACTIVE

Table design:
    - Partition key: user_id (S)
    - Sort key:      game_id (S)
    - Provisioned throughput 1/1 (free-tier friendly)
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import DynamoDBTableDescriber
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import Conflict, Throttled, translate_errors
from cloud_scripts.poller import ConvergencePoller, PollTarget

HINTS = {
    Conflict:  "This table name is already in use.",
    Throttled: "The account's table limit has been reached.",
}

# default for "deadline": use the configured value
_FROM_CONFIG = object()


def create_table(client, table_name):
    with translate_errors('CreateTable'):
        response = client.create_table(
            TableName=table_name,
            KeySchema=[
                {'AttributeName': 'user_id', 'KeyType': 'HASH'},    # Partition key
                {'AttributeName': 'game_id', 'KeyType': 'RANGE'},   # Sort key
            ],
            AttributeDefinitions=[
                {'AttributeName': 'user_id', 'AttributeType': 'S'},
                {'AttributeName': 'game_id', 'AttributeType': 'S'},
            ],
            BillingMode='PROVISIONED',
            ProvisionedThroughput={'ReadCapacityUnits': 1, 'WriteCapacityUnits': 1},
        )
    return response['TableDescription']


def wait_until_active(client, table_name, interval=None, deadline=_FROM_CONFIG, on_progress=None):
    poller = ConvergencePoller(DynamoDBTableDescriber(client), on_progress=on_progress)
    return poller.wait_for_status(
        PollTarget(table_name),
        interval=config.POLL_INTERVAL_SECONDS if interval is None else interval,
        deadline=config.TABLE_WAIT_DEADLINE_SECONDS if deadline is _FROM_CONFIG else deadline,
    )


def display_success(description):
    print("✓ Create table request accepted")
    print(RULE)
    print(f"Table name: {na(description.get('TableName'))}")
    print(f"Table ARN:  {na(description.get('TableArn'))}")
    print(f"Status:     {na(description.get('TableStatus'))}")
    print(f"Created at: {na(description.get('CreationDateTime'))}")
    print("\nNote: table creation is asynchronous.")


def main():
    config.configure_logging()
    client = clients.dynamodb_client()

    try:
        description = create_table(client, config.TABLE_NAME)
        display_success(description)

        print("\nWaiting for the table to become ACTIVE...")
        outcome = wait_until_active(
            client, config.TABLE_NAME,
            on_progress=lambda e: print(f"  [check {e.attempt}] status: {e.status}"))
        if outcome.failed:
            raise outcome.cause
        if outcome.not_found:
            raise RuntimeError(f"Table {config.TABLE_NAME} disappeared while waiting for ACTIVE")

        print("✓ Table is ACTIVE")
        print("Table creation complete.")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
