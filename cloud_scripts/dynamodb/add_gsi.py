"""
Add the GameScoreIndex global secondary index and wait for it

Index design:
    - Partition key: game_id (S)
    - Sort key:      score (N)
    - Projection:    ALL

Index backfill can take a while, so the status is checked every
POLL_INTERVAL_SECONDS with no deadline unless GSI_WAIT_DEADLINE_SECONDS is set.
"""

import signal
import threading

from cloud_scripts import clients, config
from cloud_scripts.adapters import DynamoDBTableDescriber
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import (Conflict, ResourceNotFound, Throttled,
                                  ValidationFailure, translate_errors)
from cloud_scripts.poller import ConvergencePoller, PollCancelled, PollTarget

HINTS = {
    Conflict:          "The table is being updated. Wait a moment and try again.",
    ResourceNotFound:  "Table not found.",
    Throttled:         "The table already has the maximum number of GSIs.",
    ValidationFailure: "Request validation failed. The GSI may already exist.",
}

# default for "deadline": use the configured value
_FROM_CONFIG = object()


def add_gsi(client, table_name, index_name):
    with translate_errors('UpdateTable'):
        response = client.update_table(
            TableName=table_name,
            AttributeDefinitions=[
                {'AttributeName': 'game_id', 'AttributeType': 'S'},
                {'AttributeName': 'score',   'AttributeType': 'N'},
            ],
            GlobalSecondaryIndexUpdates=[{
                'Create': {
                    'IndexName': index_name,
                    'KeySchema': [
                        {'AttributeName': 'game_id', 'KeyType': 'HASH'},
                        {'AttributeName': 'score',   'KeyType': 'RANGE'},
                    ],
                    'Projection': {'ProjectionType': 'ALL'},
                    'ProvisionedThroughput': {'ReadCapacityUnits': 1, 'WriteCapacityUnits': 1},
                }
            }],
        )
    return response['TableDescription']


def wait_for_gsi(client, table_name, index_name, interval=None, deadline=_FROM_CONFIG,
                 on_progress=None, cancel=None):
    """Poll the index until ACTIVE. ``deadline=None`` waits without limit;
    left out, GSI_WAIT_DEADLINE_SECONDS applies."""
    poller = ConvergencePoller(DynamoDBTableDescriber(client), on_progress=on_progress, cancel=cancel)
    return poller.wait_for_status(
        PollTarget(table_name, sub_entity=index_name),
        interval=config.POLL_INTERVAL_SECONDS if interval is None else interval,
        deadline=config.GSI_WAIT_DEADLINE_SECONDS if deadline is _FROM_CONFIG else deadline,
    )


def display_success(description):
    print("✓ Add GSI request accepted")
    print(RULE)
    print(f"Table name:   {na(description.get('TableName'))}")
    print(f"Table status: {na(description.get('TableStatus'))}")

    indexes = description.get('GlobalSecondaryIndexes', [])
    if indexes:
        print("\nGlobal secondary indexes:")
        for gsi in indexes:
            print(f"  - {gsi.get('IndexName')}: {gsi.get('IndexStatus')}")


def print_progress(event):
    print(f"[check {event.attempt}] GSI \"{event.target.sub_entity}\" status: {event.status}")
    if event.anomalous:
        print(f"  Unexpected status: {event.status}")
    else:
        print(f"  Still in progress... checking again in {config.POLL_INTERVAL_SECONDS:.0f}s")


def main():
    config.configure_logging()
    client = clients.dynamodb_client()

    # Ctrl+C stops watching at the next check; the index keeps building remotely
    cancel = threading.Event()
    signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())

    try:
        print(f"Adding GSI to table {config.TABLE_NAME}")
        print(f"GSI name: {config.GSI_NAME}")
        print(RULE)
        display_success(add_gsi(client, config.TABLE_NAME, config.GSI_NAME))

        print("\nWatching GSI status...")
        print(RULE)
        outcome = wait_for_gsi(client, config.TABLE_NAME, config.GSI_NAME,
                               on_progress=print_progress, cancel=cancel)
        if outcome.failed and isinstance(outcome.cause, PollCancelled):
            print(f"\nStopped watching after {outcome.attempts} check(s); the GSI is still being built")
            return
        if outcome.failed:
            raise outcome.cause
        if outcome.not_found:
            raise RuntimeError(f"GSI {config.GSI_NAME} not found on {config.TABLE_NAME}")

        print(f"\n✓ GSI is {outcome.status}")
        print("\nGSI creation complete!")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
