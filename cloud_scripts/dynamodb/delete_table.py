"""
Delete the GameScores table and wait until it is gone
"""

from cloud_scripts import clients, config
from cloud_scripts.adapters import DynamoDBTableDescriber
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import Conflict, ResourceNotFound, Throttled, translate_errors
from cloud_scripts.poller import ConvergencePoller, PollTarget

HINTS = {
    ResourceNotFound: "Table not found. It may already have been deleted.",
    Conflict:         "The table is in use. Wait a moment and try again.",
    Throttled:        "Too many concurrent table operations.",
}

# default for "deadline": use the configured value
_FROM_CONFIG = object()


def delete_table(client, table_name):
    with translate_errors('DeleteTable'):
        response = client.delete_table(TableName=table_name)
    return response['TableDescription']


def wait_until_deleted(client, table_name, interval=None, deadline=_FROM_CONFIG, on_progress=None):
    """Poll until describe_table reports the table missing.

    Nothing counts as "converged" here; NotFound is the success outcome.
    """
    target = PollTarget(table_name, terminal=frozenset(), intermediate=frozenset({'DELETING', 'ACTIVE'}))
    poller = ConvergencePoller(DynamoDBTableDescriber(client), on_progress=on_progress)
    return poller.wait_for_status(
        target,
        interval=config.POLL_INTERVAL_SECONDS if interval is None else interval,
        deadline=config.TABLE_WAIT_DEADLINE_SECONDS if deadline is _FROM_CONFIG else deadline,
    )


def display_success(description):
    print("✓ Delete table request accepted")
    print(RULE)
    print(f"Table name: {na(description.get('TableName'))}")
    print(f"Table ARN:  {na(description.get('TableArn'))}")
    print(f"Status:     {na(description.get('TableStatus'))}")
    print("\nNote: table deletion is asynchronous.")


def main():
    config.configure_logging()
    client = clients.dynamodb_client()

    try:
        print(f"Deleting table {config.TABLE_NAME}")
        print(RULE)
        display_success(delete_table(client, config.TABLE_NAME))

        print("\nWaiting for the table to be fully deleted...")
        outcome = wait_until_deleted(
            client, config.TABLE_NAME,
            on_progress=lambda e: print(f"  [check {e.attempt}] status: {e.status}"))
        if outcome.failed:
            raise outcome.cause

        print("✓ Table deleted")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
