"""
Delete one score and show what was removed
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, pretty, report_error
from cloud_scripts.errors import Conflict, ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "Table not found.",
    ValidationFailure: "Request validation failed. Check the key.",
    Conflict:          "Delete condition not met.",
}


def delete_item(table, user_id, game_id):
    """Returns the deleted item, or None when nothing matched the key."""
    with translate_errors('DeleteItem'):
        response = table.delete_item(
            Key={'user_id': user_id, 'game_id': game_id},
            ReturnValues='ALL_OLD',
        )
    return response.get('Attributes')


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        print("Deleting user_id=3, game_id=G001")
        print(RULE)
        deleted = delete_item(table, '3', 'G001')
        if deleted:
            print("✓ Item deleted")
            print(pretty(deleted))
        else:
            print("No item matched the key; nothing was deleted")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
