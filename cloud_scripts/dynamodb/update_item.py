"""
Conditional update: add one life, but only when score >= 3000
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, pretty, report_error
from cloud_scripts.errors import Conflict, ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    Conflict:          "Condition not met: score is below 3000.",
    ResourceNotFound:  "Table not found.",
    ValidationFailure: "Request validation failed.",
}


def update_item_conditionally(table, key, increment=1, min_score=3000):
    with translate_errors('UpdateItem'):
        response = table.update_item(
            Key=key,
            UpdateExpression='SET life = life + :increment',
            ConditionExpression='score >= :minScore',
            ExpressionAttributeValues={':increment': increment, ':minScore': min_score},
            ReturnValues='ALL_NEW',
        )
    return response.get('Attributes')


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        print("Updating user_id=3, game_id=G001 (life + 1 if score >= 3000)")
        print(RULE)
        updated = update_item_conditionally(table, {'user_id': '3', 'game_id': 'G001'})
        if updated:
            print("✓ Item updated")
            print(pretty(updated))
        else:
            print("Nothing returned")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
