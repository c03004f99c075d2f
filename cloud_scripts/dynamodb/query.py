"""
Query all scores for one user (partition key condition)
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, print_items, report_error
from cloud_scripts.errors import ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "Table not found.",
    ValidationFailure: "Query validation failed. Check the key condition.",
}


def query_by_user_id(table, user_id):
    with translate_errors('Query'):
        response = table.query(
            KeyConditionExpression='user_id = :userId',
            ExpressionAttributeValues={':userId': user_id},
        )
    return response.get('Items', []), response.get('LastEvaluatedKey')


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        print("Query: user_id = 3")
        print(RULE)
        print_items(*query_by_user_id(table, '3'))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
