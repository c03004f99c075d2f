"""
Scan the table with a filter (life >= 3)

The filter runs after the read, so every item is still read and billed.
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, print_items, report_error
from cloud_scripts.errors import ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "Table not found.",
    ValidationFailure: "Scan validation failed. Check the filter expression.",
}


def scan_items_by_life(table, min_life=3):
    with translate_errors('Scan'):
        response = table.scan(
            FilterExpression='life >= :minLife',
            ExpressionAttributeValues={':minLife': min_life},
        )
    return response.get('Items', []), response.get('LastEvaluatedKey')


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        print("Scan: life >= 3")
        print(RULE)
        print_items(*scan_items_by_life(table))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
