"""
Read one score three ways: eventually consistent, strongly consistent,
and with a projection expression
"""

from cloud_scripts import clients, config
from cloud_scripts.display import banner, pretty, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "Table not found.",
}

KEY = {'user_id': '3', 'game_id': 'G001'}


def get_item(table, key, consistent_read=False, projection=None):
    params = {'Key': key, 'ConsistentRead': consistent_read}
    if projection:
        params['ProjectionExpression'] = projection
    with translate_errors('GetItem'):
        return table.get_item(**params).get('Item')


def show(title, item):
    banner(title)
    if item:
        print(pretty(item))
    else:
        print("Item not found")


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        show("1. Eventually consistent read", get_item(table, KEY))
        show("2. Strongly consistent read", get_item(table, KEY, consistent_read=True))
        show("3. Projection (score, life)",
             get_item(table, KEY, consistent_read=True, projection='score, life'))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
