"""
Same lookup as query.py, written as a PartiQL SELECT
"""

from boto3.dynamodb.types import TypeDeserializer

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, print_items, report_error
from cloud_scripts.errors import ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "Table not found.",
    ValidationFailure: "Statement validation failed. Check the PartiQL syntax.",
}

_deserializer = TypeDeserializer()


def select_scores(client, table_name, user_id):
    statement = f'SELECT game_id, score, life FROM "{table_name}" WHERE user_id = ?'
    with translate_errors('ExecuteStatement'):
        response = client.execute_statement(
            Statement=statement,
            Parameters=[{'S': user_id}],
        )
    return [
        {k: _deserializer.deserialize(v) for k, v in item.items()}
        for item in response.get('Items', [])
    ]


def main():
    config.configure_logging()
    client = clients.dynamodb_client()

    try:
        print(f'PartiQL: SELECT game_id, score, life FROM "{config.TABLE_NAME}" WHERE user_id = ?')
        print(RULE)
        print_items(select_scores(client, config.TABLE_NAME, '3'))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
