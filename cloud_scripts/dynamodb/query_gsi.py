"""
Query the GameScoreIndex GSI: high scores for one game
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, print_items, report_error
from cloud_scripts.errors import ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "Table or index not found. Run add_gsi first.",
    ValidationFailure: "Query validation failed. The index may still be CREATING.",
}


def query_gsi_by_game_and_score(table, index_name, game_id, min_score):
    with translate_errors('Query'):
        response = table.query(
            IndexName=index_name,
            KeyConditionExpression='game_id = :gameId AND score >= :minScore',
            ExpressionAttributeValues={':gameId': game_id, ':minScore': min_score},
        )
    return response.get('Items', []), response.get('LastEvaluatedKey')


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        print(f"GSI query on {config.GSI_NAME}: game_id = G001 AND score >= 3000")
        print(RULE)
        print_items(*query_gsi_by_game_and_score(table, config.GSI_NAME, 'G001', 3000))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
