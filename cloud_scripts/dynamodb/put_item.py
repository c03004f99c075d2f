"""
Load score_data.json into the GameScores table, one put_item per score
"""

import json
import os
from decimal import Decimal

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import AwsError, ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "Table not found. Run create_table first.",
}


def load_score_data(path=None):
    # DynamoDB rejects float; numbers with a fraction come back as Decimal
    with open(path or os.path.join(config.DATA_DIR, 'score_data.json'), 'r') as f:
        return json.load(f, parse_float=Decimal)


def to_item(score):
    """user_id is stored as a string key; everything else as-is."""
    return {
        'user_id': str(score['user_id']),
        'game_id': score['game_id'],
        'score':   score['score'],
        'life':    score['life'],
    }


def put_all_items(table, scores):
    """Put every score; one failure does not stop the rest.

    Returns (success_count, fail_count).
    """
    success, failed = 0, 0
    for score in scores:
        item = to_item(score)
        try:
            with translate_errors('PutItem'):
                table.put_item(Item=item)
            print(f"✓ user_id={item['user_id']}, game_id={item['game_id']}")
            success += 1
        except AwsError as e:
            print(f"✗ user_id={item['user_id']}, game_id={item['game_id']}: {e}")
            failed += 1
    return success, failed


def main():
    config.configure_logging()
    table = clients.dynamodb_resource().Table(config.TABLE_NAME)

    try:
        scores = load_score_data()
        print(f"Putting {len(scores)} item(s) into {config.TABLE_NAME}")
        print(RULE)

        success, failed = put_all_items(table, scores)

        print(RULE)
        print(f"Done: success={success}, failed={failed}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
