"""
Console output helpers shared by the scripts
"""

import json
import traceback
from decimal import Decimal

from cloud_scripts.errors import AwsError

RULE = '=' * 60


def banner(title):
    print(f"\n{RULE}")
    print(title)
    print(RULE)


def na(val, fallback='unknown'):
    """Return string value, or fallback if missing / empty / null."""
    if val is None or str(val).strip() in ('', 'None', 'null'):
        return fallback
    return str(val).strip()


def _json_default(obj):
    # boto3 resources hand back numbers as Decimal
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, (bytes, bytearray, set)):
        return repr(obj)
    return str(obj)


def pretty(data):
    return json.dumps(data, indent=2, ensure_ascii=False, default=_json_default)


def print_items(items, last_evaluated_key=None):
    """Print a list of DynamoDB items (already deserialized)."""
    if not items:
        print("No items found")
        return
    print(f"✓ {len(items)} item(s) found")
    for i, item in enumerate(items, 1):
        print(f"\n[Item {i}]")
        print(pretty(item))
    if last_evaluated_key:
        print(f"\nMore results available (LastEvaluatedKey: {pretty(last_evaluated_key)})")


def report_error(exc, hints=None):
    """Print a failure with a per-class hint, in the scripts' usual format."""
    print(f"✗ Error: {exc}")
    if isinstance(exc, AwsError):
        for cls, hint in (hints or {}).items():
            if isinstance(exc, cls):
                print(hint)
                break
    print(traceback.format_exc())
