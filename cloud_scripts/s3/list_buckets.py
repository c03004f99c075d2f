"""
List every bucket in the account
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import translate_errors


def list_buckets(client):
    with translate_errors('ListBuckets'):
        return client.list_buckets().get('Buckets', [])


def display_buckets(buckets):
    if not buckets:
        print("No buckets found")
        return
    print(f"✓ {len(buckets)} bucket(s)")
    print(RULE)
    for i, bucket in enumerate(buckets, 1):
        print(f"{i}. {na(bucket.get('Name'), 'no name')}")
        print(f"   Created: {na(bucket.get('CreationDate'))}")


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        display_buckets(list_buckets(client))
    except Exception as e:
        report_error(e)
        raise


if __name__ == '__main__':
    main()
