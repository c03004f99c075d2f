"""
Check that the bucket exists and that we may access it (HeadBucket)
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import AccessDenied, ResourceNotFound, ValidationFailure, translate_errors

HINTS = {
    ResourceNotFound:  "The bucket does not exist.",
    AccessDenied:      "The bucket exists but you do not have access to it.",
    ValidationFailure: "Bad request. Check the bucket name and region.",
}


def head_bucket(client, bucket_name):
    with translate_errors('HeadBucket'):
        return client.head_bucket(Bucket=bucket_name)


def bucket_exists(client, bucket_name):
    """True / False for exists / missing; access and other failures still raise."""
    try:
        head_bucket(client, bucket_name)
    except ResourceNotFound:
        return False
    return True


def display_success(bucket_name, response):
    print("✓ Bucket exists and is accessible")
    print(RULE)
    print(f"Bucket: {bucket_name}")
    if response.get('BucketRegion'):
        print(f"Region: {response['BucketRegion']}")
    if 'AccessPointAlias' in response:
        print(f"Access point alias: {response['AccessPointAlias']}")


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        print(f"Checking bucket {config.BUCKET_NAME}")
        display_success(config.BUCKET_NAME, head_bucket(client, config.BUCKET_NAME))
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
