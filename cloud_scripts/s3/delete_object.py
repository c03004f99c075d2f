"""
Delete one object from the bucket
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
}

OBJECT_KEY = 'cat.jpg'


def delete_object(client, bucket_name, key):
    with translate_errors('DeleteObject'):
        return client.delete_object(Bucket=bucket_name, Key=key)


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        response = delete_object(client, config.BUCKET_NAME, OBJECT_KEY)
        print("✓ Object deleted")
        print(RULE)
        print(f"Bucket: {config.BUCKET_NAME}")
        print(f"Key:    {OBJECT_KEY}")
        if response.get('DeleteMarker'):
            print("A delete marker was created (versioned bucket)")
        if response.get('VersionId'):
            print(f"Version ID: {response['VersionId']}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
