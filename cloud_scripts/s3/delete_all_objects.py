"""
Empty the bucket: list every object (paginated), then delete in batches

DeleteObjects accepts at most 1000 keys per call.
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
}

DELETE_BATCH_SIZE = 1000


def list_all_objects(client, bucket_name):
    objects = []
    paginator = client.get_paginator('list_objects_v2')
    with translate_errors('ListObjectsV2'):
        for page in paginator.paginate(Bucket=bucket_name):
            objects.extend(page.get('Contents', []))
    return objects


def delete_objects(client, bucket_name, objects, batch_size=DELETE_BATCH_SIZE):
    """Returns (deleted_count, errors) where errors are the per-key error dicts."""
    deleted, errors = 0, []
    for i in range(0, len(objects), batch_size):
        batch = objects[i:i + batch_size]
        with translate_errors('DeleteObjects'):
            response = client.delete_objects(
                Bucket=bucket_name,
                Delete={'Objects': [{'Key': obj['Key']} for obj in batch], 'Quiet': False},
            )
        deleted += len(response.get('Deleted', []))
        errors.extend(response.get('Errors', []))
    return deleted, errors


def display_objects(objects):
    print(f"{len(objects)} object(s) to delete:")
    for i, obj in enumerate(objects, 1):
        print(f"  {i}. {obj['Key']} ({obj.get('Size', 0) / 1024:.2f} KB)")


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        print(f"Deleting every object in {config.BUCKET_NAME}")
        print(RULE)
        objects = list_all_objects(client, config.BUCKET_NAME)
        if not objects:
            print("The bucket is already empty")
            return

        display_objects(objects)
        deleted, errors = delete_objects(client, config.BUCKET_NAME, objects)

        print(RULE)
        print(f"✓ Deleted {deleted} object(s)")
        for err in errors:
            print(f"✗ {err.get('Key')}: {err.get('Code')} {err.get('Message')}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
