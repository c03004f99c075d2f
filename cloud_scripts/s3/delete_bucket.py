"""
Delete the (empty) bucket
"""

from cloud_scripts import clients, config
from cloud_scripts.display import report_error
from cloud_scripts.errors import Conflict, ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
    Conflict:         "The bucket is not empty. Run delete_all_objects first.",
}


def delete_bucket(client, bucket_name):
    with translate_errors('DeleteBucket'):
        client.delete_bucket(Bucket=bucket_name)


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        delete_bucket(client, config.BUCKET_NAME)
        print(f"✓ Bucket {config.BUCKET_NAME} deleted")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
