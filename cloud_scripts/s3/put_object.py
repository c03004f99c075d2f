"""
Upload a small file with a single PutObject call
"""

import os

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
}

FILE_PATH = os.environ.get('S3_PUT_FILE', './s3/cat.jpg')


def put_object(client, bucket_name, file_path, content_type='image/jpeg'):
    """Reads the whole file into memory; returns (key, response)."""
    key = os.path.basename(file_path)
    with open(file_path, 'rb') as f:
        body = f.read()
    with translate_errors('PutObject'):
        response = client.put_object(Bucket=bucket_name, Key=key, Body=body, ContentType=content_type)
    return key, response


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        key, response = put_object(client, config.BUCKET_NAME, FILE_PATH)
        print("✓ Upload complete")
        print(RULE)
        print(f"Bucket: {config.BUCKET_NAME}")
        print(f"Key:    {key}")
        print(f"ETag:   {na(response.get('ETag'))}")
    except FileNotFoundError as e:
        report_error(e)
        print(f"File not found: {FILE_PATH}")
        raise
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
