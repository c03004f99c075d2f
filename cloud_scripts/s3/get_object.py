"""
Download an object into memory, then write it to disk
"""

import os

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket or the object key does not exist.",
}

OBJECT_KEY = 'cat.jpg'
DOWNLOAD_PATH = os.environ.get('S3_DOWNLOAD_PATH', './s3/downloaded_cat.jpg')


def get_object(client, bucket_name, key, download_path):
    with translate_errors('GetObject'):
        response = client.get_object(Bucket=bucket_name, Key=key)
        body = response['Body'].read()
    with open(download_path, 'wb') as f:
        f.write(body)
    return response, len(body)


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        response, size = get_object(client, config.BUCKET_NAME, OBJECT_KEY, DOWNLOAD_PATH)
        print("✓ Download complete")
        print(RULE)
        print(f"Key:           {OBJECT_KEY}")
        print(f"Saved to:      {DOWNLOAD_PATH}")
        print(f"Size:          {size} bytes")
        print(f"Content type:  {na(response.get('ContentType'))}")
        print(f"Last modified: {na(response.get('LastModified'))}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
