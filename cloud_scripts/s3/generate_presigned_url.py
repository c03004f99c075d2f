"""
Presigned URLs: upload through a PUT URL, then hand out a short-lived GET URL

Steps:
    1. presign PutObject (valid 1 hour)
    2. PUT the file to that URL with plain HTTP (no AWS credentials needed)
    3. presign GetObject (valid 20 seconds)
"""

import os
import time

import requests

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
}

FILE_PATH = os.environ.get('S3_PRESIGN_FILE', './s3/cherry.jpg')
OBJECT_KEY = 'cherry.jpg'
CONTENT_TYPE = 'image/jpeg'
UPLOAD_EXPIRES_IN = 3600     # 1 hour
DOWNLOAD_EXPIRES_IN = 20     # 20 seconds


def generate_upload_url(client, bucket_name, key, expires_in=UPLOAD_EXPIRES_IN):
    with translate_errors('PresignPutObject'):
        return client.generate_presigned_url(
            'put_object',
            Params={'Bucket': bucket_name, 'Key': key, 'ContentType': CONTENT_TYPE},
            ExpiresIn=expires_in,
        )


def generate_download_url(client, bucket_name, key, expires_in=DOWNLOAD_EXPIRES_IN):
    with translate_errors('PresignGetObject'):
        return client.generate_presigned_url(
            'get_object',
            Params={'Bucket': bucket_name, 'Key': key},
            ExpiresIn=expires_in,
        )


def upload_with_presigned_url(url, file_path):
    with open(file_path, 'rb') as f:
        response = requests.put(url, data=f, headers={'Content-Type': CONTENT_TYPE}, timeout=30)
    response.raise_for_status()
    return response


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        print("Step 1: presigned upload URL")
        upload_url = generate_upload_url(client, config.BUCKET_NAME, OBJECT_KEY)
        print(f"✓ valid for {UPLOAD_EXPIRES_IN}s")

        print("\nStep 2: uploading through the presigned URL")
        upload_with_presigned_url(upload_url, FILE_PATH)
        print("✓ Upload complete")

        time.sleep(1)

        print("\nStep 3: presigned download URL")
        download_url = generate_download_url(client, config.BUCKET_NAME, OBJECT_KEY)

        print(f"\n{RULE}")
        print(f"Upload URL ({UPLOAD_EXPIRES_IN}s):\n{upload_url}")
        print(f"\nDownload URL ({DOWNLOAD_EXPIRES_IN}s):\n{download_url}")
        print("\nOpen the download URL in a browser within the expiry window.")
    except FileNotFoundError as e:
        report_error(e)
        print(f"File not found: {FILE_PATH}")
        raise
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
