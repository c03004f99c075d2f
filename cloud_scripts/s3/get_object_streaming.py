"""
Download an object straight to disk in chunks, without holding it in memory
"""

import os

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket or the object key does not exist.",
}

OBJECT_KEY = 'Eiffel.jpg'
DOWNLOAD_PATH = os.environ.get('S3_STREAM_DOWNLOAD_PATH', './s3/downloaded_Eiffel.jpg')
CHUNK_SIZE = 64 * 1024


def stream_object(client, bucket_name, key, download_path, chunk_size=CHUNK_SIZE):
    written = 0
    with translate_errors('GetObject'):
        response = client.get_object(Bucket=bucket_name, Key=key)
        try:
            with open(download_path, 'wb') as f:
                for chunk in response['Body'].iter_chunks(chunk_size):
                    f.write(chunk)
                    written += len(chunk)
        except Exception:
            # no partial files
            if os.path.exists(download_path):
                os.remove(download_path)
            raise
    return response, written


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        response, written = stream_object(client, config.BUCKET_NAME, OBJECT_KEY, DOWNLOAD_PATH)
        print("✓ Streaming download complete")
        print(RULE)
        print(f"Key:          {OBJECT_KEY}")
        print(f"Saved to:     {DOWNLOAD_PATH}")
        print(f"Bytes:        {written}")
        print(f"Content type: {na(response.get('ContentType'))}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
