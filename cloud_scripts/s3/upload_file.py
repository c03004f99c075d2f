"""
Upload a larger file with the managed transfer (multipart when needed),
printing progress as bytes go out
"""

import os
import threading

from boto3.s3.transfer import TransferConfig

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, report_error
from cloud_scripts.errors import ResourceNotFound, translate_errors

HINTS = {
    ResourceNotFound: "The bucket does not exist.",
}

FILE_PATH = os.environ.get('S3_UPLOAD_FILE', './s3/Eiffel.jpg')


class ProgressPrinter:
    """Transfer callback; called from the transfer threads with byte deltas."""

    def __init__(self, total_bytes):
        self.total = total_bytes
        self.seen = 0
        self.last_percent = -1
        self._lock = threading.Lock()

    def __call__(self, bytes_amount):
        with self._lock:
            self.seen += bytes_amount
            percent = int(self.seen * 100 / self.total) if self.total else 100
            if percent != self.last_percent:
                self.last_percent = percent
                print(f"  Progress: {percent}% ({self.seen}/{self.total} bytes)")


def upload_file(client, bucket_name, file_path, content_type='image/jpeg', callback=None):
    key = os.path.basename(file_path)
    with translate_errors('UploadFile'):
        client.upload_file(
            file_path, bucket_name, key,
            ExtraArgs={'ContentType': content_type},
            Callback=callback,
            Config=TransferConfig(multipart_threshold=8 * 1024 * 1024),
        )
    return key


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        progress = ProgressPrinter(os.path.getsize(FILE_PATH))
        key = upload_file(client, config.BUCKET_NAME, FILE_PATH, callback=progress)
        print("✓ Upload complete")
        print(RULE)
        print(f"Bucket: {config.BUCKET_NAME}")
        print(f"Key:    {key}")
    except FileNotFoundError as e:
        report_error(e)
        print(f"File not found: {FILE_PATH}")
        raise
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
