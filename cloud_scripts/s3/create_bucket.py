"""
Create the bucket in the configured region
"""

from cloud_scripts import clients, config
from cloud_scripts.display import RULE, na, report_error
from cloud_scripts.errors import Conflict, translate_errors

HINTS = {
    Conflict: "The bucket name is taken (bucket names are global) or you already own it.",
}


def create_bucket(client, bucket_name, region):
    params = {'Bucket': bucket_name}
    # us-east-1 is the default location and rejects an explicit constraint
    if region != 'us-east-1':
        params['CreateBucketConfiguration'] = {'LocationConstraint': region}
    with translate_errors('CreateBucket'):
        return client.create_bucket(**params)


def main():
    config.configure_logging()
    client = clients.s3_client()

    try:
        response = create_bucket(client, config.BUCKET_NAME, config.AWS_REGION)
        print("✓ Bucket created")
        print(RULE)
        print(f"Bucket:   {config.BUCKET_NAME}")
        print(f"Region:   {config.AWS_REGION}")
        print(f"Location: {na(response.get('Location'))}")
    except Exception as e:
        report_error(e, HINTS)
        raise


if __name__ == '__main__':
    main()
