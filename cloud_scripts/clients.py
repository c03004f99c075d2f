"""
boto3 client factories

One place that knows the region and the optional endpoint override, so every
script talks to the same account / LocalStack instance.
"""

import boto3

from cloud_scripts import config


def _kw(region_name=None):
    k = {'region_name': region_name or config.AWS_REGION}
    if config.AWS_ENDPOINT_URL:
        k['endpoint_url'] = config.AWS_ENDPOINT_URL
    return k


def dynamodb_client(region_name=None):
    return boto3.client('dynamodb', **_kw(region_name))


def dynamodb_resource(region_name=None):
    return boto3.resource('dynamodb', **_kw(region_name))


def s3_client(region_name=None):
    return boto3.client('s3', **_kw(region_name))


def sqs_client(region_name=None):
    return boto3.client('sqs', **_kw(region_name))
