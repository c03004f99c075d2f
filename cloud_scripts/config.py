"""
Configuration for the cloud scripts
Reads overrides from a .env file / environment, stores static defaults here
"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()


def _env(name, default=None, cast=str):
    """Return the env var converted by ``cast``; unset or blank gives ``default``."""
    value = os.environ.get(name, '').strip()
    return cast(value) if value else default


# AWS connection
AWS_REGION = _env('AWS_REGION', 'ap-northeast-1')
AWS_ENDPOINT_URL = _env('AWS_ENDPOINT_URL')   # e.g. http://localhost:4566 for LocalStack

# DynamoDB
TABLE_NAME = _env('DYNAMODB_TABLE_NAME', 'GameScores')
GSI_NAME = _env('DYNAMODB_GSI_NAME', 'GameScoreIndex')

# S3
BUCKET_NAME = _env('S3_BUCKET_NAME', 'cloud-scripts-sample-bucket')

# SQS
QUEUE_NAME = _env('SQS_QUEUE_NAME', 'order-queue')

# Status polling
POLL_INTERVAL_SECONDS = _env('POLL_INTERVAL_SECONDS', 10.0, float)
TABLE_WAIT_DEADLINE_SECONDS = _env('TABLE_WAIT_DEADLINE_SECONDS', 300.0, float)
GSI_WAIT_DEADLINE_SECONDS = _env('GSI_WAIT_DEADLINE_SECONDS', None, float)   # None = wait forever

# Queue draining (SQS per-call maximums are 10 messages / 20 seconds)
RECEIVE_MAX_MESSAGES = _env('RECEIVE_MAX_MESSAGES', 10, int)
RECEIVE_WAIT_SECONDS = _env('RECEIVE_WAIT_SECONDS', 20, int)

LOG_LEVEL = _env('LOG_LEVEL', 'INFO')

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def configure_logging(level=None):
    """Set up root logging for a script run."""
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logger = logging.getLogger()
    logger.setLevel((level or LOG_LEVEL).upper())
    return logger
