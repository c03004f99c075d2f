"""
Standalone AWS SDK scripts for DynamoDB, S3 and SQS, plus the two control
loops they share: ConvergencePoller (wait for a table / index status) and
QueueDrainer (long-poll a queue until it is empty).
"""

__version__ = '0.1.0'
