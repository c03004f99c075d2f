"""
Remote failure taxonomy

Every boto3 call made by the adapters and scripts runs inside
``translate_errors``, which turns botocore's ``ClientError`` (one class,
error code in the payload) and ``BotoCoreError`` (transport problems) into
the closed set of exception classes below. Callers branch on the class,
never on the error-code string.
"""

from contextlib import contextmanager

from botocore.exceptions import BotoCoreError, ClientError


class AwsError(Exception):
    """Base class for translated remote failures."""

    def __init__(self, operation, code, message):
        super().__init__(f"{operation} failed ({code}): {message}")
        self.operation = operation
        self.code = code
        self.message = message


class ResourceNotFound(AwsError):
    pass


class Conflict(AwsError):
    pass


class ValidationFailure(AwsError):
    pass


class Throttled(AwsError):
    pass


class AccessDenied(AwsError):
    pass


class ServiceFailure(AwsError):
    """Service error code with no more specific class."""


class TransportFailure(AwsError):
    """The request never produced a service response."""


ERROR_CODES = {
    ResourceNotFound: (
        'ResourceNotFoundException', 'TableNotFoundException',
        'NoSuchBucket', 'NoSuchKey', 'NotFound', '404',
        'QueueDoesNotExist', 'AWS.SimpleQueueService.NonExistentQueue',
    ),
    Conflict: (
        'ResourceInUseException', 'ConditionalCheckFailedException',
        'TransactionConflictException',
        'BucketAlreadyExists', 'BucketAlreadyOwnedByYou', 'BucketNotEmpty',
        'QueueNameExists', 'QueueAlreadyExists',
        'QueueDeletedRecently', 'AWS.SimpleQueueService.QueueDeletedRecently',
    ),
    ValidationFailure: (
        'ValidationException', 'ValidationError', 'SerializationException',
        'InvalidParameterValue', 'InvalidParameterCombination', 'MissingParameter',
        'InvalidAttributeName', 'InvalidAttributeValue', 'InvalidBucketName',
        'ReceiptHandleIsInvalid', 'BadRequest', '400',
    ),
    Throttled: (
        'ThrottlingException', 'Throttling', 'ProvisionedThroughputExceededException',
        'RequestLimitExceeded', 'LimitExceededException', 'TooManyRequestsException',
        'OverLimit', 'SlowDown',
    ),
    AccessDenied: (
        'AccessDenied', 'AccessDeniedException', 'UnrecognizedClientException',
        'Forbidden', '403',
    ),
}

_CLASS_BY_CODE = {code: cls for cls, codes in ERROR_CODES.items() for code in codes}


def from_client_error(exc, operation=None):
    """Translate a botocore ClientError into an AwsError subclass."""
    error = exc.response.get('Error', {})
    code = str(error.get('Code', 'Unknown'))
    message = error.get('Message') or str(exc)
    operation = operation or getattr(exc, 'operation_name', None) or 'request'
    cls = _CLASS_BY_CODE.get(code, ServiceFailure)
    return cls(operation, code, message)


@contextmanager
def translate_errors(operation):
    """Re-raise botocore failures raised inside the block as AwsError."""
    try:
        yield
    except ClientError as e:
        raise from_client_error(e, operation) from e
    except BotoCoreError as e:
        raise TransportFailure(operation, type(e).__name__, str(e)) from e
