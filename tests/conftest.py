import boto3
import pytest

from cloud_scripts.drainer import Message
from cloud_scripts.poller import ResourceDescription, SubEntity


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    # Keep stubbed clients away from real credentials / config files
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


def make_client(service):
    return boto3.client(
        service,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


class FakeClock:
    """clock() / sleep() pair where sleeping just advances time."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeDescriber:
    """Replays a scripted list of statuses (or exceptions) for one table.

    Each step is a table status string, a dict {index_name: status} for GSIs,
    None for "table missing", or an exception to raise.
    """

    def __init__(self, steps, table_status="ACTIVE"):
        self.steps = list(steps)
        self.table_status = table_status
        self.calls = 0

    def describe_resource(self, name):
        step = self.steps[min(self.calls, len(self.steps) - 1)]
        self.calls += 1
        if isinstance(step, Exception):
            raise step
        if step is None:
            return ResourceDescription(name=name, exists=False)
        if isinstance(step, dict):
            indexes = tuple(SubEntity(k, v) for k, v in step.items())
            return ResourceDescription(name=name, exists=True, status=self.table_status, sub_entities=indexes)
        return ResourceDescription(name=name, exists=True, status=step)


class FakeQueue:
    """In-memory queue backend serving pre-built batches in order."""

    def __init__(self, batches, receive_error=None, delete_error=None):
        self.batches = [list(b) for b in batches]
        self.receive_calls = []
        self.deleted = []
        self.receive_error = receive_error
        self.delete_error = delete_error

    def receive_messages(self, queue_url, max_messages, wait_seconds, visibility_timeout=None):
        self.receive_calls.append((queue_url, max_messages, wait_seconds, visibility_timeout))
        if self.receive_error is not None:
            raise self.receive_error
        if not self.batches:
            return []
        return self.batches.pop(0)

    def delete_message(self, queue_url, receipt_handle):
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(receipt_handle)


def make_messages(count, start=0, body="{}"):
    return [Message(f"m{i}", body, f"rh-{i}") for i in range(start, start + count)]


@pytest.fixture
def fake_clock():
    return FakeClock()
