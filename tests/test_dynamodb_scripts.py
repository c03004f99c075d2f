import json
import signal
from decimal import Decimal

import pytest
from botocore.exceptions import ClientError
from botocore.stub import ANY, Stubber

from cloud_scripts.dynamodb import (add_gsi, create_table, delete_item, delete_table, get_item,
                                    partiql, put_item, query, query_gsi, scan, update_item)
from cloud_scripts.errors import Conflict, ResourceNotFound
from cloud_scripts.poller import DeadlineExceeded

from conftest import make_client


class FakeTable:
    """Stands in for a boto3 Table resource: records calls, replays canned responses."""

    def __init__(self, responses=None, errors=None):
        self.responses = responses or {}
        self.errors = errors or {}
        self.calls = []

    def _call(self, name, kwargs):
        self.calls.append((name, kwargs))
        error = self.errors.get(name)
        if callable(error):
            error = error(kwargs)
        if error is not None:
            raise error
        return self.responses.get(name, {})

    def put_item(self, **kwargs):
        return self._call("put_item", kwargs)

    def get_item(self, **kwargs):
        return self._call("get_item", kwargs)

    def update_item(self, **kwargs):
        return self._call("update_item", kwargs)

    def delete_item(self, **kwargs):
        return self._call("delete_item", kwargs)

    def query(self, **kwargs):
        return self._call("query", kwargs)

    def scan(self, **kwargs):
        return self._call("scan", kwargs)


def client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def table_description(status, indexes=None):
    table = {"TableName": "GameScores", "TableStatus": status}
    if indexes is not None:
        table["GlobalSecondaryIndexes"] = [{"IndexName": k, "IndexStatus": v} for k, v in indexes.items()]
    return {"Table": table}


@pytest.fixture
def dynamodb():
    client = make_client("dynamodb")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


def test_create_table_then_wait_until_active(dynamodb):
    client, stubber = dynamodb
    stubber.add_response("create_table",
                         {"TableDescription": {"TableName": "GameScores", "TableStatus": "CREATING"}},
                         {"TableName": "GameScores", "KeySchema": ANY, "AttributeDefinitions": ANY,
                          "BillingMode": "PROVISIONED", "ProvisionedThroughput": ANY})
    for status in ("CREATING", "CREATING", "ACTIVE"):
        stubber.add_response("describe_table", table_description(status), {"TableName": "GameScores"})

    assert create_table.create_table(client, "GameScores")["TableStatus"] == "CREATING"

    events = []
    outcome = create_table.wait_until_active(client, "GameScores", interval=0, deadline=60,
                                             on_progress=events.append)

    assert outcome.converged
    assert outcome.attempts == 3
    assert len(events) == 2


def test_create_table_in_use_is_conflict(dynamodb):
    client, stubber = dynamodb
    stubber.add_client_error("create_table", service_error_code="ResourceInUseException")

    with pytest.raises(Conflict):
        create_table.create_table(client, "GameScores")


def test_delete_table_wait_ends_when_table_is_gone(dynamodb):
    client, stubber = dynamodb
    stubber.add_response("delete_table",
                         {"TableDescription": {"TableName": "GameScores", "TableStatus": "DELETING"}},
                         {"TableName": "GameScores"})
    stubber.add_response("describe_table", table_description("DELETING"), {"TableName": "GameScores"})
    stubber.add_client_error("describe_table", service_error_code="ResourceNotFoundException")

    delete_table.delete_table(client, "GameScores")
    outcome = delete_table.wait_until_deleted(client, "GameScores", interval=0, deadline=60)

    assert outcome.not_found
    assert outcome.attempts == 2


def test_add_gsi_waits_for_index_not_table(dynamodb):
    client, stubber = dynamodb
    stubber.add_response("update_table",
                         {"TableDescription": {"TableName": "GameScores", "TableStatus": "UPDATING"}},
                         {"TableName": "GameScores", "AttributeDefinitions": ANY,
                          "GlobalSecondaryIndexUpdates": ANY})
    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "CREATING"}),
                         {"TableName": "GameScores"})
    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "ACTIVE"}),
                         {"TableName": "GameScores"})

    add_gsi.add_gsi(client, "GameScores", "GameScoreIndex")
    outcome = add_gsi.wait_for_gsi(client, "GameScores", "GameScoreIndex", interval=0, deadline=60)

    assert outcome.converged
    assert outcome.attempts == 2


def test_add_gsi_wait_reports_missing_index(dynamodb):
    client, stubber = dynamodb
    stubber.add_response("describe_table", table_description("ACTIVE", {}), {"TableName": "GameScores"})

    outcome = add_gsi.wait_for_gsi(client, "GameScores", "GameScoreIndex", interval=0, deadline=60)

    assert outcome.not_found


def test_partiql_select_deserializes_items(dynamodb):
    client, stubber = dynamodb
    stubber.add_response(
        "execute_statement",
        {"Items": [{"game_id": {"S": "G001"}, "score": {"N": "3500"}, "life": {"N": "3"}}]},
        {"Statement": 'SELECT game_id, score, life FROM "GameScores" WHERE user_id = ?',
         "Parameters": [{"S": "3"}]},
    )

    items = partiql.select_scores(client, "GameScores", "3")

    assert items == [{"game_id": "G001", "score": Decimal("3500"), "life": Decimal("3")}]


def test_put_all_items_continues_after_a_failure(capsys):
    def fail_user_2(kwargs):
        if kwargs["Item"]["user_id"] == "2":
            return client_error("ProvisionedThroughputExceededException", "PutItem")

    table = FakeTable(errors={"put_item": fail_user_2})
    scores = [
        {"user_id": 1, "game_id": "G001", "score": 1000, "life": 1},
        {"user_id": 2, "game_id": "G001", "score": 2000, "life": 2},
        {"user_id": 3, "game_id": "G001", "score": 3000, "life": 3},
    ]

    assert put_item.put_all_items(table, scores) == (2, 1)
    assert [c[1]["Item"]["user_id"] for c in table.calls] == ["1", "2", "3"]
    assert "✗ user_id=2" in capsys.readouterr().out


def test_bundled_score_data_converts_to_items():
    items = [put_item.to_item(s) for s in put_item.load_score_data()]
    assert items
    assert all(isinstance(i["user_id"], str) for i in items)
    assert {"user_id", "game_id", "score", "life"} == set(items[0])


def test_get_item_options():
    table = FakeTable(responses={"get_item": {"Item": {"user_id": "3", "game_id": "G001"}}})

    item = get_item.get_item(table, get_item.KEY, consistent_read=True, projection="score, life")

    assert item == {"user_id": "3", "game_id": "G001"}
    assert table.calls == [("get_item", {"Key": get_item.KEY, "ConsistentRead": True,
                                         "ProjectionExpression": "score, life"})]


def test_get_item_missing_returns_none():
    assert get_item.get_item(FakeTable(), get_item.KEY) is None


def test_conditional_update_failure_is_conflict():
    table = FakeTable(errors={"update_item": client_error("ConditionalCheckFailedException", "UpdateItem")})

    with pytest.raises(Conflict):
        update_item.update_item_conditionally(table, {"user_id": "1", "game_id": "G001"})

    kwargs = table.calls[0][1]
    assert kwargs["ExpressionAttributeValues"] == {":increment": 1, ":minScore": 3000}
    assert kwargs["ReturnValues"] == "ALL_NEW"


def test_delete_item_returns_old_attributes():
    table = FakeTable(responses={"delete_item": {"Attributes": {"user_id": "3", "game_id": "G001"}}})
    assert delete_item.delete_item(table, "3", "G001") == {"user_id": "3", "game_id": "G001"}
    assert table.calls[0][1]["ReturnValues"] == "ALL_OLD"


def test_query_and_scan_return_items_and_last_key():
    table = FakeTable(responses={
        "query": {"Items": [{"game_id": "G001"}], "LastEvaluatedKey": {"user_id": "3", "game_id": "G001"}},
        "scan": {"Items": []},
    })

    items, last_key = query.query_by_user_id(table, "3")
    assert items == [{"game_id": "G001"}]
    assert last_key == {"user_id": "3", "game_id": "G001"}

    assert scan.scan_items_by_life(table) == ([], None)
    assert table.calls[-1][1]["ExpressionAttributeValues"] == {":minLife": 3}


def test_query_gsi_uses_index():
    table = FakeTable(errors={"query": client_error("ResourceNotFoundException", "Query")})

    with pytest.raises(ResourceNotFound):
        query_gsi.query_gsi_by_game_and_score(table, "GameScoreIndex", "G001", 3000)

    assert table.calls[0][1]["IndexName"] == "GameScoreIndex"


def test_gsi_wait_uses_configured_deadline_unless_told_otherwise(dynamodb, monkeypatch):
    client, stubber = dynamodb
    monkeypatch.setattr(add_gsi.config, "GSI_WAIT_DEADLINE_SECONDS", 0.001)
    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "CREATING"}),
                         {"TableName": "GameScores"})

    timed_out = add_gsi.wait_for_gsi(client, "GameScores", "GameScoreIndex", interval=0.01)
    assert isinstance(timed_out.cause, DeadlineExceeded)

    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "CREATING"}),
                         {"TableName": "GameScores"})
    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "ACTIVE"}),
                         {"TableName": "GameScores"})

    unbounded = add_gsi.wait_for_gsi(client, "GameScores", "GameScoreIndex", interval=0.01, deadline=None)
    assert unbounded.converged


def test_add_gsi_main_stops_watching_on_ctrl_c(dynamodb, monkeypatch, capsys):
    client, stubber = dynamodb
    stubber.add_response("update_table",
                         {"TableDescription": {"TableName": "GameScores", "TableStatus": "UPDATING"}})
    stubber.add_response("describe_table", table_description("ACTIVE", {"GameScoreIndex": "CREATING"}))

    handlers = {}
    monkeypatch.setattr(add_gsi.signal, "signal", lambda signum, handler: handlers.setdefault(signum, handler))
    monkeypatch.setattr(add_gsi.clients, "dynamodb_client", lambda: client)
    monkeypatch.setattr(add_gsi.config, "configure_logging", lambda: None)
    monkeypatch.setattr(add_gsi.config, "TABLE_NAME", "GameScores")
    monkeypatch.setattr(add_gsi.config, "GSI_NAME", "GameScoreIndex")
    monkeypatch.setattr(add_gsi.config, "GSI_WAIT_DEADLINE_SECONDS", None)
    # the first progress report arrives while the user presses Ctrl+C
    monkeypatch.setattr(add_gsi, "print_progress", lambda event: handlers[signal.SIGINT](signal.SIGINT, None))

    add_gsi.main()

    out = capsys.readouterr().out
    assert "Stopped watching after 1 check(s)" in out
    assert "✗ Error" not in out


def test_score_data_floats_load_as_decimal(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps([{"user_id": 9, "game_id": "G009", "score": 1234.5, "life": 2}]))

    items = [put_item.to_item(s) for s in put_item.load_score_data(str(path))]
    table = FakeTable()

    assert items[0]["score"] == Decimal("1234.5")
    assert put_item.put_all_items(table, put_item.load_score_data(str(path))) == (1, 0)
