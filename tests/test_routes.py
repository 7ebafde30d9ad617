"""
Tests for the orchestrator-facing HTTP API.
"""

from unittest.mock import AsyncMock

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from s3_importer.extension import ExtensionContext, load_extension
from s3_importer.main import app
from s3_importer.services.dependencies import get_extension_context
from tests.factories import CONSUMER_ARNS, bucket_outputs, consumer_outputs, create_consumer_context, create_service_context


@pytest.fixture
def client(s3_service):
    context = ExtensionContext()
    load_extension(context, s3=s3_service)
    app.dependency_overrides[get_extension_context] = lambda: context
    yield TestClient(app)
    app.dependency_overrides.clear()


def _context_json(context) -> dict:
    return context.model_dump(mode="json", by_alias=True)


def _produce_events_payload(consumer_type: str, *, producer_outputs=None, filters=None) -> dict:
    producer = create_service_context()
    consumer = create_consumer_context(consumer_type)
    producer_outputs = bucket_outputs("b") if producer_outputs is None else producer_outputs
    event_consumer_config: dict = {"service_name": consumer.service_name, "bucket_events": ["s3:ObjectCreated:*"]}
    if filters is not None:
        event_consumer_config["filters"] = filters
    return {
        "service_context": _context_json(producer),
        "deploy_context": {
            "app_name": "photos",
            "environment_name": "dev",
            "service_name": producer.service_name,
            "service_type": "s3",
            "event_outputs": producer_outputs.model_dump(by_alias=True) if producer_outputs else None,
        },
        "event_consumer_config": event_consumer_config,
        "consumer_service_context": _context_json(consumer),
        "consumer_deploy_context": {
            "app_name": "photos",
            "environment_name": "dev",
            "service_name": consumer.service_name,
            "service_type": consumer_type,
            "event_outputs": consumer_outputs(consumer_type).model_dump(by_alias=True),
        },
    }


class TestServiceMetadata:
    def test_describes_s3_service_type(self, client) -> None:
        response = client.get("/services/s3")

        assert response.status_code == 200
        body = response.json()
        assert body["provided_event_type"] == "s3"
        assert body["produced_events_supported_types"] == ["lambda", "sns", "sqs"]
        assert body["produced_deploy_output_types"] == ["environmentVariables", "policies"]
        assert body["supports_tagging"] is True

    def test_unknown_service_type(self, client) -> None:
        response = client.get("/services/dynamodb")

        assert response.status_code == 404


class TestCheckRoute:
    def test_reports_missing_bucket_name(self, client) -> None:
        payload = {"service_context": _context_json(create_service_context(params={"type": "s3"}))}

        response = client.post("/services/s3/check", json=payload)

        assert response.status_code == 200
        assert response.json() == {"errors": ["S3-importer - must provide a bucket name"]}

    def test_valid_config(self, client) -> None:
        payload = {"service_context": _context_json(create_service_context())}

        response = client.post("/services/s3/check", json=payload)

        assert response.json() == {"errors": []}


class TestDeployRoute:
    def test_returns_deploy_outputs(self, client) -> None:
        payload = {"service_context": _context_json(create_service_context())}

        response = client.post("/services/s3/deploy", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["environment_variables"]["BUCKET_URL"] == "https://b.s3.amazonaws.com/"
        assert body["event_outputs"] == {
            "resourceName": "b",
            "resourceArn": "arn:aws:s3:::b",
            "resourcePrincipal": "s3.amazonaws.com",
            "serviceEventType": "s3",
        }

    def test_missing_bucket_is_404(self, client, fake_s3) -> None:
        payload = {"service_context": _context_json(create_service_context(params={"bucket_name": "nope"}))}

        response = client.post("/services/s3/deploy", json=payload)

        assert response.status_code == 404
        assert response.json()["bucket_name"] == "nope"
        assert fake_s3.put_calls == []

    def test_provider_failure_is_502(self, client, fake_s3, monkeypatch) -> None:
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "ListBuckets")
        monkeypatch.setattr(fake_s3, "list_buckets", AsyncMock(side_effect=error))
        payload = {"service_context": _context_json(create_service_context())}

        response = client.post("/services/s3/deploy", json=payload)

        assert response.status_code == 502
        assert "Access Denied" not in response.text


class TestProduceEventsRoute:
    def test_configures_topic_consumer(self, client, fake_s3) -> None:
        response = client.post(
            "/services/s3/produce-events",
            json=_produce_events_payload("sns", filters=[{"name": "suffix", "value": ".jpg"}]),
        )

        assert response.status_code == 200
        assert response.json() == {"producer_service_name": "uploads", "consumer_service_name": "thumbnailer"}
        assert fake_s3.notification_configurations["b"] == {
            "TopicConfigurations": [
                {
                    "TopicArn": CONSUMER_ARNS["sns"],
                    "Events": ["s3:ObjectCreated:*"],
                    "Filter": {"Key": {"FilterRules": [{"Name": "suffix", "Value": ".jpg"}]}},
                }
            ]
        }

    def test_unsupported_consumer_is_422(self, client, fake_s3) -> None:
        response = client.post("/services/s3/produce-events", json=_produce_events_payload("dynamodb"))

        assert response.status_code == 422
        assert response.json()["event_type"] == "dynamodb"
        assert fake_s3.put_calls == []

    def test_missing_producer_outputs_is_409(self, client, fake_s3) -> None:
        payload = _produce_events_payload("sqs")
        payload["deploy_context"]["event_outputs"] = None

        response = client.post("/services/s3/produce-events", json=payload)

        assert response.status_code == 409
        assert fake_s3.put_calls == []

    def test_empty_event_list_is_rejected(self, client, fake_s3) -> None:
        payload = _produce_events_payload("sqs")
        payload["event_consumer_config"]["bucket_events"] = []

        response = client.post("/services/s3/produce-events", json=payload)

        assert response.status_code == 422
        assert fake_s3.put_calls == []


class TestUnDeployRoute:
    def test_always_succeeds(self, client) -> None:
        payload = {"service_context": _context_json(create_service_context(params={}))}

        response = client.post("/services/s3/undeploy", json=payload)

        assert response.status_code == 200
        assert response.json()["service_name"] == "uploads"
