"""Unit tests for publishing domain events to Redis."""
import json
from datetime import date, datetime, timezone

from imis.adapters import redis_eventpublisher
from imis.domain.events import PatientCreated, QuarantineIncidentSaved


def test_dates_are_serialized_as_iso_strings():
    event = PatientCreated(patient_id="p-1", created_at=datetime(2020, 3, 21, 8, 0, tzinfo=timezone.utc))

    payload = json.loads(redis_eventpublisher._serialize_event(event))

    assert payload == {"patient_id": "p-1", "created_at": "2020-03-21T08:00:00+00:00"}


def test_publish_sends_to_channel(fake_redis):
    pubsub = fake_redis.pubsub()
    pubsub.subscribe("imis:incidents")
    pubsub.get_message(timeout=1)
    event = QuarantineIncidentSaved(incident_id="i-1", patient_id="p-1", created=False, until=date(2020, 4, 4))

    redis_eventpublisher.publish("imis:incidents", event)

    message = pubsub.get_message(timeout=1)
    assert message["channel"] == b"imis:incidents"
    assert json.loads(message["data"])["created"] is False
