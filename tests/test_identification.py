"""
Device identification tests.
"""

import base64

import pytest
from httpx import AsyncClient

from app.core.errors import DeviceIdentificationError
from app.main import app
from app.models.catalog import default_catalog
from app.schemas.device import DeviceDraft
from app.services.identification import (
    DeviceIdentification,
    apply_to_draft,
    decode_image,
    identify_device,
)


IMAGE = b"\x89PNG fake image"


class RecordingClassifier:
    """Classifier double counting its calls."""

    def __init__(self, answer=None, error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def __call__(self, image: bytes):
        self.calls.append(image)
        if self.error:
            raise self.error
        return self.answer


def test_decode_image_strips_data_url_header():
    """Test base64 input with a data URL header."""
    encoded = "data:image/jpeg;base64," + base64.b64encode(IMAGE).decode()

    assert decode_image(encoded) == IMAGE
    assert decode_image(base64.b64encode(IMAGE).decode()) == IMAGE
    assert decode_image(IMAGE) == IMAGE


def test_decode_image_rejects_garbage():
    """Test unreadable base64."""
    with pytest.raises(DeviceIdentificationError):
        decode_image("data:image/png;base64,***")


@pytest.mark.asyncio
async def test_identify_device_calls_classifier_once():
    """Test a successful identification."""
    classifier = RecordingClassifier({"brand": "samsung", "model": "Galaxy A54", "color": "Noir"})

    result = await identify_device(classifier, IMAGE)

    assert classifier.calls == [IMAGE]
    assert result.model == "Galaxy A54"
    assert result.color == "Noir"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "classifier",
    [
        RecordingClassifier(error=TimeoutError("timeout")),
        RecordingClassifier({"color": "Bleu"}),
        RecordingClassifier(None),
    ],
)
async def test_identify_device_failures(classifier):
    """Test classifier errors and empty answers are not retried."""
    with pytest.raises(DeviceIdentificationError) as exc_info:
        await identify_device(classifier, IMAGE)

    assert exc_info.value.message == "Impossible d'identifier l'appareil"
    assert len(classifier.calls) == 1


def test_apply_to_draft_normalizes_brand():
    """Test identified fields land on a copy of the draft."""
    draft = DeviceDraft(client_id="C1", imei="3556")
    result = DeviceIdentification(brand="samsung", model="Galaxy A54")

    filled = apply_to_draft(draft, result, default_catalog())

    assert filled.brand == "Samsung"
    assert filled.model == "Galaxy A54"
    assert filled.color is None
    assert filled.client_id == "C1"
    assert filled.imei == "3556"
    assert draft.brand is None


@pytest.mark.asyncio
async def test_identify_endpoint_without_classifier(client: AsyncClient):
    """Test the endpoint answers 503 when no classifier is installed."""
    response = await client.post(
        "/api/v1/devices/identify",
        files={"image": ("phone.png", IMAGE, "image/png")},
    )

    assert response.status_code == 503
    assert response.json()["detail"] == "Service d'identification non configuré"


@pytest.mark.asyncio
async def test_identify_endpoint_fills_draft(client: AsyncClient, store):
    """Test the endpoint returns the filled form without saving anything."""
    classifier = RecordingClassifier({"brand": "samsung", "model": "Galaxy A54"})
    app.state.classifier = classifier
    try:
        response = await client.post(
            "/api/v1/devices/identify",
            files={"image": ("phone.png", IMAGE, "image/png")},
            data={"clientId": "C1", "imei": "3556"},
        )
    finally:
        app.state.classifier = None

    assert response.status_code == 200
    data = response.json()
    assert data["brand"] == "Samsung"
    assert data["model"] == "Galaxy A54"
    assert data["clientId"] == "C1"
    assert data["imei"] == "3556"
    assert classifier.calls == [IMAGE]
    assert (await store.load()).devices == []


@pytest.mark.asyncio
async def test_identify_endpoint_unrecognized(client: AsyncClient):
    """Test an answer without brand or model is a 400."""
    app.state.classifier = RecordingClassifier({"color": "Bleu"})
    try:
        response = await client.post(
            "/api/v1/devices/identify",
            files={"image": ("phone.png", IMAGE, "image/png")},
        )
    finally:
        app.state.classifier = None

    assert response.status_code == 400
    assert response.json()["detail"] == "Impossible d'identifier l'appareil"
