"""
Tests for the Google Vision wrapper. The SDK client is replaced by plain fakes.
"""
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from chefai.services import vision_google
from chefai.services.errors import AINotReady, EmptyInput, UpstreamError


def label(description, score):
    return SimpleNamespace(description=description, score=score)


def fake_response(labels=(), objects=(), entities=(), error=""):
    return SimpleNamespace(
        label_annotations=list(labels),
        localized_object_annotations=list(objects),
        web_detection=SimpleNamespace(web_entities=list(entities)),
        error=SimpleNamespace(message=error),
    )


def fake_client(response=None, exc=None):
    def annotate_image(request):
        if exc:
            raise exc
        return response
    return SimpleNamespace(annotate_image=annotate_image)


def test_format_vision_response_percentages():
    response = fake_response(
        labels=[label("Tomato", 0.875)],
        objects=[SimpleNamespace(name="Vegetable", score=0.5)],
        entities=[label("Cherry tomato", 0.25)],
    )

    assert vision_google.format_vision_response(response) == {
        "labels": [{"description": "Tomato", "score": 88}],
        "objects": [{"name": "Vegetable", "score": 50}],
        "webEntities": [{"description": "Cherry tomato", "score": 25}],
    }


def test_format_vision_response_without_web_detection():
    response = SimpleNamespace(label_annotations=[], localized_object_annotations=[], web_detection=None)
    assert vision_google.format_vision_response(response)["webEntities"] == []


def test_ingredient_labels_drop_generic_words():
    response = fake_response(labels=[
        label("Tomato", 0.9),
        label("Food", 0.99),
        label("Side dish", 0.8),
        label("Italian cuisine", 0.7),
        label("Basil", 0.6),
    ])

    assert vision_google.ingredient_labels(response) == ["Tomato", "Basil"]


@pytest.mark.asyncio
async def test_detect_labels_without_credentials():
    with pytest.raises(AINotReady):
        await vision_google.detect_labels(content_b64="QUJD")


@pytest.mark.asyncio
async def test_detect_labels_with_client():
    response = fake_response(labels=[label("Meal", 0.9), label("Carrot", 0.8)])
    with patch.object(vision_google, "_get_vision_client", lambda: fake_client(response)):
        assert await vision_google.detect_labels(content_b64="data:image/jpeg;base64,QUJD") == ["Carrot"]


@pytest.mark.asyncio
async def test_detect_labels_requires_an_image():
    with patch.object(vision_google, "_get_vision_client", lambda: fake_client(fake_response())):
        with pytest.raises(EmptyInput):
            await vision_google.detect_labels()


@pytest.mark.asyncio
async def test_annotate_error_message_becomes_upstream_error():
    response = fake_response(error="quota exceeded")
    with patch.object(vision_google, "_get_vision_client", lambda: fake_client(response)):
        with pytest.raises(UpstreamError) as exc:
            await vision_google.analyze_image("QUJD")

    assert exc.value.service == "vision"


@pytest.mark.asyncio
async def test_annotate_exception_becomes_upstream_error():
    with patch.object(vision_google, "_get_vision_client", lambda: fake_client(exc=RuntimeError("down"))):
        with pytest.raises(UpstreamError):
            await vision_google.detect_labels(image_url="https://example.com/a.jpg")
