# chefai/services/vision_google.py
# Google Cloud Vision: label / object / web-entity detection

from __future__ import annotations
from typing import List, Dict, Any, Optional, Sequence, Tuple
import asyncio
import base64
import binascii
import logging
import os
import re

try:
    from google.cloud import vision
    GOOGLE_VISION_AVAILABLE = True
except ImportError:
    GOOGLE_VISION_AVAILABLE = False
    logging.warning("Google Cloud Vision not available. Install with: pip install google-cloud-vision")

from chefai.core.config import settings
from chefai.services.errors import AINotReady, EmptyInput, UpstreamError
from chefai.services.recognition import strip_data_uri

logger = logging.getLogger(__name__)

# generic labels that are not ingredients
GENERIC_LABEL_RE = re.compile(r"dish|food|meal|cuisine", re.I)

def _get_vision_client():
    """API key first, then service-account credentials"""
    if not GOOGLE_VISION_AVAILABLE:
        raise AINotReady("google-cloud-vision is not installed")

    if settings.GOOGLE_VISION_API_KEY:
        return vision.ImageAnnotatorClient(client_options={"api_key": settings.GOOGLE_VISION_API_KEY})
    if os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
        return vision.ImageAnnotatorClient()
    raise AINotReady("GOOGLE_VISION_API_KEY / GOOGLE_APPLICATION_CREDENTIALS not set")

def _build_image(content_b64: Optional[str] = None, image_url: Optional[str] = None):
    if content_b64:
        try:
            data = base64.b64decode(strip_data_uri(content_b64), validate=True)
        except (binascii.Error, ValueError):
            raise EmptyInput("imageBase64 is not valid base64")
        return vision.Image(content=data)
    if image_url:
        return vision.Image(source=vision.ImageSource(image_uri=image_url))
    raise EmptyInput("image content or URL required")

async def _annotate(client, image, features: Sequence[Tuple[Any, int]]):
    """single annotate_image call; the SDK client is blocking so it runs in a thread"""
    request = vision.AnnotateImageRequest(
        image=image,
        features=[vision.Feature(type_=t, max_results=n) for t, n in features],
    )
    try:
        response = await asyncio.to_thread(client.annotate_image, request)
    except Exception as e:
        logger.error("Google Vision API error: %s", e)
        raise UpstreamError("vision", str(e)) from e

    if response.error and response.error.message:
        logger.error("Google Vision API error: %s", response.error.message)
        raise UpstreamError("vision", response.error.message)
    return response

def _pct(score: float) -> int:
    # 0.0–1.0 → integer percent, half rounds up
    return int(float(score or 0.0) * 100 + 0.5)

def format_vision_response(response) -> Dict[str, List[Dict[str, Any]]]:
    labels = getattr(response, "label_annotations", None) or []
    objects = getattr(response, "localized_object_annotations", None) or []
    web = getattr(response, "web_detection", None)
    entities = (getattr(web, "web_entities", None) or []) if web else []

    return {
        "labels": [{"description": l.description, "score": _pct(l.score)} for l in labels],
        "objects": [{"name": o.name, "score": _pct(o.score)} for o in objects],
        "webEntities": [{"description": w.description, "score": _pct(w.score)} for w in entities],
    }

def ingredient_labels(response) -> List[str]:
    labels = getattr(response, "label_annotations", None) or []
    return [l.description for l in labels if not GENERIC_LABEL_RE.search(l.description or "")]

async def analyze_image(content_b64: str) -> Dict[str, List[Dict[str, Any]]]:
    """labels(10) + objects(10) + web entities(5)"""
    client = _get_vision_client()
    image = _build_image(content_b64=content_b64)
    response = await _annotate(client, image, [
        (vision.Feature.Type.LABEL_DETECTION, 10),
        (vision.Feature.Type.OBJECT_LOCALIZATION, 10),
        (vision.Feature.Type.WEB_DETECTION, 5),
    ])
    return format_vision_response(response)

async def detect_labels(image_url: Optional[str] = None, content_b64: Optional[str] = None) -> List[str]:
    """label detection(10) with generic food words removed"""
    client = _get_vision_client()
    image = _build_image(content_b64=content_b64, image_url=image_url)
    response = await _annotate(client, image, [(vision.Feature.Type.LABEL_DETECTION, 10)])
    return ingredient_labels(response)
