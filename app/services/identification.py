"""
Device identification from a photo.

The classifier itself is an external service. This module only calls it
once per scan, normalizes its answer, and applies it to an unsaved device
form. Nothing here writes to the store.
"""

import base64
import binascii
import logging
from typing import Any, Awaitable, Callable, Mapping

from pydantic import model_validator

from app.core.errors import DeviceIdentificationError
from app.models.catalog import CatalogEntry, match_brand
from app.schemas.base import BaseSchema
from app.schemas.device import DeviceDraft


logger = logging.getLogger(__name__)


# Encoded image bytes in, {brand?, model?, color?} out
Classifier = Callable[[bytes], Awaitable[Mapping[str, Any]]]


class DeviceIdentification(BaseSchema):
    """Best-effort guess returned by the classifier."""

    brand: str | None = None
    model: str | None = None
    color: str | None = None

    @model_validator(mode="after")
    def _brand_or_model(self) -> "DeviceIdentification":
        if not self.brand and not self.model:
            raise ValueError("brand or model required")
        return self


def decode_image(image: bytes | str) -> bytes:
    """
    Raw image bytes from either bytes or a base64 string.

    A ``data:image/...;base64,`` header is stripped.
    """
    if isinstance(image, bytes):
        return image
    _, _, data = image.rpartition(",")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise DeviceIdentificationError("Image illisible")


async def identify_device(classifier: Classifier, image: bytes | str) -> DeviceIdentification:
    """
    Ask the classifier once; no retry.

    Raises:
        DeviceIdentificationError: The classifier failed or returned
            neither a brand nor a model
    """
    data = decode_image(image)
    try:
        result = await classifier(data)
        return DeviceIdentification.model_validate(result)
    except Exception as exc:
        logger.warning(f"Identification de l'appareil échouée: {exc}")
        raise DeviceIdentificationError()


def apply_to_draft(
    draft: DeviceDraft,
    result: DeviceIdentification,
    catalog: list[CatalogEntry],
) -> DeviceDraft:
    """
    Copy the identified fields onto a new draft.

    The brand takes the catalog's spelling when it matches a known brand.
    The input draft is not modified.
    """
    updates = {}
    if result.brand:
        updates["brand"] = match_brand(catalog, result.brand)
    if result.model:
        updates["model"] = result.model
    if result.color:
        updates["color"] = result.color
    return draft.model_copy(update=updates)
