"""Sample records and inputs shared by the tests."""

import io
from typing import Any

from PIL import Image

FULL_RECORD: dict[str, Any] = {
    "id": "rose-1",
    "breeder": "デビットオースチン (David Austin)",
    "name": "ボスコベル",
    "registrationDate": "2024-04-01T10:00:00.000Z",
    "plantingDate": "2024-04-02T00:00:00.000Z",
    "transplantDate": "2024-10-20T09:00:00.000Z",
    "memo": "South-facing balcony",
    "roseType": 2,
    "feature": "Rich salmon-pink.",
    "events": [
        {
            "id": "ev-2",
            "type": "FERTILIZER",
            "date": "2024-05-01T08:00:00.000Z",
            "details": "活力剤 (Vitalizer)",
            "subType": "VITALIZER",
        },
        {
            "id": "ev-1",
            "type": "PRUNING",
            "date": "2024-02-10T03:00:00.000Z",
            "details": "Winter pruning",
        },
    ],
    "photos": [
        {
            "id": "ph-1",
            "url": "data:image/jpeg;base64,AAAA",
            "date": "2024-05-20T06:00:00.000Z",
            "type": "BLOOM",
        }
    ],
    "notes": [
        {"id": "nt-1", "date": "2024-05-21T12:00:00.000Z", "content": "First flush of blooms"}
    ],
}


def fake_encoder(data: bytes) -> str:
    return "data:image/jpeg;base64," + data.hex()


def make_image_bytes(size: tuple[int, int] = (1600, 1200), fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 60)).save(buf, format=fmt)
    return buf.getvalue()
