"""
Landing sayfasi icerik yonetimi.

Tekil bolumler (hero, landingVideo, featureTab) icin "upsert" yapilir:
kayit varsa ilk kayit guncellenir, yoksa yenisi olusturulur.
Ozellikler (features) en fazla MAX_LANDING_FEATURES adet olabilir.
"""

import uuid
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from kolaypanel.config import settings
from kolaypanel.services.documents import DocumentStore, require_document

logger = logging.getLogger(__name__)

HERO = "hero"
VIDEO = "landingVideo"
FEATURE_TAB = "featureTab"
FEATURES = "features"
TESTIMONIALS = "testimonials"

SINGLETON_SECTIONS = (HERO, VIDEO, FEATURE_TAB)


def get_section(store: DocumentStore, collection: str) -> dict[str, Any] | None:
    records = store.read_all_documents(collection)
    return records[0] if records else None


def upsert_section(store: DocumentStore, collection: str, data: BaseModel) -> dict[str, Any]:
    """Tekil bolumu kaydet: varsa guncelle, yoksa olustur."""
    payload = data.model_dump(mode="json")
    existing = get_section(store, collection)
    if existing:
        return store.update_document(collection, existing["id"], payload)
    section_id = store.create_document(collection, payload)
    logger.info("Landing bolumu olusturuldu: %s", collection)
    return store.get_document(collection, section_id)


# --- Ozellikler ---

def add_feature(store: DocumentStore, data: BaseModel) -> dict[str, Any]:
    if store.count_documents(FEATURES) >= settings.MAX_LANDING_FEATURES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"En fazla {settings.MAX_LANDING_FEATURES} ozellik eklenebilir",
        )
    feature_id = store.create_document(FEATURES, data.model_dump(mode="json"))
    return store.get_document(FEATURES, feature_id)


def update_feature(store: DocumentStore, feature_id: uuid.UUID | str, data: BaseModel) -> dict[str, Any]:
    feature = require_document(store, FEATURES, feature_id, "Ozellik bulunamadi")
    return store.update_document(FEATURES, feature["id"], data.model_dump(mode="json", exclude_unset=True))


def delete_feature(store: DocumentStore, feature_id: uuid.UUID | str) -> None:
    feature = require_document(store, FEATURES, feature_id, "Ozellik bulunamadi")
    store.delete_document(FEATURES, feature["id"])


# --- Musteri Yorumlari ---

def add_testimonial(store: DocumentStore, data: BaseModel) -> dict[str, Any]:
    testimonial_id = store.create_document(TESTIMONIALS, data.model_dump(mode="json"))
    return store.get_document(TESTIMONIALS, testimonial_id)


def update_testimonial(
    store: DocumentStore, testimonial_id: uuid.UUID | str, data: BaseModel
) -> dict[str, Any]:
    testimonial = require_document(store, TESTIMONIALS, testimonial_id, "Yorum bulunamadi")
    return store.update_document(
        TESTIMONIALS, testimonial["id"], data.model_dump(mode="json", exclude_unset=True)
    )


def delete_testimonial(store: DocumentStore, testimonial_id: uuid.UUID | str) -> None:
    testimonial = require_document(store, TESTIMONIALS, testimonial_id, "Yorum bulunamadi")
    store.delete_document(TESTIMONIALS, testimonial["id"])


def get_landing(store: DocumentStore) -> dict[str, Any]:
    """Landing sayfasinin tum bolumleri tek seferde."""
    return {
        "hero": get_section(store, HERO),
        "video": get_section(store, VIDEO),
        "feature_tab": get_section(store, FEATURE_TAB),
        "features": store.read_all_documents(FEATURES),
        "testimonials": store.read_all_documents(TESTIMONIALS),
        "generated_at": datetime.now(timezone.utc),
    }
