from fastapi import APIRouter, status

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.landing import (
    FeatureCreate,
    FeatureTabSection,
    FeatureUpdate,
    HeroSection,
    LandingResponse,
    TestimonialCreate,
    TestimonialUpdate,
    VideoSection,
)
from kolaypanel.services import landing as landing_service

router = APIRouter()


@router.get("", response_model=LandingResponse)
def get_landing(store: StoreDep):
    """Landing sayfasinin tum bolumleri."""
    return landing_service.get_landing(store)


# --- Tekil bolumler ---

@router.put("/hero")
def save_hero(data: HeroSection, store: StoreDep):
    return landing_service.upsert_section(store, landing_service.HERO, data)


@router.put("/video")
def save_video(data: VideoSection, store: StoreDep):
    return landing_service.upsert_section(store, landing_service.VIDEO, data)


@router.put("/feature-tab")
def save_feature_tab(data: FeatureTabSection, store: StoreDep):
    return landing_service.upsert_section(store, landing_service.FEATURE_TAB, data)


# --- Ozellikler ---

@router.post("/features", status_code=status.HTTP_201_CREATED)
def add_feature(data: FeatureCreate, store: StoreDep):
    return landing_service.add_feature(store, data)


@router.put("/features/{feature_id}")
def update_feature(feature_id: str, data: FeatureUpdate, store: StoreDep):
    return landing_service.update_feature(store, feature_id, data)


@router.delete("/features/{feature_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feature(feature_id: str, store: StoreDep):
    landing_service.delete_feature(store, feature_id)


# --- Musteri yorumlari ---

@router.post("/testimonials", status_code=status.HTTP_201_CREATED)
def add_testimonial(data: TestimonialCreate, store: StoreDep):
    return landing_service.add_testimonial(store, data)


@router.put("/testimonials/{testimonial_id}")
def update_testimonial(testimonial_id: str, data: TestimonialUpdate, store: StoreDep):
    return landing_service.update_testimonial(store, testimonial_id, data)


@router.delete("/testimonials/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_testimonial(testimonial_id: str, store: StoreDep):
    landing_service.delete_testimonial(store, testimonial_id)
