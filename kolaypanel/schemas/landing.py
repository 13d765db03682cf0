from datetime import datetime

from pydantic import BaseModel, Field


# --- Tekil bolumler (her kullanicida en fazla bir kayit) ---

class HeroSection(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    button1_text: str | None = Field(default=None, max_length=100)
    button1_url: str | None = None
    button2_text: str | None = Field(default=None, max_length=100)
    button2_url: str | None = None


class VideoSection(BaseModel):
    url: str = Field(min_length=1)
    title: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=2000)
    thumbnail: str | None = None


class FeatureTabSection(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)


# --- Liste bolumleri ---

class FeatureCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    icon: str | None = None


class FeatureUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    icon: str | None = None


class TestimonialCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    rating: int = Field(default=5, ge=1, le=5)
    icon: str | None = None


class TestimonialUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    rating: int | None = Field(default=None, ge=1, le=5)
    icon: str | None = None


class LandingResponse(BaseModel):
    """Landing sayfasinin tum bolumleri (kayit yoksa None/bos liste)"""
    hero: dict | None = None
    video: dict | None = None
    feature_tab: dict | None = None
    features: list[dict] = []
    testimonials: list[dict] = []
    generated_at: datetime
