"""Pydantic DTOs for the brand/model catalog."""

from pydantic import BaseModel, Field


class CatalogModelSchema(BaseModel):
    name: str
    is_active: bool

    model_config = {"from_attributes": True}


class CatalogBrandResponse(BaseModel):
    id: str
    brand: str
    models: list[CatalogModelSchema]
    is_active: bool

    model_config = {"from_attributes": True}


class CatalogUpsertRequest(BaseModel):
    """Create a brand, or replace the model list of an existing one."""

    brand: str = Field(..., min_length=1, max_length=50, examples=["Honda"])
    models: list[str] = Field(..., min_length=1, examples=[["Civic", "Accord"]])

    model_config = {"str_strip_whitespace": True}


class AddModelRequest(BaseModel):
    model: str = Field(..., min_length=1, max_length=50, examples=["Mustang"])

    model_config = {"str_strip_whitespace": True}


class BrandListResponse(BaseModel):
    brands: list[str]


class ModelListResponse(BaseModel):
    brand: str
    models: list[str]


class YearListResponse(BaseModel):
    years: list[int]


class CatalogListResponse(BaseModel):
    catalogs: list[CatalogBrandResponse]
