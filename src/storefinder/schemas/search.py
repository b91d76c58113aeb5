"""
Pydantic schemas for the store search API.

Request parsing happens here; keyword rules (count, length, characters,
duplicates) are enforced by utils.validators so the same rules apply to
non-HTTP callers.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    """Request schema for POST /api/search."""
    keywords: List[str] = Field(..., description="Keywords every store must match (2-5)")

    model_config = ConfigDict(extra="ignore")


class StoreProductSchema(BaseModel):
    title: str
    link: str
    image: str = ""
    price: str = ""
    keywords: List[str] = Field(default_factory=list)


class SmartStoreSchema(BaseModel):
    storeId: str
    storeName: str
    products: List[StoreProductSchema] = Field(default_factory=list)


class SearchStatsSchema(BaseModel):
    apiCalls: int = Field(default=0, ge=0, description="Page requests issued")
    pagesSearched: int = Field(default=0, ge=0, description="Pages fetched per keyword")
    cacheHits: int = Field(default=0, ge=0)
    stoppedEarly: bool = False
    cancelled: bool = False
    sortOptionsUsed: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class SearchData(BaseModel):
    intersectionStores: List[SmartStoreSchema] = Field(default_factory=list)
    keywordCount: int = Field(..., ge=0)
    totalStoresFound: int = Field(..., ge=0)
    searchStats: SearchStatsSchema = Field(default_factory=SearchStatsSchema)


class SearchResponse(BaseModel):
    """Response envelope for POST /api/search."""
    success: bool
    data: Optional[SearchData] = None
    error: Optional[str] = None
