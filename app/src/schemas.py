from typing import Optional
from pydantic import BaseModel, ConfigDict


class HealthStatus(BaseModel):
    status: str
    version: str


class ErrorResponse(BaseModel):
    detail: str


class LanguageSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    en: Optional[str] = None
    ar: Optional[str] = None
    ckb: Optional[str] = None


class FileSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    url: str
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
