"""Pydantic DTOs for theme management."""

from pydantic import BaseModel, Field


class ThemeResponse(BaseModel):
    key: str
    name: str
    description: str = ""
    author: str = ""
    version: str = "1.0.0"
    preview: str = ""
    templates: list[str] = []

    model_config = {"from_attributes": True}


class TemplateResponse(BaseModel):
    template_key: str
    name: str
    file: str
    theme: str


class SwitchThemeRequest(BaseModel):
    theme_key: str = Field(..., min_length=1, examples=["default"])
