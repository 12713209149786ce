"""
Page payload I/O models.

Every page route answers with a page object naming the frontend component to
render and the props it receives.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FlashMessages(BaseModel):
    """One-shot messages set by the previous request."""

    success: Optional[str] = None
    error: Optional[str] = None


class PagePayload(BaseModel):
    """Page object consumed by the single-page frontend."""

    component: str = Field(description="Frontend page component, e.g. 'clients/index'")
    props: Dict[str, Any] = Field(default_factory=dict, description="Props passed to the component")
    url: str = Field(description="URL of the page, including the query string")
    flash: FlashMessages = Field(default_factory=FlashMessages)
