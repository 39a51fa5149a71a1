"""Data models for rendering options and multi-page jobs."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Margin(BaseModel):
    """Page margins. Values are CSS lengths ("20mm") or pixels."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    top: str | float | None = None
    right: str | float | None = None
    bottom: str | float | None = None
    left: str | float | None = None


class RenderOptions(BaseModel):
    """
    Page layout knobs handed to the rendering engine.

    Keys may be given in snake_case or in the camelCase used by
    Playwright and Puppeteer (``printBackground``, ``headerTemplate``...).
    Unset fields are left to the engine's own defaults.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    format: str | None = None  # e.g., "A4", "Letter"
    width: str | float | None = None
    height: str | float | None = None
    landscape: bool | None = None
    margin: Margin | None = None
    print_background: bool | None = None
    display_header_footer: bool | None = None
    header_template: str | None = None
    footer_template: str | None = None
    scale: float | None = Field(default=None, ge=0.1, le=2)
    page_ranges: str | None = None
    prefer_css_page_size: bool | None = Field(default=None, alias="preferCSSPageSize")
    outline: bool | None = None
    tagged: bool | None = None

    def to_pdf_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for Playwright's ``page.pdf``."""
        return self.model_dump(exclude_none=True)


class Document(BaseModel):
    """Immutable snapshot of what a single render acts on."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    render_options: RenderOptions = Field(default_factory=RenderOptions)


class PageSpec(BaseModel):
    """Render instructions for one page of a multi-page job."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    content: str | None = None
    template_path: Path | None = None
    render_options: RenderOptions | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _require_source(self) -> "PageSpec":
        """A page must say what to render; leftover content is never reused."""
        if self.template_path is None and not self.content:
            raise ValueError("PageSpec needs either content or template_path")
        return self
