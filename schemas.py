"""Pydantic models for analysis segments and page state."""

from pydantic import BaseModel, Field
from typing import Annotated, Literal, Optional, Union


class SectionHeader(BaseModel):
    """Start of a numbered category, e.g. "Flag Identification"."""
    type: Literal["section_header"] = "section_header"
    title: str = Field(description="Header text with the numeric prefix removed.")


class LabeledField(BaseModel):
    """A "- key: value" fact."""
    type: Literal["labeled_field"] = "labeled_field"
    label: str = Field(description="Text between the dash and the first colon.")
    value: str = Field(description="Everything after the first colon.")


class BulletItem(BaseModel):
    """An unlabeled list entry."""
    type: Literal["bullet_item"] = "bullet_item"
    text: str


class Paragraph(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str


Segment = Annotated[
    Union[SectionHeader, LabeledField, BulletItem, Paragraph],
    Field(discriminator="type"),
]


class AnalysisState(BaseModel):
    """
    Current image and analysis shown to the user.

    Transitions return a new record so a state is always replaced as a whole:
    idle -> loading -> ready | failed, and back to loading on each new attempt.
    A failure keeps the previous image and analysis.
    """
    status: Literal["idle", "loading", "ready", "failed"] = "idle"
    image: Optional[str] = Field(default=None, description="Data URI of the current image.")
    analysis: str = ""
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status == "loading"

    def begin(self) -> "AnalysisState":
        return self.model_copy(update={"status": "loading", "error": None})

    def succeed(self, image: Optional[str], analysis: str) -> "AnalysisState":
        return AnalysisState(status="ready", image=image, analysis=analysis, error=None)

    def fail(self, message: str) -> "AnalysisState":
        return self.model_copy(update={"status": "failed", "error": message})
