"""Pydantic schema for the review status label taxonomy."""

from pydantic import BaseModel, ConfigDict

from github_review_labeler.utils.constants import STATUS_LABEL_COLORS


class LabelSpec(BaseModel):
    """Pydantic model for a canonical GitHub label definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str


REVIEW_LABEL_SPECS: tuple[LabelSpec, ...] = tuple(LabelSpec(name=name, color=color) for name, color in STATUS_LABEL_COLORS.items())
