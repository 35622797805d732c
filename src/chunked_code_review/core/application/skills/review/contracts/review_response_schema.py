from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chunked_code_review.core.domain.quality import ReviewSeverity

SeverityLiteral = Literal["blocker", "suggestion", "nitpick"]
ApprovalLiteral = Literal["approve", "request_changes", "comment"]


class ReviewCommentSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = Field(min_length=1, description="File path exactly as it appears in the diff")
    line: int = Field(
        gt=0, strict=True, description="New-file line number taken from the annotated diff"
    )
    body: str = Field(min_length=1, description="Explanation of the issue and suggested fix")
    severity: SeverityLiteral = Field(
        default="suggestion", description="blocker, suggestion or nitpick"
    )

    @field_validator("path", "body")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def default_missing_severity(cls, value: object) -> object:
        if value is None or value == "":
            return ReviewSeverity.default().value
        return value.strip().lower() if isinstance(value, str) else value


class ReviewResponseSchema(BaseModel):
    """JSON object the review engine is asked to return."""

    model_config = ConfigDict(extra="ignore")

    summary: str = Field(default="", description="Brief assessment of the reviewed diff")
    comments: list[ReviewCommentSchema] = Field(default_factory=list)
    approval: ApprovalLiteral = Field(default="comment")

    @field_validator("comments", mode="before")
    @classmethod
    def default_missing_comments(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("approval", mode="before")
    @classmethod
    def default_missing_approval(cls, value: object) -> object:
        if value is None or value == "":
            return "comment"
        return value.strip().lower() if isinstance(value, str) else value
