from pydantic import BaseModel, Field


class EmailMessageDto(BaseModel):
    to: str
    subject: str
    html: str
    to_name: str | None = None
    text: str | None = None
    reply_to: str | None = None


class RenderedEmailDto(BaseModel):
    subject: str
    html: str
    text: str


class EmailResultDto(BaseModel):
    success: bool
    message_id: str | None = None
    error: str | None = None


class BulkEmailResultDto(BaseModel):
    success: bool
    sent: int
    failed: int
    errors: list[str] = Field(default_factory=list)
