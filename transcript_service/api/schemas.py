from pydantic import BaseModel


class VideoRequest(BaseModel):
    """Model for requesting a transcript or notes by video reference."""
    url: str


class ErrorResponse(BaseModel):
    """Model for error responses."""
    detail: str
