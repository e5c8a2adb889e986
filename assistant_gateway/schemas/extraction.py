"""Schema describing the outcome of extracting text from one uploaded file."""

from pydantic import BaseModel, Field


class ExtractionResult(BaseModel):
    """Extracted text (or placeholder) for a single uploaded file."""

    name: str = Field(..., description="Uploaded file name")
    mime_type: str = Field(default="", description="Declared MIME type")
    size: int = Field(..., description="Declared or received size in bytes")
    extractor: str = Field(..., description="Name of the extractor that handled the file")
    content: str = Field(..., description="Extracted text or explanatory placeholder")
    success: bool = Field(..., description="False when the extractor raised and a placeholder was used")
    truncated: bool = Field(default=False, description="True when extracted text was sliced")
    duration_ms: int = Field(default=0, description="Extraction time in milliseconds")
