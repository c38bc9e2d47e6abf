"""Small response bodies shared by the API routes."""

from typing import List

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: List[str]
