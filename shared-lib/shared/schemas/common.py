"""
Common schema definitions shared by the library services.
"""

from pydantic import BaseModel


class Message(BaseModel):
    """Schema for simple acknowledgement responses."""

    message: str

