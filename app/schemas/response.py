from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    success: bool = False
    message: str
    code: str
    details: Optional[Any] = None

class MessageResponse(BaseModel):
    """
    Standard acknowledgement for operations without a resource body.
    """
    success: bool = True
    message: str

class PurgeResponse(MessageResponse):
    """
    Acknowledgement of a maintenance sweep with the number of documents removed.
    """
    removed: int
