"""Options validation endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from pypush.errors import OptionsReadError
from pypush.options import read_options

router = APIRouter()


class OptionsRequest(BaseModel):
    """Configuration text in the line-oriented ``key value`` format."""
    config: str = ""


class OptionsResponse(BaseModel):
    """Response body for configuration validation."""
    valid: bool
    options: Optional[Dict[str, Any]] = None
    errors: List[str] = []


@router.post("/options/validate", response_model=OptionsResponse)
async def validate_options(request: OptionsRequest):
    """Read a configuration and report the resulting options or the problem."""
    try:
        options = read_options(request.config)
    except OptionsReadError as e:
        return OptionsResponse(valid=False, errors=[str(e)])
    return OptionsResponse(valid=True, options=options.to_dict())
