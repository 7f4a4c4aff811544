"""Run endpoint for Push program execution."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional
import time

from pypush.errors import ConfigValidationError, ParseError
from pypush.options import Options
from pypush.runtime.interpreter import Interpreter

router = APIRouter()


class OptionsModel(BaseModel):
    """Interpreter options; omitted fields keep their defaults."""
    model_config = ConfigDict(extra="forbid")

    top_level_push_code: Optional[bool] = None
    top_level_pop_code: Optional[bool] = None
    eval_push_limit: Optional[int] = None
    new_erc_name_probability: Optional[float] = None
    max_points_in_program: Optional[int] = None
    max_points_in_random_expression: Optional[int] = None
    max_random_float: Optional[float] = None
    min_random_float: Optional[float] = None
    max_random_integer: Optional[int] = None
    min_random_integer: Optional[int] = None
    tracing: Optional[bool] = None
    random_seed: Optional[int] = None
    allowed_types: Optional[List[str]] = None
    allowed_instructions: Optional[List[str]] = None


class RunRequest(BaseModel):
    """Request body for program execution."""
    program: str
    options: Optional[OptionsModel] = None


class RunResponse(BaseModel):
    """Response body for program execution."""
    status: str
    success: bool
    steps: int
    execution_time_ms: float
    stacks: Dict[str, List[Any]] = {}
    definitions: Dict[str, str] = {}
    error: Optional[str] = None


def build_options(model: Optional[OptionsModel]) -> Options:
    """Build Options from validated request fields, mapping limit problems to HTTP 422."""
    raw = model.model_dump(exclude_none=True) if model is not None else {}
    for key in ("allowed_types", "allowed_instructions"):
        if key in raw:
            raw[key] = frozenset(raw[key])
    try:
        return Options(**raw)
    except ConfigValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.problems})


@router.post("/run", response_model=RunResponse)
def run_program(request: RunRequest):
    """Run a Push program on a fresh interpreter."""
    options = build_options(request.options)
    interpreter = Interpreter(options)

    start_time = time.time()
    try:
        result = interpreter.run(request.program)
    except ParseError as e:
        raise HTTPException(status_code=422, detail={"errors": [str(e)]})
    execution_time = (time.time() - start_time) * 1000

    state = interpreter.state_dict()
    return RunResponse(
        status=result.status.value,
        success=result.success,
        steps=result.steps,
        execution_time_ms=execution_time,
        stacks=state["stacks"],
        definitions=state["definitions"],
        error=result.message or None,
    )
