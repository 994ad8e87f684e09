"""Pydantic request/response models."""

from deps import BaseModel, Dict, Field, List, Optional, Union

from baseline_guard.violation import ViolationRecord


# --- Request ---


class CheckRequest(BaseModel):
    """Either code+filename or file_path, with optional policy overrides."""

    code: Optional[str] = Field(default=None, description="Source code to scan")
    filename: str = Field(default="input.js", description="Virtual filename; its extension selects the scanner")
    file_path: Optional[str] = Field(default=None, description="Absolute path to a source file on the server")
    target_baseline: Optional[Union[int, str]] = Field(default=None, description="'widely', 'newly' or a year")
    fail_on_newly: Optional[bool] = Field(default=None, description="Treat newly available features as failures")
    browsers: Optional[str] = Field(default=None, description="Browser targets for stylesheets")

    model_config = {"populate_by_name": True}


# --- Violation (response) ---


class ViolationOut(BaseModel):
    """Single Baseline violation."""

    file: str
    line: int
    feature: str
    type: str = Field(..., description="js or css")
    context: str
    message: Optional[str] = None
    function_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: ViolationRecord) -> "ViolationOut":
        return cls(
            file=record.file,
            line=record.line,
            feature=record.feature_id,
            type=record.kind.value,
            context=record.context.value,
            message=record.message,
            function_name=record.function_name,
        )


# --- Responses ---


class CheckResponse(BaseModel):
    """Response for POST /check."""

    baseline_target: str
    violations: List[ViolationOut] = Field(default_factory=list)
    summary: Dict[str, int] = Field(default_factory=dict)
    passed: bool = True


class ErrorDetail(BaseModel):
    """Error response detail."""

    detail: str = Field(..., description="Error message")
