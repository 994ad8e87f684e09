"""Check routes (Baseline scan of code or a file)."""

from deps import APIRouter, PlainTextResponse

from ..report_formatter import format_text_report
from ..schemas import CheckRequest, CheckResponse, ErrorDetail, ViolationOut
from ..utils import run_check

from baseline_guard.reporter import ReportGenerator

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorDetail, "description": "Invalid request or policy"},
    404: {"model": ErrorDetail, "description": "file_path does not exist"},
    503: {"model": ErrorDetail, "description": "Feature dataset unavailable"},
}


def _build_response(req: CheckRequest) -> CheckResponse:
    violations, guard, _ = run_check(req)
    return CheckResponse(
        baseline_target=guard.policy.describe(),
        violations=[ViolationOut.from_record(v) for v in violations],
        summary=ReportGenerator.generate_summary(violations),
        passed=not violations,
    )


@router.post("/check", response_model=CheckResponse, responses=_ERROR_RESPONSES)
def check(req: CheckRequest) -> CheckResponse:
    """Scan code or a server-side file against the Baseline target."""
    return _build_response(req)


@router.post("/check/report", response_class=PlainTextResponse, responses=_ERROR_RESPONSES)
def check_report(req: CheckRequest) -> str:
    """Same as /check, rendered as a Markdown report."""
    violations, guard, source = run_check(req)
    return format_text_report(
        source,
        guard.policy.describe(),
        [ViolationOut.from_record(v) for v in violations],
        ReportGenerator.generate_summary(violations),
    )
