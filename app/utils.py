"""Utility functions for the API."""

from deps import HTTPException, List, Path, Tuple

from baseline_guard.errors import ConfigError, DataLoadError
from baseline_guard.guard import BaselineGuard
from baseline_guard.violation import ViolationRecord

from .schemas import CheckRequest
from .services import GuardService

guard_svc = GuardService()


def run_check(req: CheckRequest, service: GuardService = None) -> Tuple[List[ViolationRecord], BaselineGuard, str]:
    """Run the guard. Returns (violations, guard, source label)."""
    service = service or guard_svc
    try:
        guard = service.build_guard(
            target_baseline=req.target_baseline,
            fail_on_newly=req.fail_on_newly,
            browsers=req.browsers,
        )
    except ConfigError as e:
        raise HTTPException(400, str(e))
    except DataLoadError as e:
        raise HTTPException(503, f"Feature dataset unavailable: {e}")

    if req.file_path:
        p = Path(req.file_path)
        if not p.is_absolute():
            raise HTTPException(400, "file_path must be absolute")
        if not p.is_file():
            raise HTTPException(404, f"File not found: {req.file_path}")
        return service.check_files([p], guard=guard), guard, str(p)
    if req.code is not None:
        return service.check_code(req.code, req.filename or "input.js", guard=guard), guard, req.filename
    raise HTTPException(
        400,
        "Provide either (code + filename) or file_path.",
    )
