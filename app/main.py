"""FastAPI app: /, /health, /check, /check/report."""

from deps import CORSMiddleware, FastAPI

from baseline_guard import __version__

from .routes import check_router, health_router, root_router
from .startup import validate_config

app = FastAPI(
    title="Baseline Guard API",
    description="Flags web-platform features below a Baseline compatibility target.",
    version=__version__,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(check_router)


@app.on_event("startup")
def _validate_config() -> None:
    """Validate config at startup and warn if the dataset is missing."""
    validate_config()
