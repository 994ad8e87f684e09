"""Configuration: defaults < config file < environment < CLI < GitHub Actions inputs."""

from deps import (
    Any,
    BaseModel,
    ConfigDict,
    Dict,
    Field,
    List,
    Mapping,
    Optional,
    Path,
    Union,
    ValidationError,
    json,
    load_dotenv,
    logging,
    os,
)

from baseline_guard.browsers import BrowserTarget, parse_browser_targets
from baseline_guard.errors import ConfigError
from baseline_guard.policy import CompliancePolicy, Whitelist

load_dotenv()

LOGGER = logging.getLogger(__name__)

DEFAULT_SCAN_FILES = "src/**/*.{js,jsx,ts,tsx,css}"
DEFAULT_REPORT_DIR = "reports/baseline"
CONFIG_FILE_NAMES = ("baseline.config", "baseline.config.json")

# Searched relative to the working directory when no dataset path is set.
DATASET_SEARCH_PATHS = (
    Path("dist") / "web-features" / "data.json",
    Path("web-features") / "data.json",
    Path("node_modules") / "web-features" / "data.json",
    Path("..") / "web-features" / "data.json",
)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class JsSettings(BaseModel):
    """``jsSettings`` block of the config file."""

    ignore_common_false_positives: bool = Field(default=True, alias="ignoreCommonFalsePositives")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileConfig(BaseModel):
    """Contents of ``baseline.config``. Unset keys fall through to defaults."""

    target_baseline: Optional[Union[int, str]] = Field(default=None, alias="targetBaseline")
    scan_files: Optional[Union[str, List[str]]] = Field(default=None, alias="scanFiles")
    fail_on_newly: Optional[bool] = Field(default=None, alias="failOnNewly")
    dry_run: Optional[bool] = Field(default=None, alias="dryRun")
    browsers: Optional[Union[str, List[str]]] = None
    ignore_patterns: List[str] = Field(default_factory=list, alias="ignorePatterns")
    report_dir: Optional[str] = Field(default=None, alias="reportDir")
    js_whitelist: List[str] = Field(default_factory=list, alias="jsWhitelist")
    js_settings: JsSettings = Field(default_factory=JsSettings, alias="jsSettings")
    data_path: Optional[str] = Field(default=None, alias="dataPath")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GuardSettings(BaseModel):
    """Fully resolved settings for one run."""

    target_baseline: str = "widely"
    scan_files: str = DEFAULT_SCAN_FILES
    fail_on_newly: bool = True
    dry_run: bool = False
    browsers: str = "defaults"
    ignore_patterns: List[str] = Field(default_factory=list)
    report_dir: str = DEFAULT_REPORT_DIR
    js_whitelist: List[str] = Field(default_factory=list)
    ignore_common_false_positives: bool = True
    data_path: Optional[str] = None

    def policy(self) -> CompliancePolicy:
        return CompliancePolicy(self.target_baseline, strict=self.fail_on_newly)

    def whitelist(self) -> Whitelist:
        if not self.ignore_common_false_positives:
            return Whitelist()
        return Whitelist(self.js_whitelist)

    def browser_targets(self) -> List[BrowserTarget]:
        return parse_browser_targets(self.browsers)

    def dataset_candidates(self, cwd: Optional[Path] = None) -> List[Path]:
        """Dataset paths to try, in order."""
        base = Path(cwd) if cwd else Path.cwd()
        if self.data_path:
            return [base / self.data_path]
        return [base / p for p in DATASET_SEARCH_PATHS]


def parse_bool(value: Any, name: str) -> bool:
    """Interpret 'true'/'false' style input."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def _join(value: Union[str, List[str]]) -> str:
    return ",".join(value) if isinstance(value, list) else value


def find_config_file(explicit: Optional[str] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    """Config file to use: the explicit path, else the first default name present."""
    base = Path(cwd) if cwd else Path.cwd()
    if explicit:
        path = Path(explicit)
        return path if path.is_absolute() else base / path
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_file_config(path: Optional[Path]) -> FileConfig:
    """Load the config file. Unreadable or non-JSON files are ignored with a warning."""
    if path is None:
        return FileConfig()
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        LOGGER.warning("Could not parse config file %s: %s", path, e)
        return FileConfig()
    if not isinstance(raw, dict):
        LOGGER.warning("Config file %s is not a JSON object; ignoring it", path)
        return FileConfig()
    try:
        config = FileConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    LOGGER.info("Loaded config from %s", path)
    return config


def get_input(
    name: str,
    cli_args: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Any]:
    """Look up one input by its kebab-case name across GitHub inputs, CLI and env."""
    env = os.environ if environ is None else environ
    # GitHub Actions exposes `with:` inputs as INPUT_<NAME>, hyphens kept.
    for key in (f"INPUT_{name.upper()}", f"INPUT_{name.upper().replace('-', '_')}"):
        value = env.get(key)
        if value not in (None, ""):
            return value
    if cli_args:
        value = cli_args.get(name)
        if value is not None:
            return value
    value = env.get(name.upper().replace("-", "_"))
    if value not in (None, ""):
        return value
    return None


def resolve_settings(
    cli_args: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> GuardSettings:
    """Merge every configuration source and validate the result."""
    file_config = load_file_config(find_config_file(config_path, cwd))

    values: Dict[str, Any] = {
        "ignore_patterns": list(file_config.ignore_patterns),
        "js_whitelist": list(file_config.js_whitelist),
        "ignore_common_false_positives": file_config.js_settings.ignore_common_false_positives,
    }
    if file_config.target_baseline is not None:
        values["target_baseline"] = str(file_config.target_baseline)
    if file_config.scan_files is not None:
        values["scan_files"] = _join(file_config.scan_files)
    if file_config.fail_on_newly is not None:
        values["fail_on_newly"] = file_config.fail_on_newly
    if file_config.dry_run is not None:
        values["dry_run"] = file_config.dry_run
    if file_config.browsers is not None:
        values["browsers"] = _join(file_config.browsers)
    if file_config.report_dir is not None:
        values["report_dir"] = file_config.report_dir
    if file_config.data_path is not None:
        values["data_path"] = file_config.data_path

    for name, field_name in (
        ("target-baseline", "target_baseline"),
        ("scan-files", "scan_files"),
        ("browsers", "browsers"),
        ("report-dir", "report_dir"),
    ):
        value = get_input(name, cli_args, environ)
        if value is not None:
            values[field_name] = str(value)
    for name, field_name in (("fail-on-newly", "fail_on_newly"), ("dry-run", "dry_run")):
        value = get_input(name, cli_args, environ)
        if value is not None:
            values[field_name] = parse_bool(value, name)
    data_path = get_input("baseline-data", cli_args, environ)
    if data_path:
        values["data_path"] = str(data_path)

    settings = GuardSettings(**values)
    # Fail on a bad policy or browser query before any file is read.
    settings.policy()
    settings.browser_targets()
    return settings


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000
