"""Command-line entry point: scan a project and gate CI on Baseline violations."""

from deps import List, Optional, Path, argparse, logging, os, sys

from baseline_guard.errors import ConfigError, DataLoadError
from baseline_guard.features import locate_dataset
from baseline_guard.guard import BaselineGuard
from baseline_guard.reporter import ReportGenerator
from baseline_guard.violation import ViolationRecord

from .config import GuardSettings, get_host, get_port, resolve_settings
from .services.file_extractor import collect_files

LOGGER = logging.getLogger("baseline_guard.cli")

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baseline-guard",
        description="Flag web-platform features below a Baseline target. "
        "Run `baseline-guard serve` to start the HTTP API.",
    )
    parser.add_argument("files", nargs="*", help="Files to scan (default: --scan-files globs)")
    parser.add_argument("--config", help="Config file (default: baseline.config[.json])")
    parser.add_argument("--target-baseline", help="'widely', 'newly' or a year")
    parser.add_argument("--scan-files", help="Comma separated globs, e.g. 'src/**/*.{js,css}'")
    parser.add_argument("--browsers", help="Browser targets for CSS, e.g. 'defaults' or 'safari >= 15'")
    parser.add_argument("--fail-on-newly", metavar="true|false", help="Fail on newly available features")
    parser.add_argument(
        "--dry-run", nargs="?", const="true", default=None, metavar="true|false",
        help="Report violations without failing",
    )
    parser.add_argument("--report-dir", help="Directory for HTML/JSON reports")
    parser.add_argument("--data", dest="baseline_data", help="Path to web-features data.json")
    parser.add_argument("--no-reports", action="store_true", help="Do not write report files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cli_inputs(args: argparse.Namespace) -> dict:
    """Map parsed arguments to kebab-case input names; unset ones are dropped."""
    inputs = {
        "target-baseline": args.target_baseline,
        "scan-files": args.scan_files,
        "browsers": args.browsers,
        "fail-on-newly": args.fail_on_newly,
        "dry-run": args.dry_run,
        "report-dir": args.report_dir,
        "baseline-data": args.baseline_data,
    }
    return {k: v for k, v in inputs.items() if v is not None}


def decide_exit_code(violations: List[ViolationRecord], settings: GuardSettings) -> int:
    """0 unless there are violations and the gate is armed."""
    if not violations:
        LOGGER.info("✅ No baseline violations found!")
        return EXIT_OK
    LOGGER.warning("Found %d baseline violations", len(violations))
    if settings.dry_run or not settings.fail_on_newly:
        LOGGER.warning("Continuing (dry run or fail disabled)")
        return EXIT_OK
    LOGGER.error("Build failed due to %d baseline violations", len(violations))
    return EXIT_VIOLATIONS


def scan(args: argparse.Namespace) -> int:
    try:
        settings = resolve_settings(cli_args=_cli_inputs(args), config_path=args.config)
        dataset = locate_dataset(settings.dataset_candidates())
        policy = settings.policy()
        guard = BaselineGuard(
            dataset,
            policy,
            whitelist=settings.whitelist(),
            browsers=settings.browser_targets(),
        )
    except (ConfigError, DataLoadError) as e:
        LOGGER.error("Baseline Guard failed: %s", e)
        return EXIT_FATAL

    LOGGER.info("Target Baseline: %s", policy.describe())
    LOGGER.info("Browsers: %s", settings.browsers)

    if args.files:
        files = [Path(f) for f in args.files]
    else:
        LOGGER.info("Scan Files: %s", settings.scan_files)
        files = collect_files(settings.scan_files, settings.ignore_patterns)
    LOGGER.info("Found %d files to scan", len(files))

    violations = guard.check_files(files)

    if not args.no_reports:
        paths = ReportGenerator.write_reports(
            violations, len(files), policy, Path(settings.report_dir), settings.dry_run
        )
        LOGGER.info("Reports generated: %s, %s", paths["html"], paths["json"])

    print(ReportGenerator.generate_text_report(violations, policy.describe()))
    if os.environ.get("GITHUB_ACTIONS") == "true":
        for line in ReportGenerator.generate_github_annotations(violations):
            print(line)

    return decide_exit_code(violations, settings)


def serve(argv: List[str]) -> int:
    import uvicorn

    parser = argparse.ArgumentParser(prog="baseline-guard serve")
    parser.add_argument("--host", default=get_host())
    parser.add_argument("--port", type=int, default=get_port())
    args = parser.parse_args(argv)
    uvicorn.run("app.main:app", host=args.host, port=args.port)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv[:1] == ["serve"]:
        return serve(argv[1:])
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return scan(args)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
