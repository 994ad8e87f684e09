"""Guard service: wraps baseline_guard for the API and CLI."""

from deps import Any, List, Optional, Path, Sequence, Union

from baseline_guard.features import FeatureDataset, locate_dataset
from baseline_guard.guard import BaselineGuard
from baseline_guard.violation import ViolationRecord

from ..config import GuardSettings, parse_bool, resolve_settings


class GuardService:
    """Holds the resolved settings and the dataset, builds a guard per check."""

    def __init__(
        self,
        settings: Optional[GuardSettings] = None,
        dataset: Optional[FeatureDataset] = None,
    ):
        self._settings = settings
        self._dataset = dataset

    @property
    def settings(self) -> GuardSettings:
        if self._settings is None:
            self._settings = resolve_settings()
        return self._settings

    @property
    def dataset(self) -> FeatureDataset:
        """Dataset, loaded on first use. Raises DataLoadError if none is found."""
        if self._dataset is None:
            self._dataset = locate_dataset(self.settings.dataset_candidates())
        return self._dataset

    def build_guard(
        self,
        target_baseline: Optional[Union[int, str]] = None,
        fail_on_newly: Optional[Any] = None,
        browsers: Optional[str] = None,
    ) -> BaselineGuard:
        """Guard for the configured settings with optional per-call overrides."""
        overrides = {}
        if target_baseline is not None:
            overrides["target_baseline"] = str(target_baseline)
        if fail_on_newly is not None:
            overrides["fail_on_newly"] = parse_bool(fail_on_newly, "fail_on_newly")
        if browsers:
            overrides["browsers"] = browsers
        settings = self.settings.model_copy(update=overrides)
        return BaselineGuard(
            self.dataset,
            settings.policy(),
            whitelist=settings.whitelist(),
            browsers=settings.browser_targets(),
        )

    def check_code(self, code: str, filename: str, guard: Optional[BaselineGuard] = None) -> List[ViolationRecord]:
        """Scan raw code; the filename extension selects the scanner."""
        guard = guard or self.build_guard()
        return guard.check_source(filename, code)

    def check_files(
        self,
        file_paths: Sequence[Union[str, Path]],
        guard: Optional[BaselineGuard] = None,
    ) -> List[ViolationRecord]:
        """Scan files on disk."""
        guard = guard or self.build_guard()
        return guard.check_files(list(file_paths))
