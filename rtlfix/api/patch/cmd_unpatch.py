"""Unpatch command - restore Claude Desktop's original files."""

from collections.abc import Iterator

from .._output_schemas.patch import PatchUnpatchOutput
from ..errors import RestoreError
from ..StageResult import StageResult
from ._build_patcher import _build_patcher
from .Patcher import Patcher


def cmd_unpatch(patcher: Patcher | None = None) -> StageResult:
    """Remove the RTL fix by restoring the backups."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        try:
            runner = patcher or _build_patcher()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.output = PatchUnpatchOutput(
                errors=[str(e)],
                warnings=[],
                version="",
                restored=[],
                pending=[],
                error_kind="config",
                hint="Fix or remove the rtlfix config file.",
            ).model_dump(mode="python")
            result_obj.success = False
            return

        outcome = yield from runner.unpatch()

        if outcome.success:
            result_obj.result = f"Claude Desktop v{outcome.version} has been restored to its original state"
        else:
            result_obj.result = f"Failed to unpatch: {outcome.error.message}"

        result_obj.output = PatchUnpatchOutput(
            errors=[outcome.error.message] if outcome.error else [],
            warnings=[],
            version=outcome.version,
            restored=[str(p) for p in outcome.restored],
            pending=[str(p) for p in outcome.error.pending] if isinstance(outcome.error, RestoreError) else [],
            error_kind=outcome.error.kind if outcome.error else "",
            hint=outcome.error.hint if outcome.error else "",
        ).model_dump(mode="python")
        result_obj.success = outcome.success

    return StageResult(
        announce="Unpatching Claude Desktop...",
        progress_callback=do_work,
    )
