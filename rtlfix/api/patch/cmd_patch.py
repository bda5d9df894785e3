"""Patch command - apply the RTL fix to Claude Desktop."""

from collections.abc import Iterator

from .._output_schemas.patch import PatchPatchOutput
from ..errors import RestoreError
from ..StageResult import StageResult
from ._build_patcher import _build_patcher
from .Patcher import Patcher


def cmd_patch(patcher: Patcher | None = None) -> StageResult:
    """Apply the RTL fix.

    Args:
        patcher: Patcher to run; built from the user config when omitted

    Returns:
        StageResult with the hashes before and after, or the error and whether
        the live files were rolled back
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        try:
            runner = patcher or _build_patcher()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.output = PatchPatchOutput(
                errors=[str(e)],
                warnings=[],
                version="",
                state="idle",
                hash_before="",
                hash_after="",
                backup_skipped=False,
                rolled_back=False,
                error_kind="config",
                hint="Fix or remove the rtlfix config file.",
                restore_error="",
                pending=[],
            ).model_dump(mode="python")
            result_obj.success = False
            return

        outcome = yield from runner.patch()

        errors: list[str] = []
        hint = ""
        pending: list[str] = []
        if outcome.error is not None:
            errors.append(outcome.error.message)
            hint = outcome.error.hint
            if outcome.rolled_back:
                hint = f"Original files have been restored from backup. {hint}"
        if outcome.restore_error is not None:
            errors.append(f"Restoring the backups also failed: {outcome.restore_error.message}")
            if isinstance(outcome.restore_error, RestoreError):
                pending = [str(p) for p in outcome.restore_error.pending]
                hint = f"Manual recovery needed. {outcome.restore_error.hint}"
            else:
                hint = (
                    "Manual recovery needed: copy app.asar.bak and the executable's .bak over the live files, "
                    "or reinstall Claude Desktop."
                )

        if outcome.success:
            result_obj.result = f"RTL fix applied to Claude Desktop v{outcome.version}"
        else:
            result_obj.result = f"Failed to patch: {errors[0]}" if errors else "Failed to patch"

        result_obj.output = PatchPatchOutput(
            errors=errors,
            warnings=outcome.warnings,
            version=outcome.version,
            state=outcome.state.value,
            hash_before=outcome.hash_before,
            hash_after=outcome.hash_after,
            backup_skipped=outcome.backup_skipped,
            rolled_back=outcome.rolled_back,
            error_kind=outcome.error.kind if outcome.error else "",
            hint=hint,
            restore_error=outcome.restore_error.message if outcome.restore_error else "",
            pending=pending,
        ).model_dump(mode="python")
        result_obj.success = outcome.success

    return StageResult(
        announce="Patching Claude Desktop...",
        progress_callback=do_work,
    )
