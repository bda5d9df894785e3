"""Status command - read-only view of the patch state."""

from collections.abc import Iterator

from .._output_schemas.patch import PatchStatusOutput
from ..StageResult import StageResult
from ._build_patcher import _build_patcher
from .Patcher import Patcher


def cmd_status(patcher: Patcher | None = None) -> StageResult:
    """Show whether Claude Desktop is patched, running and restorable."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        try:
            runner = patcher or _build_patcher()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.result = f"Failed to load configuration: {e}"
            result_obj.output = PatchStatusOutput(
                errors=[str(e)],
                warnings=[],
                version="",
                all_versions=[],
                running=False,
                patched=False,
                patch_info=None,
                code_patched=None,
                backups_exist=False,
                paths={},
                error_kind="config",
                hint="Fix or remove the rtlfix config file.",
            ).model_dump(mode="python")
            result_obj.success = False
            return

        report = yield from runner.status()

        if report.success:
            state = "patched" if report.patched else "not patched"
            result_obj.result = f"Claude Desktop v{report.version} is {state}"
        else:
            result_obj.result = report.error.message

        result_obj.output = PatchStatusOutput(
            errors=[report.error.message] if report.error else [],
            warnings=report.warnings,
            version=report.version,
            all_versions=report.all_versions,
            running=report.running,
            patched=report.patched,
            patch_info=report.marker.to_json_dict() if report.marker else None,
            code_patched=report.code_patched,
            backups_exist=report.backups_exist,
            paths=report.paths,
            error_kind=report.error.kind if report.error else "",
            hint=report.error.hint if report.error else "",
        ).model_dump(mode="python")
        result_obj.success = report.success

    return StageResult(
        announce="Checking patch status...",
        progress_callback=do_work,
    )
