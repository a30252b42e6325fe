"""Create output files and write the swagger.json snapshot."""

from __future__ import annotations

import json
from pathlib import Path

from .errors import GenerateError
from .log import LogSink, as_sink
from .model import ApiDocument

SNAPSHOT_NAME = "swagger.json"
MAX_CREATE_ATTEMPTS = 3


def create_file(
    base_dir: str | Path,
    relative_path: str,
    *,
    max_attempts: int = MAX_CREATE_ATTEMPTS,
    log: LogSink | None = None,
) -> Path:
    """Create a fresh, empty file at base_dir/relative_path.

    Missing parent directories are created. An existing file is deleted and
    creation retried, up to max_attempts tries in total.
    """
    log = as_sink(log)
    base = Path(base_dir)
    idx = relative_path.rfind("/")
    if idx != -1:
        directory = base / relative_path[:idx]
        file_name = relative_path[idx + 1:]
    else:
        directory = base
        file_name = relative_path
    if not file_name:
        raise GenerateError(f"Output path [{relative_path}] does not name a file")

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GenerateError(f"Create output directory [{directory}] failed.", e) from e

    target = directory / file_name
    last_error: OSError | None = None
    for _ in range(max_attempts):
        try:
            with open(target, "x", encoding="utf-8"):
                pass
        except FileExistsError as e:
            last_error = e
            try:
                target.unlink()
            except OSError as unlink_error:
                last_error = unlink_error
            continue
        except OSError as e:
            raise GenerateError(f"Create file [{target}] failed.", e) from e
        log.info(f"Creating file {target.absolute()}")
        return target

    raise GenerateError(
        f"Create file [{target}] failed after {max_attempts} attempts; "
        "the existing file could not be replaced.",
        last_error,
    )


def _cleanup_olds(directory: Path) -> None:
    """Delete files directly inside directory whose name ends in 'json'."""
    for entry in directory.iterdir():
        if entry.is_file() and entry.name.endswith("json"):
            entry.unlink(missing_ok=True)


def export_snapshot(
    doc: ApiDocument,
    target_dir: str | Path | None,
    *,
    log: LogSink | None = None,
) -> Path | None:
    """Write doc as pretty-printed JSON to target_dir/swagger.json.

    A target_dir of None disables the export; nothing is touched and None is
    returned. Earlier *json files in target_dir are removed first.
    """
    log = as_sink(log)
    if target_dir is None:
        log.debug("Skipping swagger export (no directory configured)")
        return None

    directory = Path(target_dir)
    if directory.is_file():
        raise GenerateError(f"Swagger-outputDirectory[{target_dir}] must be a directory!")
    if not directory.exists():
        try:
            directory.mkdir(parents=True)
        except OSError as e:
            raise GenerateError(f"Create Swagger-outputDirectory[{target_dir}] failed.", e) from e

    try:
        _cleanup_olds(directory)
        snapshot = directory / SNAPSHOT_NAME
        snapshot.write_text(
            json.dumps(doc.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except (OSError, TypeError, ValueError) as e:
        raise GenerateError(f"Write swagger snapshot to [{target_dir}] failed.", e) from e

    log.info(f"Wrote swagger snapshot {snapshot.absolute()}")
    return snapshot
