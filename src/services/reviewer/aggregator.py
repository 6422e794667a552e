"""Aggregate raw code and structure dumps for a PR's changed files."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from src.core.exceptions import ParseError, ResolutionError
from src.core.logging import get_logger
from src.services.github.client import PlatformClient
from src.services.github.schemas import ChangedFileRecord
from src.services.reviewer.content import resolve_file_content
from src.services.reviewer.parser import StructuralParser, render_tree
from src.services.reviewer.schemas import AggregatedReport, FileFailure

logger = get_logger("reviewer.aggregator")


def format_section(filename: str, body: str) -> str:
    """Label a block with its filename and fence it."""
    return f"### {filename}\n```\n{body}\n```\n\n"


@dataclass
class _FileOutcome:
    raw: str | None = None
    structure: str | None = None
    failure: FileFailure | None = None


def _process_file(
    platform: PlatformClient,
    parser: StructuralParser,
    owner: str,
    repo: str,
    file: ChangedFileRecord,
    ref: str | None,
) -> _FileOutcome:
    if file.status == "removed":
        return _FileOutcome(
            failure=FileFailure(filename=file.filename, kind="removed", message="file was deleted")
        )

    try:
        content = resolve_file_content(platform, owner, repo, file.filename, ref)
    except ResolutionError as e:
        logger.error(f"Error processing file {file.filename}: {e}")
        return _FileOutcome(failure=FileFailure(filename=file.filename, kind="resolution", message=str(e)))

    outcome = _FileOutcome(raw=format_section(file.filename, content))
    try:
        tree = parser.parse_to_tree(content, file.filename)
        outcome.structure = format_section(file.filename, render_tree(tree))
    except Exception as e:
        # Raw code stays in the report; only the structure dump is missing
        error = e if isinstance(e, ParseError) else ParseError(file.filename, str(e))
        logger.error(f"Error processing file {file.filename}: {error}")
        outcome.failure = FileFailure(filename=file.filename, kind="parse", message=str(error))
    return outcome


def aggregate(
    platform: PlatformClient,
    parser: StructuralParser,
    owner: str,
    repo: str,
    changed_files: list[ChangedFileRecord],
    ref: str | None = None,
    max_workers: int = 1,
) -> AggregatedReport:
    """Build the raw code and structure report for every changed file.

    A file that cannot be resolved or parsed is logged and skipped; it never
    aborts the batch. Sections keep the order of changed_files, also when
    files are processed by a worker pool.
    """

    def process(file: ChangedFileRecord) -> _FileOutcome:
        return _process_file(platform, parser, owner, repo, file, ref)

    if max_workers > 1 and len(changed_files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(process, changed_files))
    else:
        outcomes = [process(f) for f in changed_files]

    raw_parts: list[str] = []
    structure_parts: list[str] = []
    included: list[str] = []
    failures: list[FileFailure] = []
    for file, outcome in zip(changed_files, outcomes):
        if outcome.raw is not None:
            raw_parts.append(outcome.raw)
            included.append(file.filename)
        if outcome.structure is not None:
            structure_parts.append(outcome.structure)
        if outcome.failure is not None:
            failures.append(outcome.failure)

    logger.info(
        f"Aggregated {len(included)}/{len(changed_files)} files for {owner}/{repo} "
        f"({len(failures)} skipped or partial)"
    )
    return AggregatedReport(
        raw_code="".join(raw_parts),
        structure_report="".join(structure_parts),
        files_included=included,
        failures=failures,
    )
