"""
Command line tool that checks transaction test fixture files.

Example:
    ```
    ethereum-tx-check tests/TransactionTests --fork Prague
    ```
"""

import sys
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import click
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .chain_config import MAINNET_CONFIG, ChainConfig
from .exceptions import ConformanceException, UnsupportedForkError
from .fixtures import TransactionTestFile
from .forks import FORK_CASES, ForkCase, fork_case, fork_names
from .logging import LogLevel, configure_logging, get_logger
from .runner import run

logger = get_logger(__name__)


def collect_json_files(paths: Iterable[Path]) -> List[Path]:
    """
    Return the json files given directly or found below the given
    directories, excluding index.json files.
    """
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(
                    file
                    for file in path.rglob("*.json")
                    if file.name != "index.json"
                )
            )
        else:
            files.append(path)
    return files


def select_fork_cases(fork_names: Sequence[str]) -> Tuple[ForkCase, ...]:
    """
    Return the fork cases to check, all of them if none are named.
    """
    if not fork_names:
        return FORK_CASES
    try:
        selected = {fork_case(name).name for name in fork_names}
    except UnsupportedForkError as e:
        raise click.BadParameter(str(e), param_hint="--fork") from e
    return tuple(case for case in FORK_CASES if case.name in selected)


def check_file(
    json_file_path: Path,
    chain_config: ChainConfig,
    fork_cases: Sequence[ForkCase],
) -> List[Tuple[str, ConformanceException]]:
    """
    Run every test in `json_file_path` and return the ones that failed.
    """
    failures: List[Tuple[str, ConformanceException]] = []
    for name, test in TransactionTestFile.from_file(json_file_path).items():
        try:
            run(test, chain_config, fork_cases)
        except ConformanceException as e:
            failures.append((name, e))
        else:
            logger.verbose(f"{name}: passed")
    return failures


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--chain-config",
    "-c",
    "chain_config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=(
        "YAML or JSON file with the chain configuration (a genesis file is "
        "accepted). Defaults to Ethereum mainnet."
    ),
)
@click.option(
    "--fork",
    "-f",
    "fork_names",
    multiple=True,
    help=(
        "Only check the given fork. May be repeated. One of: "
        + ", ".join(fork_names())
        + "."
    ),
)
@click.option(
    "--quiet",
    "-q",
    "quiet_mode",
    is_flag=True,
    default=False,
    help="Don't show the progress bar while processing fixture files.",
)
@click.option(
    "--stop-on-error",
    "-s",
    "stop_on_error",
    is_flag=True,
    default=False,
    help="Stop after the first fixture file with a failing test.",
)
@click.option(
    "--log-level",
    "log_level",
    default="WARNING",
    show_default=True,
    help="Logging level: a level name (DEBUG, VERBOSE, INFO, ...) or number.",
)
def check_transaction_tests(
    paths: Tuple[Path, ...],
    chain_config_path: Path | None,
    fork_names: Tuple[str, ...],
    quiet_mode: bool,
    stop_on_error: bool,
    log_level: str,
) -> None:
    """
    Check the transaction tests in the given files and directories.
    """
    try:
        level = LogLevel.from_cli(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e
    configure_logging(log_level=level)

    fork_cases = select_fork_cases(fork_names)
    if chain_config_path is None:
        chain_config = MAINNET_CONFIG
    else:
        try:
            chain_config = ChainConfig.from_file(chain_config_path)
        except ConformanceException as e:
            raise click.BadParameter(
                str(e), param_hint="--chain-config"
            ) from e

    json_files = collect_json_files(paths)
    failed_tests = 0
    filename_display_width = 25

    with Progress(
        TextColumn(
            f"[bold cyan]{{task.fields[filename]:<{filename_display_width}}}[/]",  # noqa: E501
            justify="left",
        ),
        BarColumn(
            bar_width=None,
            complete_style="green3",
            finished_style="bold green3",
        ),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        expand=True,
        disable=quiet_mode,
    ) as progress:
        task_id = progress.add_task(
            "Checking transaction tests",
            total=len(json_files),
            filename="...",
        )
        for json_file_path in json_files:
            display_filename = json_file_path.name
            if len(display_filename) > filename_display_width:
                display_filename = (
                    display_filename[: filename_display_width - 3] + "..."
                )
            progress.update(
                task_id, advance=1, filename=f"Checking {display_filename}"
            )

            try:
                failures = check_file(json_file_path, chain_config, fork_cases)
            except ConformanceException as e:
                failures = [("<file>", e)]
            for name, error in failures:
                failed_tests += 1
                progress.console.print(
                    f"FAIL {json_file_path}::{name}: {error}",
                    style="red",
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )
            if failures and stop_on_error:
                break

        progress.update(task_id, filename="Done")

    if failed_tests:
        click.echo(f"{failed_tests} transaction test(s) failed.", err=True)
        sys.exit(1)
    click.echo(f"All transaction tests in {len(json_files)} file(s) passed.")


if __name__ == "__main__":
    check_transaction_tests()
