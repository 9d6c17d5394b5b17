import pathlib

import click

from endodcm.loggers import logger


@click.command(no_args_is_help=True)
@click.argument(
    "directory",
    type=click.Path(
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        path_type=pathlib.Path,
        resolve_path=True,
    ),
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
    default=None,
    help="YAML settings file. Defaults to ./endodcm.yaml when present.",
)
@click.option(
    "-e",
    "--extension",
    default=None,
    help="Manifest file extension. [default: xml]",
)
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Search subdirectories. [default: recursive]",
)
@click.option(
    "--no-progress",
    is_flag=True,
    default=False,
    help="Disable the progress bar.",
)
@click.help_option(
    "-h",
    "--help",
)
def scan(
    directory: pathlib.Path,
    config_file: pathlib.Path | None,
    extension: str | None,
    recursive: bool | None,
    no_progress: bool,
) -> None:
    """Convert every manifest under DIRECTORY and report the outcome.

    Each manifest is converted independently; a failing manifest is
    reported and the scan continues. The exit code is 1 when any
    manifest failed.
    """
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
    from tqdm import tqdm

    from endodcm.config import EndoDcmSettings
    from endodcm.exceptions import EndoDcmError
    from endodcm.loggers import tqdm_logging_redirect
    from endodcm.manifest import find_manifests
    from endodcm.processor import convert_manifest

    settings = (
        EndoDcmSettings.from_user_yaml(config_file)
        if config_file
        else EndoDcmSettings()
    )
    if extension is not None:
        settings.manifest_extension = extension.lstrip(".")
    if recursive is not None:
        settings.recursive = recursive

    manifests = find_manifests(
        directory,
        recursive=settings.recursive,
        extension=settings.manifest_extension,
    )
    if not manifests:
        logger.warning(
            "No manifests found.",
            directory=directory,
            extension=settings.manifest_extension,
        )
        click.echo(f"No manifests found in {directory}.")
        return

    table = Table(box=None)
    table.add_column("Manifest", style="cyan")
    table.add_column("Attributes", justify="right")
    table.add_column("Videos", justify="right")
    table.add_column("Pictures", justify="right")
    table.add_column("Sounds", justify="right")
    table.add_column("Status")

    failures: list[tuple[pathlib.Path, Exception]] = []
    with tqdm_logging_redirect():
        for manifest in tqdm(
            manifests, desc="Converting manifests", disable=no_progress
        ):
            try:
                conversion = convert_manifest(
                    manifest, base_directory=settings.base_directory
                )
            except EndoDcmError as e:
                failures.append((manifest, e))
                logger.error("Conversion failed", path=manifest, error=str(e))
                table.add_row(
                    escape(str(manifest.relative_to(directory))),
                    "-",
                    "-",
                    "-",
                    "-",
                    f"[red]{type(e).__name__}[/red]",
                )
                continue
            table.add_row(
                escape(str(manifest.relative_to(directory))),
                str(len(conversion.attributes)),
                str(len(conversion.video_files)),
                str(len(conversion.picture_files)),
                str(len(conversion.sound_files)),
                "[green]ok[/green]",
            )

    Console().print(table)
    for manifest, error in failures:
        click.echo(f"FAILED {manifest}: {type(error).__name__}: {error}")
    click.echo(f"{len(manifests) - len(failures)} of {len(manifests)} converted.")
    if failures:
        raise SystemExit(1)
