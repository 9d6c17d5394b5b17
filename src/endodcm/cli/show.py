import json
import pathlib

import click

from endodcm.loggers import logger


@click.command(no_args_is_help=True)
@click.argument(
    "manifest",
    type=click.Path(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        path_type=pathlib.Path,
        resolve_path=True,
    ),
)
@click.option(
    "--base-dir",
    "-b",
    "base_dir",
    type=click.Path(file_okay=False, path_type=pathlib.Path),
    default=None,
    help="Resolve media files against this directory instead of the manifest's.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the conversion as JSON instead of a table.",
)
@click.help_option(
    "-h",
    "--help",
)
def show(
    manifest: pathlib.Path,
    base_dir: pathlib.Path | None,
    as_json: bool,
) -> None:
    """Show the DICOM attributes and media files derived from a manifest.

    \b
    Examples:
      endodcm show case01/capture.xml
      endodcm show case01/capture.xml --json
      endodcm show case01/capture.xml -b /archive/case01
    """
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from endodcm.exceptions import EndoDcmError
    from endodcm.processor import convert_manifest

    try:
        conversion = convert_manifest(manifest, base_directory=base_dir)
    except EndoDcmError as e:
        logger.error("Conversion failed", path=manifest, error=str(e))
        raise click.ClickException(str(e)) from e

    media = {
        "videos": [str(p) for p in conversion.video_files],
        "pictures": [str(p) for p in conversion.picture_files],
        "sounds": [str(p) for p in conversion.sound_files],
    }

    if as_json:
        payload = {
            "manifest": str(manifest),
            "attributes": conversion.attributes.to_dict(),
            **media,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=escape(str(manifest)), box=None)
    table.add_column("Tag", style="dim", no_wrap=True)
    table.add_column("Keyword", style="cyan", no_wrap=True)
    table.add_column("VR", style="magenta", no_wrap=True)
    table.add_column("Value", style="green")
    for attribute in conversion.attributes.values():
        table.add_row(
            f"({attribute.tag.group:04X},{attribute.tag.element:04X})",
            attribute.keyword,
            attribute.vr.value,
            escape(attribute.encoded()),
        )

    console = Console()
    console.print(table)
    for kind, paths in media.items():
        console.print(f"[bold]{kind}[/bold] ({len(paths)})")
        for path in paths:
            console.print(f"  {path}", markup=False, highlight=False)
