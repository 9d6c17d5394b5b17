"""Command-line interface for endodcm.

Commands are plain Click commands added to the ``cli`` group below.
"""

import click

from endodcm import __version__

from . import set_log_verbosity
from .scan import scan
from .show import show


@click.group(no_args_is_help=True)
@set_log_verbosity()
@click.version_option(
    version=__version__,
    package_name="endodcm",
    prog_name="endodcm",
    message="%(package)s:%(prog)s:%(version)s",
)
@click.help_option("-h", "--help")
def cli(verbose: int, quiet: bool) -> None:
    """Convert endoscopic capture manifests into DICOM attributes."""
    pass


cli.add_command(show)
cli.add_command(scan)

if __name__ == "__main__":
    cli()
