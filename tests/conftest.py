from pathlib import Path
from typing import Callable, Iterable
from xml.sax.saxutils import escape

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unittests: fast tests with no I/O beyond tmp_path")


ManifestWriter = Callable[..., Path]


def render_manifest(
    fields: Iterable[tuple[str, str]] = (),
    videos: Iterable[str] = (),
    pictures: Iterable[str] = (),
    sounds: Iterable[str] = (),
) -> str:
    """Render manifest XML; fields are pairs so a name may repeat."""
    lines = ["<?xml version='1.0' encoding='utf-8'?>", "<Procedure>"]
    lines += [f"  <{name}>{escape(value)}</{name}>" for name, value in fields]
    lines.append("  <Media>")
    lines += [f"    <VideoFile>{escape(v)}</VideoFile>" for v in videos]
    lines += [f"    <PictureFile>{escape(p)}</PictureFile>" for p in pictures]
    lines += [f"    <SoundFile>{escape(s)}</SoundFile>" for s in sounds]
    lines += ["  </Media>", "</Procedure>"]
    return "\n".join(lines)


@pytest.fixture
def valid_fields() -> list[tuple[str, str]]:
    return [
        ("PatID", "P001"),
        ("PatName", "Doe^Jane"),
        ("PatBirth", "01/01/1980"),
        ("PATSex", "F"),
        ("PATAccession", "ACC123"),
        ("ORDate", "03/11/2021 14:05:30"),
        ("ProcedureDescription", "Gastroscopy"),
        ("ProcedureID", "PROC9"),
        ("ReferringPhysician", "Smith^John"),
        ("StudyInstanceUID", "1.2.826.0.1.3680043.2.1"),
        ("SeriesInstanceUID", "1.2.826.0.1.3680043.2.2"),
        ("OtherPatientID", "1.2.3"),
    ]


@pytest.fixture
def write_manifest(tmp_path: Path) -> ManifestWriter:
    """Factory writing a manifest into ``tmp_path/<subdir>/<name>``."""

    def _write(
        fields: Iterable[tuple[str, str]] = (),
        videos: Iterable[str] = (),
        pictures: Iterable[str] = (),
        sounds: Iterable[str] = (),
        name: str = "capture.xml",
        subdir: str = "study7",
    ) -> Path:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(
            render_manifest(fields, videos, pictures, sounds), encoding="utf-8"
        )
        return path

    return _write
