from __future__ import annotations

from pathlib import Path
from typing import Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class EndoDcmSettings(BaseSettings):
    """
    Settings for batch manifest conversion.

    Values come from keyword arguments first, then from ``endodcm.yaml`` in
    the working directory.
    """

    base_directory: Path | None = Field(
        default=None,
        description=(
            "Directory media names are resolved against. "
            "When unset, each manifest's own directory is used."
        ),
    )
    manifest_extension: str = Field(
        default="xml",
        description="File extension identifying manifest files",
    )
    recursive: bool = Field(
        default=True,
        description="Search subdirectories for manifests",
    )
    model_config = SettingsConfigDict(
        yaml_file=(Path("endodcm.yaml"),),
        # other tools may keep their own keys in the same file
        extra="ignore",
    )

    @field_validator("manifest_extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        return value.lstrip(".")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def from_user_yaml(cls, path: Path) -> EndoDcmSettings:
        """Load settings from a YAML file."""
        source = YamlConfigSettingsSource(cls, yaml_file=path)
        settings = source()
        return cls(**settings)

    def to_yaml(self, path: Path) -> None:
        """Write the settings to a YAML file."""
        import yaml  # type: ignore

        model = self.model_dump(mode="json")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                yaml.dump(model, f, sort_keys=False)
        except OSError as e:
            msg = f"Failed to save settings to {path}: {e}"
            raise ValueError(msg) from e
