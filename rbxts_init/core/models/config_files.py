"""
Config file documents — typed views over JSON/YAML files we rewrite.

Every document keeps keys it does not know about (``extra="allow"``), so
reading a file, patching a few keys, and writing it back never drops
what another tool put there. Keys come back out in the order they were
read; keys added by a patch go at the end. Patches go through
``merged()``, which is the only way the pipeline changes a document.

YAML is read and written with YAML 1.2 booleans: only ``true``/``false``
are booleans, so ESLint's ``off`` and yarn's ``enableTelemetry: off``
stay strings.

Anything that stops a file from being read back (missing, malformed,
wrong shape) is a ConfigError naming the file.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from rbxts_init.core.errors import ConfigError

D = TypeVar("D", bound="ConfigDocument")

_BOOL_TAG = "tag:yaml.org,2002:bool"
_YAML12_BOOL = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")


def _yaml12_resolvers(base: type) -> dict[str, list[tuple[str, Any]]]:
    """Copy of ``base``'s implicit resolvers without the YAML 1.1 bool rule."""
    return {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
        for first, resolvers in base.yaml_implicit_resolvers.items()
    }


class _Loader(yaml.SafeLoader):
    yaml_implicit_resolvers = _yaml12_resolvers(yaml.SafeLoader)


class _Dumper(yaml.SafeDumper):
    yaml_implicit_resolvers = _yaml12_resolvers(yaml.SafeDumper)


for _cls in (_Loader, _Dumper):
    _cls.add_implicit_resolver(_BOOL_TAG, _YAML12_BOOL, list("tTfF"))


class ConfigDocument(BaseModel):
    """Base for structured config files.

    Keys are addressed by their on-disk spelling (the field alias).
    Only keys present in the source data or added by a patch are
    written back.
    """

    model_config = ConfigDict(extra="allow")

    _key_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: Any) -> Any:
        doc = handler(data)
        if isinstance(data, dict):
            doc._key_order = list(data)
        return doc

    def to_data(self) -> dict[str, Any]:
        """Return the document as a plain dict using on-disk key names."""
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        ordered = {key: data[key] for key in self._key_order if key in data}
        return {**ordered, **data}

    def merged(self: D, patch: dict[str, Any]) -> D:
        """Return a copy with ``patch`` keys replaced in place and all others kept."""
        data = self.to_data()
        data.update(patch)
        return type(self).model_validate(data)

    @classmethod
    def _from_file(cls: type[D], data: Any, path: Path) -> D:
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Unexpected content in {path}: {e}") from e

    # ── JSON ────────────────────────────────────────────────────

    @classmethod
    def read_json(cls: type[D], path: Path) -> D:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"{path} was not created") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        return cls._from_file(data, path)

    def write_json(self, path: Path, indent: int | str = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_data(), indent=indent), encoding="utf-8")

    # ── YAML ────────────────────────────────────────────────────

    @classmethod
    def read_yaml(cls: type[D], path: Path) -> D:
        """Load a YAML mapping; a missing or empty file is an empty document."""
        if not path.is_file():
            return cls.model_validate({})
        try:
            data = yaml.load(path.read_text(encoding="utf-8"), Loader=_Loader)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        return cls._from_file({} if data is None else data, path)

    def write_yaml(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.dump(self.to_data(), Dumper=_Dumper, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )


class PackageJson(ConfigDocument):
    """``package.json`` as written by the package manager's init command."""

    name: str = ""
    version: str | None = None
    main: str | None = None
    types: str | None = None
    scripts: dict[str, str] = Field(default_factory=dict)
    files: list[str] | None = None
    publish_config: dict[str, Any] | None = Field(default=None, alias="publishConfig")


class EslintConfig(ConfigDocument):
    """``.eslintrc.yml``."""

    extends: str | list[str] | None = None


class YarnRc(ConfigDocument):
    """``.yarnrc.yml`` (yarn berry)."""

    node_linker: str | None = Field(default=None, alias="nodeLinker")


class LanguageSettings(ConfigDocument):
    """A ``[language]`` block in ``.vscode/settings.json``."""

    default_formatter: str | None = Field(default=None, alias="editor.defaultFormatter")
    format_on_save: bool | None = Field(default=None, alias="editor.formatOnSave")


class VSCodeSettings(ConfigDocument):
    """``.vscode/settings.json``."""

    enable_prompt_use_workspace_tsdk: bool | None = Field(
        default=None, alias="typescript.enablePromptUseWorkspaceTsdk"
    )
    typescript: LanguageSettings | None = Field(default=None, alias="[typescript]")
    typescriptreact: LanguageSettings | None = Field(default=None, alias="[typescriptreact]")
    eslint_run: str | None = Field(default=None, alias="eslint.run")
    eslint_format_enable: bool | None = Field(default=None, alias="eslint.format.enable")


class VSCodeExtensions(ConfigDocument):
    """``.vscode/extensions.json``."""

    recommendations: list[str] = Field(default_factory=list)
