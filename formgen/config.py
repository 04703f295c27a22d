# formgen/config.py
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FormattingOptions(BaseModel):
    """Style options handed to the formatter backend."""
    parser: str = "typescript"
    single_quote: bool = True
    use_tabs: bool = False
    bracket_spacing: bool = True
    tab_width: int = Field(default=4, ge=1, le=16)
    backend: Literal["builtin", "prettier"] = "builtin"
    prettier_command: str = "prettier"


class GeneratorOptions(BaseSettings):
    """
    Options for one generation run.

    Values come from (highest first) explicit keyword arguments, the YAML
    config file, ``FORMGEN_*`` environment variables, then the defaults below.
    """
    file_prefix: str = ""
    file_suffix: str = ""
    output_folder: Path = Path("./")
    template_property_interface_name: str = Field(
        default="TemplateProperty", pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$"
    )
    formatting: FormattingOptions = Field(default_factory=FormattingOptions)
    workers: int = Field(default=1, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="FORMGEN_",
        env_nested_delimiter="__",
        extra="ignore",
    )


# camelCase keys accepted in config files
_CAMEL_KEYS = {
    "filePrefix": "file_prefix",
    "fileSuffix": "file_suffix",
    "outputFolder": "output_folder",
    "templatePropertyInterfaceName": "template_property_interface_name",
    "tslintOptions": "formatting",
    "formatting": "formatting",
}

_CAMEL_FORMATTING_KEYS = {
    "parser": "parser",
    "singleQuote": "single_quote",
    "useTabs": "use_tabs",
    "bracketSpacing": "bracket_spacing",
    "tabWidth": "tab_width",
}


def normalize_option_keys(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate camelCase option keys to GeneratorOptions field names."""
    result = {}
    for key, value in (raw or {}).items():
        target = _CAMEL_KEYS.get(key, key)
        if target == "formatting" and isinstance(value, dict):
            value = {_CAMEL_FORMATTING_KEYS.get(k, k): v for k, v in value.items()}
        result[target] = value
    return result


def load_options(config_path: Optional[str] = None, **overrides) -> GeneratorOptions:
    """
    Build GeneratorOptions from an optional YAML config file plus overrides.

    Overrides whose value is None are ignored so CLI flags that were not
    given do not clobber config-file values.
    """
    data: Dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        data.update(normalize_option_keys(loaded))

    formatting_overrides = {
        k: v for k, v in (overrides.pop("formatting", None) or {}).items() if v is not None
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    if formatting_overrides:
        formatting = dict(data.get("formatting") or {})
        formatting.update(formatting_overrides)
        data["formatting"] = formatting

    return GeneratorOptions(**data)
