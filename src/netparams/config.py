"""Parser configuration.

Pydantic models with strict validation (``extra="forbid"``), loadable from a
mapping or from a YAML/JSON file.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .frequency import FrequencyUnit
from .options import ParameterKind, TouchstoneOptions, ValueEncoding


def _coerce(parser: Callable[[str], Any]) -> Callable[[Any], Any]:
    def _validate(value: Any) -> Any:
        if isinstance(value, str):
            return parser(value)
        return value

    return _validate


# Accept "ghz", "GHz", "s", "ri" ... the same way the option line does.
UnitField = Annotated[FrequencyUnit, BeforeValidator(_coerce(FrequencyUnit.parse))]
KindField = Annotated[ParameterKind, BeforeValidator(_coerce(ParameterKind.parse))]
EncodingField = Annotated[ValueEncoding, BeforeValidator(_coerce(ValueEncoding.parse))]


class _ConfigBase(BaseModel):
    """Base model with strict validation - no extra fields allowed."""

    model_config = ConfigDict(extra="forbid")


class TouchstoneOptionsSpec(_ConfigBase):
    """Option values assumed when a file has no ``#`` option line."""

    unit: UnitField = Field(FrequencyUnit.GHZ, description="Frequency unit (Hz, kHz, MHz, GHz, THz)")
    parameter_kind: KindField = Field(ParameterKind.S, description="Parameter kind (S, Y, Z, G, H)")
    value_encoding: EncodingField = Field(ValueEncoding.MA, description="Value pair encoding (DB, MA, RI)")
    resistance: float = Field(50.0, gt=0, description="Reference resistance in ohms")

    def to_options(self) -> TouchstoneOptions:
        """Convert to the immutable runtime options record."""
        return TouchstoneOptions(
            unit=self.unit,
            parameter_kind=self.parameter_kind,
            value_encoding=self.value_encoding,
            resistance=self.resistance,
        )


class ParserConfig(_ConfigBase):
    """Settings for reading Touchstone files."""

    encoding: str = Field("utf-8", min_length=1, description="Text encoding of input files")
    errors: Literal["strict", "replace", "ignore"] = Field(
        "strict", description="Decoding error policy passed to open()"
    )
    strict_declared_counts: bool = Field(
        False,
        description="Raise instead of warn when [Number of Ports]/[Number of Frequencies] disagree with the data",
    )
    default_options: TouchstoneOptionsSpec = Field(default_factory=TouchstoneOptionsSpec)


def load_parser_config(data: dict[str, Any]) -> ParserConfig:
    """Load and validate a ParserConfig from a dictionary.

    Raises:
        pydantic.ValidationError: If data fails validation.
    """
    return ParserConfig.model_validate(data)


def load_parser_config_from_file(path: Path | str) -> ParserConfig:
    """Load and validate a ParserConfig from a YAML or JSON file.

    Args:
        path: Path to the YAML (.yaml, .yml) or JSON (.json) file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is not supported or the content is
            not a mapping.
        pydantic.ValidationError: If the data fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parser config file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix in (".yaml", ".yml"):
        import yaml

        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Parser config file must contain a mapping, got {type(data).__name__}")

    return load_parser_config(data)
