"""
Grid Strategy Field Metadata and Form Schema

Field metadata drives the dynamic per-field validators; ``GridFormModel``
is the grid's own whole-form schema covering parameters, deposits and
vault ids.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from helpers.numbers import is_blank, parse_finite_number, parse_non_negative_int
from strategies.base_schema import FieldMetadata, FieldValidation, InputType
from validations.schema_builder import SafeParseResult, ValidationIssue


GRID_FIELD_METADATA: List[FieldMetadata] = [
    FieldMetadata(
        binding="baseline-io-ratio",
        input_type=InputType.NUMBER,
        placeholder="e.g., 0.0005 (price per token)",
        help_text="Starting price for your grid. This should be near the current market price.",
        step="0.0001",
        min="0",
        validation=FieldValidation(
            required=True,
            custom_message="Must be a positive number representing the starting price",
        ),
    ),
    FieldMetadata(
        binding="io-ratio-growth",
        input_type=InputType.NUMBER,
        placeholder="e.g., 0.05 (5% growth per level)",
        help_text="Growth rate determines spacing between grid levels. 0.05 = 5% price increase per level.",
        step="0.01",
        min="0",
        max="10",
        validation=FieldValidation(
            required=True,
            custom_message="Must be between 0 and 10 (e.g., 0.2 for 20% growth)",
        ),
    ),
    FieldMetadata(
        binding="tranche-size",
        input_type=InputType.NUMBER,
        placeholder="e.g., 1000 (tokens per level)",
        help_text="Amount of tokens to sell at each grid level.",
        step="0.001",
        min="0",
        validation=FieldValidation(
            required=True,
            custom_message="Must be a positive number (e.g., 100)",
        ),
    ),
    FieldMetadata(
        binding="seconds-per-tranche",
        input_type=InputType.NUMBER,
        placeholder="e.g., 3600 (1 hour)",
        help_text="Time to wait before refilling each grid level. Set to 0 to disable auto-refill.",
        step="1",
        min="0",
        max="31536000",
        validation=FieldValidation(
            required=False,
            custom_message="Must be between 0 and 31,536,000 seconds (1 year)",
        ),
    ),
]


def _grid_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("grid_field", message)


def _check_range(
    value: Optional[str],
    *,
    required_message: str,
    message: str,
    lower: float,
    upper: float,
    lower_inclusive: bool,
) -> str:
    if is_blank(value):
        raise _grid_error(required_message)
    number = parse_finite_number(value)
    if number is None or number > upper:
        raise _grid_error(message)
    if number < lower or (number == lower and not lower_inclusive):
        raise _grid_error(message)
    return value


class GridParameters(BaseModel):
    """Grid strategy parameters keyed by their field bindings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    baseline_io_ratio: Optional[str] = Field(
        default="", alias="baseline-io-ratio", validate_default=True
    )
    io_ratio_growth: Optional[str] = Field(
        default="", alias="io-ratio-growth", validate_default=True
    )
    tranche_size: Optional[str] = Field(
        default="", alias="tranche-size", validate_default=True
    )
    seconds_per_tranche: Optional[str] = Field(default="0", alias="seconds-per-tranche")

    @field_validator("baseline_io_ratio")
    @classmethod
    def validate_baseline(cls, v):
        return _check_range(
            v,
            required_message="Baseline ratio is required",
            message="Must be a positive number (e.g., 0.5)",
            lower=0,
            upper=10000,
            lower_inclusive=False,
        )

    @field_validator("io_ratio_growth")
    @classmethod
    def validate_growth(cls, v):
        return _check_range(
            v,
            required_message="Growth rate is required",
            message="Must be between 0 and 10 (e.g., 0.2 for 20% growth)",
            lower=0,
            upper=10,
            lower_inclusive=True,
        )

    @field_validator("tranche_size")
    @classmethod
    def validate_tranche_size(cls, v):
        return _check_range(
            v,
            required_message="Tranche size is required",
            message="Must be a positive number (e.g., 100)",
            lower=0,
            upper=1_000_000_000,
            lower_inclusive=False,
        )

    @field_validator("seconds_per_tranche")
    @classmethod
    def validate_seconds_per_tranche(cls, v):
        if is_blank(v):
            return "0"
        number = parse_finite_number(v)
        if number is None or number < 0 or number > 31_536_000:
            raise _grid_error("Must be between 0 and 31,536,000 seconds (1 year)")
        return v


def _check_deposit(value: Optional[str]) -> Optional[str]:
    if is_blank(value):
        return value
    number = parse_finite_number(value)
    if number is None or number < 0:
        raise _grid_error("Deposit amount must be a positive number")
    return value


def _check_vault_id(value: Optional[str]) -> Optional[str]:
    if is_blank(value):
        return value
    if parse_non_negative_int(value) is None:
        raise _grid_error("Vault ID must be a positive number")
    return value


class VaultIds(BaseModel):
    """Vault ids for the order's input and output tokens."""

    input: Dict[str, Optional[str]] = Field(default_factory=dict)
    output: Dict[str, Optional[str]] = Field(default_factory=dict)

    @field_validator("input", "output")
    @classmethod
    def validate_vault_ids(cls, v):
        for token_key, vault_id in v.items():
            try:
                _check_vault_id(vault_id)
            except PydanticCustomError as exc:
                raise _grid_error(f"{token_key}: {exc.message()}")
        return v


class GridFormModel(BaseModel):
    """Whole grid deployment form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    parameters: GridParameters = Field(default_factory=GridParameters)
    deposits: Dict[str, Optional[str]] = Field(default_factory=dict)
    vault_ids: VaultIds = Field(default_factory=VaultIds, alias="vaultIds")

    @field_validator("deposits")
    @classmethod
    def validate_deposits(cls, v):
        for token_key, amount in v.items():
            try:
                _check_deposit(amount)
            except PydanticCustomError as exc:
                raise _grid_error(f"{token_key}: {exc.message()}")
        return v


class GridFormSchema:
    """Adapter exposing ``GridFormModel`` through the ``safe_parse`` contract."""

    model = GridFormModel

    def safe_parse(self, value) -> SafeParseResult:
        try:
            parsed = self.model.model_validate(value or {})
        except ValidationError as exc:
            issues = [
                ValidationIssue(
                    path=".".join(str(part) for part in error["loc"]),
                    message=error["msg"],
                )
                for error in exc.errors()
            ]
            return SafeParseResult(success=False, errors=issues)
        return SafeParseResult(success=True, value=parsed.model_dump(by_alias=True))
