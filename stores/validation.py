"""
Validation state and submit-readiness.

``ValidationStore`` holds field/form errors. ``ValidationAggregator``
derives ``has_required_values``, ``can_submit`` and the form status from
the strategy, wallet, validation and deployment stores. It recomputes
synchronously, in a fixed order, whenever any of them changes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from helpers.unified_logger import get_core_logger
from strategies.base_schema import FieldMetadata
from strategies.registry import StrategyRegistry

from .base import Store
from .deployment import DeploymentStore
from .strategy import StrategyStore
from .wallet import WalletStore

FALLBACK_REQUIRED_FIELDS = ("baseline-io-ratio", "io-ratio-growth", "tranche-size")

# Compared as strings: "0.0" or "00" count as values.
_EMPTY_SENTINELS = ("0", "NaN")


@dataclass(frozen=True)
class ValidationState:
    is_valid: bool = False
    errors: Dict[str, List[str]] = field(default_factory=dict)
    is_validating: bool = False


def _flatten_errors(errors: Mapping[str, Any], prefix: str = "") -> Dict[str, List[str]]:
    """Nested error mappings -> ``{dotted.path: [messages]}``, dropping blanks."""
    flat: Dict[str, List[str]] = {}
    for key, value in errors.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, str):
            if value.strip():
                flat[path] = [value]
        elif isinstance(value, (list, tuple)):
            messages = [v for v in value if isinstance(v, str) and v.strip()]
            if messages:
                flat[path] = messages
        elif isinstance(value, Mapping):
            flat.update(_flatten_errors(value, path))
    return flat


class ValidationStore(Store[ValidationState]):

    def __init__(self):
        super().__init__(ValidationState())
        self.logger = get_core_logger("validation")

    def set_validation(self, is_valid: bool, errors: Optional[Dict[str, List[str]]] = None) -> None:
        errors = {path: list(messages) for path, messages in (errors or {}).items()}
        self.logger.debug(f"Setting validation: valid={is_valid} errors={errors}")
        self._update(is_valid=is_valid, errors=errors, is_validating=False)

    def set_validating(self, is_validating: bool) -> None:
        self._update(is_validating=is_validating)

    def add_field_error(self, path: str, message: str) -> None:
        errors = {k: list(v) for k, v in self.state.errors.items()}
        errors.setdefault(path, []).append(message)
        self._update(errors=errors, is_valid=False)

    def set_field_errors(self, errors: Mapping[str, Any]) -> None:
        normalized = _flatten_errors(errors)
        self._update(errors=normalized, is_valid=not normalized)

    def clear_field_errors(self, path: str) -> None:
        errors = {k: list(v) for k, v in self.state.errors.items() if k != path}
        self._update(errors=errors, is_valid=not errors)

    def clear_all_errors(self) -> None:
        self._update(errors={}, is_valid=False)

    def reset(self) -> None:
        self._set(ValidationState())


@dataclass(frozen=True)
class FormStatus:
    is_valid: bool
    message: str
    type: str  # "success" | "warning" | "error"


@dataclass(frozen=True)
class FieldStatus:
    has_error: bool
    is_required: bool
    has_value: bool
    errors: List[str]
    metadata: Optional[FieldMetadata]


@dataclass(frozen=True)
class SubmitReadiness:
    has_required_values: bool = False
    can_submit: bool = False
    form_status: FormStatus = FormStatus(False, "Please complete the strategy form", "warning")


class ValidationAggregator(Store[SubmitReadiness]):
    """
    Derived submit-readiness.

    Recompute order: has_required_values -> can_submit -> form status.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        strategy_store: StrategyStore,
        wallet_store: WalletStore,
        validation_store: ValidationStore,
        deployment_store: DeploymentStore,
    ):
        super().__init__(SubmitReadiness())
        self.registry = registry
        self.strategy_store = strategy_store
        self.wallet_store = wallet_store
        self.validation_store = validation_store
        self.deployment_store = deployment_store
        self.logger = get_core_logger("submit_readiness")

        self._unsubscribers = [
            store.subscribe(self._on_upstream_change)
            for store in (strategy_store, wallet_store, validation_store, deployment_store)
        ]
        self.recompute()

    def _on_upstream_change(self, _state) -> None:
        self.recompute()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def required_fields(self) -> List[str]:
        strategy = self.registry.get(self.strategy_store.state.strategy_key)
        if strategy is None:
            self.logger.warning(
                f"No strategy configuration found for: {self.strategy_store.state.strategy_key}"
            )
            return list(FALLBACK_REQUIRED_FIELDS)
        required = strategy.get_required_fields()
        return required or list(FALLBACK_REQUIRED_FIELDS)

    def _compute_has_required_values(self) -> bool:
        field_values = self.strategy_store.state.field_values
        for binding in self.required_fields():
            value = field_values.get(binding)
            if not value or value.strip() == "" or value in _EMPTY_SENTINELS:
                return False
        return True

    def _compute_can_submit(self, has_required_values: bool) -> bool:
        validation = self.validation_store.state
        return (
            self.wallet_store.state.is_connected
            and self.strategy_store.state.all_tokens_selected
            and has_required_values
            and (validation.is_valid and len(validation.errors) == 0)
            and not self.deployment_store.state.is_deploying
        )

    def _compute_form_status(self, has_required_values: bool) -> FormStatus:
        strategy = self.registry.get(self.strategy_store.state.strategy_key)
        strategy_name = (strategy.name if strategy else "Strategy").lower()
        validation = self.validation_store.state
        error_count = len(validation.errors)

        if not has_required_values:
            return FormStatus(False, f"Please fill in all required {strategy_name} parameters", "warning")
        if error_count > 0:
            return FormStatus(False, f"Please fix validation errors ({error_count} errors)", "error")
        if validation.is_valid:
            return FormStatus(True, f"All {strategy_name} parameters are valid", "success")
        return FormStatus(False, f"Please complete the {strategy_name} form", "warning")

    def recompute(self) -> SubmitReadiness:
        has_required_values = self._compute_has_required_values()
        can_submit = self._compute_can_submit(has_required_values)
        form_status = self._compute_form_status(has_required_values)

        readiness = SubmitReadiness(has_required_values, can_submit, form_status)
        if readiness != self.state:
            self._set(readiness)
        return readiness

    @property
    def has_required_values(self) -> bool:
        return self.state.has_required_values

    @property
    def can_submit(self) -> bool:
        return self.state.can_submit

    @property
    def form_status(self) -> FormStatus:
        return self.state.form_status

    def field_status(self, binding: str) -> FieldStatus:
        strategy = self.registry.get(self.strategy_store.state.strategy_key)
        metadata = strategy.get_field_metadata(binding) if strategy else None
        errors = self.validation_store.state.errors.get(f"parameters.{binding}", [])
        value = self.strategy_store.state.field_values.get(binding)

        return FieldStatus(
            has_error=len(errors) > 0,
            is_required=metadata.required if metadata else True,
            has_value=bool(value and value.strip()),
            errors=list(errors),
            metadata=metadata,
        )
