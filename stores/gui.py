"""Gateway instance and the configuration it exposes."""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .base import Store


@dataclass(frozen=True)
class GuiState:
    gui: Optional[Any] = None
    select_tokens: Tuple[Any, ...] = ()
    field_definitions: Tuple[Any, ...] = ()
    field_definitions_with_defaults: Tuple[Any, ...] = ()
    deposits: Tuple[Any, ...] = ()
    all_token_infos: Tuple[Any, ...] = ()
    network_key: str = ""
    is_loading: bool = False
    error: Optional[str] = None


class GuiStore(Store[GuiState]):

    def __init__(self):
        super().__init__(GuiState())

    def set_gui(self, gui: Optional[Any]) -> None:
        self._update(gui=gui)

    def set_select_tokens(self, select_tokens: List[Any]) -> None:
        self._update(select_tokens=tuple(select_tokens))

    def set_field_definitions(self, field_definitions: List[Any], with_defaults: List[Any]) -> None:
        self._update(
            field_definitions=tuple(field_definitions),
            field_definitions_with_defaults=tuple(with_defaults),
        )

    def set_deposits(self, deposits: List[Any]) -> None:
        self._update(deposits=tuple(deposits))

    def set_all_token_infos(self, token_infos: List[Any]) -> None:
        self._update(all_token_infos=tuple(token_infos))

    def set_network_key(self, network_key: str) -> None:
        self._update(network_key=network_key)

    def set_loading(self, is_loading: bool) -> None:
        self._update(is_loading=is_loading)

    def set_error(self, error: Optional[str]) -> None:
        self._update(error=error)

    def reset(self) -> None:
        self._set(GuiState())
