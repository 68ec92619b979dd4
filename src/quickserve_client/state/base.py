from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any, Callable, Iterable

from ..error_mapper import error_message
from ..exceptions import ApiError
from ..http_client import Payload

logger = logging.getLogger(__name__)


def unwrap(payload: Payload) -> Any:
    """Return the ``data`` member of a ``{"data": ...}`` response envelope."""
    if isinstance(payload, dict):
        return payload.get("data")
    return None


def plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def compact(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def same_id(item: Any, entity_id: Any) -> bool:
    return isinstance(item, dict) and str(item.get("id")) == str(entity_id)


def replace_by_id(items: Iterable[Any], entity_id: Any, updated: Any) -> list[Any]:
    return [updated if same_id(item, entity_id) else item for item in items]


def remove_by_id(items: Iterable[Any], entity_id: Any) -> list[Any]:
    return [item for item in items if not same_id(item, entity_id)]


class BaseState:
    """Client-side mirror of one role's server data plus status flags.

    Subclasses declare their shape in ``initial_state``. Every action goes
    through ``_run``: raise the loading flag, call the API, merge the
    unwrapped ``data`` on success, or record ``error`` and re-raise on
    failure. Nothing is merged before the server confirms.
    """

    name = "state"
    error: str | None

    def initial_state(self) -> dict[str, Any]:
        raise NotImplementedError

    def clear_data(self) -> None:
        for key, value in self.initial_state().items():
            setattr(self, key, value)

    def clear_error(self) -> None:
        self.error = None

    def snapshot(self) -> dict[str, Any]:
        return {key: copy.deepcopy(getattr(self, key)) for key in self.initial_state()}

    def _run(
        self,
        action: str,
        call: Callable[[], Any],
        *,
        fallback: str,
        loading: str | None = "is_loading",
        apply: Callable[[Any], None] | None = None,
        envelope: bool = True,
    ) -> Any:
        if loading:
            setattr(self, loading, True)
        self.error = None
        try:
            result = call()
        except ApiError as exc:
            self.error = error_message(exc, fallback)
            logger.warning(
                "store_action_failed",
                extra={
                    "store": self.name,
                    "action": action,
                    "status_code": exc.status_code,
                    "error_message": self.error,
                },
            )
            raise
        finally:
            if loading:
                setattr(self, loading, False)
        data = unwrap(result) if envelope else result
        if apply is not None:
            apply(data)
        return data
