"""Transition request: what a caller asks of the workflow engine."""

from pydantic import BaseModel, ConfigDict, field_validator


class TransitionRequest(BaseModel):
    """A request to move an order to ``target_status_id``.

    ``comment`` and ``notify`` fall back to the target status's comment
    template and notify-customer flag when left as ``None``. ``actor_id`` is
    ``None`` for system-initiated changes.
    """

    model_config = ConfigDict(frozen=True)

    target_status_id: str
    comment: str | None = None
    notify: bool | None = None
    actor_id: str | None = None

    @field_validator("target_status_id", "actor_id", mode="before")
    @classmethod
    def _as_string(cls, value):
        return str(value) if value is not None else None
