"""Pydantic response schemas; signals keep the upstream Ecowatt field names on the wire."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.app_types import Signal, SignalSet


class SignalValueModel(BaseModel):
    """Serialized value for one hourly slot."""
    model_config = ConfigDict(populate_by_name=True)

    time_slot: int = Field(alias="pas")
    value: int = Field(alias="hvalue")


class SignalModel(BaseModel):
    """Serialized daily signal."""
    model_config = ConfigDict(populate_by_name=True)

    generated_at: datetime = Field(alias="GenerationFichier")
    day: datetime = Field(alias="jour")
    risk_level: int = Field(alias="dvalue")
    message: str
    values: list[SignalValueModel] = Field(default_factory=list)

    @classmethod
    def from_signal(cls, signal: Signal) -> "SignalModel":
        return cls(
            generated_at=signal.generated_at,
            day=signal.day,
            risk_level=signal.risk_level,
            message=signal.message,
            values=[SignalValueModel(time_slot=v.time_slot, value=v.value) for v in signal.values],
        )


def signal_set_to_models(signals: SignalSet) -> list[SignalModel]:
    """Full snapshot as a bare list, ascending by day."""
    return [SignalModel.from_signal(s) for s in signals]


class HealthResponse(BaseModel):
    status: str = "ok"
    ready: bool
