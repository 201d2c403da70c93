from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from teleinfo_exporter.teleinfo import MeasurementRecord


class SampleResponse(BaseModel):
    """Decoded Teleinfo frame returned by the sample endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    index_kwh: int = Field(..., alias="indexKwh")
    intensity_instant_amp: int = Field(..., alias="intensityInstantAmp")
    intensity_max_amp: int = Field(..., alias="intensityMaxAmp")
    intensity_subscribed_amp: int = Field(..., alias="intensitySubscribedAmp")
    power_apparent_va: int = Field(..., alias="powerApparentVa")
    collection_time_seconds: float = Field(..., alias="collectionTimeSeconds")

    @classmethod
    def from_record(cls, record: MeasurementRecord) -> "SampleResponse":
        return cls(
            index_kwh=record.index,
            intensity_instant_amp=record.intensity_instant,
            intensity_max_amp=record.intensity_max,
            intensity_subscribed_amp=record.intensity_subscribed,
            power_apparent_va=record.power_apparent,
            collection_time_seconds=record.collection_time.total_seconds(),
        )


class SampleError(BaseModel):
    stage: str
    error: str
