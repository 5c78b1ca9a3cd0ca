"""Models for the MBO hardware failure export produced by the Manta job.

The export maps device serial -> component key -> first failure / first pass
pair. ``RawReportAdapter`` validates the whole blob in one call.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, TypeAdapter, field_validator

from conch_shell.models.common import ConchBase, as_utc, is_zero_time
from conch_shell.models.device import ValidationReport


class ComponentFailReport(ConchBase):
    """One validation result, trimmed down for the report."""

    device_id: str = ""
    created: datetime | None = None
    result: ValidationReport = Field(
        default_factory=ValidationReport,
        alias="validation_result",
    )

    @field_validator("created", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @field_validator("result", mode="before")
    @classmethod
    def _null_result(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def has_timestamp(self) -> bool:
        return not is_zero_time(self.created)


class ComponentFail(ConchBase):
    """The first time a validation failed and the first time it passed again."""

    first_fail: ComponentFailReport = Field(default_factory=ComponentFailReport)
    first_pass: ComponentFailReport = Field(default_factory=ComponentFailReport)

    @field_validator("first_fail", "first_pass", mode="before")
    @classmethod
    def _null_side(cls, value: Any) -> Any:
        return {} if value is None else value


RawReport = dict[str, dict[str, ComponentFail]]

RawReportAdapter: TypeAdapter[RawReport] = TypeAdapter(RawReport)
