# MIT License
"""Data model for the capex economics calculator.

The project is described by a single flat :class:`ProjectParameters`
record defined with [`pydantic.BaseModel`](https://pydantic-docs.helpmanual.io/).
It provides type checking at the engine boundary and JSON serialisation
for saved scenarios.

Saved records use the camelCase keys of the original browser form
(``capGeo``, ``benefitTax`` ...).  Both those aliases and the Python field
names are accepted when building a model.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


class ProjectParameters(BaseModel):
    """Inputs of one capital project.

    Monetary amounts share one unit (KRW million in the default
    scenario).  The three capex components are conventionally
    non-negative but the cashflow engine accepts any value.
    """

    model_config = ConfigDict(populate_by_name=True)

    capex_geothermal: float = Field(
        4314.0,
        alias="capGeo",
        description="Capital expenditure for the geothermal system.",
    )
    capex_indoor_unit: float = Field(
        2331.0,
        alias="capInd",
        description="Capital expenditure for indoor units.",
    )
    capex_pv: float = Field(
        0.0,
        alias="capPv",
        description="Capital expenditure for photovoltaic panels.",
    )
    tax_benefit: float = Field(
        4818.0,
        alias="benefitTax",
        description="One-time tax benefit, credited in period 0.",
    )
    energy_benefit: float = Field(
        337.0,
        alias="benefitEnergy",
        description="Annual energy saving, identical in every year 1..years.",
    )
    discount_rate_pct: float = Field(
        4.5,
        alias="discountRatePct",
        description="Discount rate in percent (4.5 means 4.5%).",
    )
    years: int = Field(
        25,
        ge=1,
        description="Project horizon in whole years.",
    )
    base_year: int = Field(
        2025,
        alias="baseYear",
        description="Calendar year of period 0, used for labels only.",
    )

    @property
    def total_capex(self) -> float:
        return self.capex_geothermal + self.capex_indoor_unit + self.capex_pv

    @property
    def discount_rate(self) -> float:
        """Discount rate as a decimal (0.045 for 4.5%)."""
        return self.discount_rate_pct / 100.0

    def to_record(self) -> dict:
        """Flat key/value record with the camelCase storage keys."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_json(cls, txt: str) -> "ProjectParameters":
        return cls.model_validate_json(txt)

    @classmethod
    def from_form(cls, raw: Mapping[str, Any]) -> "ProjectParameters":
        """Coerce raw form values into a valid parameter set.

        Any value that does not parse as a finite, non-zero number falls
        back to the field default used by the form (0 for amounts and the
        rate, 1 for years, 2025 for the base year).  ``years`` is floored
        and clamped to at least 1; ``base_year`` is floored.

        Parameters
        ----------
        raw:
            Mapping keyed by field name or storage alias.

        Returns
        -------
        ProjectParameters
            A model that always passes validation.
        """

        def pick(name: str) -> Any:
            alias = cls.model_fields[name].alias
            if name in raw:
                return raw[name]
            return raw.get(alias) if alias else None

        years = _number(pick("years"), 1.0)
        base_year = _number(pick("base_year"), 2025.0)
        return cls(
            capex_geothermal=_number(pick("capex_geothermal"), 0.0),
            capex_indoor_unit=_number(pick("capex_indoor_unit"), 0.0),
            capex_pv=_number(pick("capex_pv"), 0.0),
            tax_benefit=_number(pick("tax_benefit"), 0.0),
            energy_benefit=_number(pick("energy_benefit"), 0.0),
            discount_rate_pct=_number(pick("discount_rate_pct"), 0.0),
            years=max(1, math.floor(years)) if math.isfinite(years) else 1,
            base_year=math.floor(base_year) if math.isfinite(base_year) else 2025,
        )


def _number(value: Any, default: float) -> float:
    # zero and nan count as missing, like `Number(x) || default`
    if isinstance(value, bool):
        value = float(value)
    if isinstance(value, str):
        value = value.strip() or 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(num) or num == 0.0:
        return default
    return num


DEFAULTS = ProjectParameters()
