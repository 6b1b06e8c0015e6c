# funnel_roi/services/scenarios.py
from __future__ import annotations
import logging
from typing import Iterator, List, Optional

import pandas as pd

from funnel_roi.models.io import FunnelInputs, FunnelTemplate, Metrics, ProjectionOptions, Scenario, ValidationResult
from funnel_roi.engine import project, validate, apply_edit, resolve_template
from funnel_roi.services.diagnosis import acquisition_ceiling

log = logging.getLogger("funnel.scenarios")

class ScenarioBook:
    """
    Ordered list of independent named scenarios.
    Every edit replaces the scenario's Inputs wholesale and recomputes its
    Metrics; an edit that fails validation keeps the last good Metrics and
    records the errors on the scenario.
    """

    def __init__(self,
                 template: Optional[FunnelTemplate] = None,
                 options: Optional[ProjectionOptions] = None):
        self.options = options or ProjectionOptions()
        self.template = resolve_template(template or self.options.template)
        self._items: List[Scenario] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Scenario]:
        return iter(list(self._items))

    def get(self, index: int) -> Scenario:
        return self._items[index]

    def _compute(self, name: str, inputs: FunnelInputs, last: Optional[Metrics] = None) -> Scenario:
        errors = validate(inputs)
        if not errors.ok:
            log.warning("Scenario %r has invalid inputs: %s", name, [e.alias for e in errors.errors])
            return Scenario(name=name, inputs=inputs, metrics=last, errors=errors)
        metrics = project(inputs, self.options, self.template)
        return Scenario(name=name, inputs=inputs, metrics=metrics, errors=ValidationResult())

    def add(self, name: Optional[str] = None, inputs: Optional[FunnelInputs] = None) -> Scenario:
        base = inputs or self.template.defaults
        base = base.model_copy(update={
            "client_spend": min(acquisition_ceiling(base.avg_lifetime_value), base.client_spend)
        })
        sc = self._compute(name or f"Scenario {len(self._items) + 1}", base)
        self._items.append(sc)
        log.info("Added %s (%d total)", sc.name, len(self._items))
        return sc

    def edit(self, index: int, field: str, value: float) -> Scenario:
        cur = self._items[index]
        sc = self._compute(cur.name, apply_edit(cur.inputs, field, value), last=cur.metrics)
        self._items[index] = sc
        return sc

    def replace_inputs(self, index: int, inputs: FunnelInputs) -> Scenario:
        cur = self._items[index]
        sc = self._compute(cur.name, inputs, last=cur.metrics)
        self._items[index] = sc
        return sc

    def reset(self, index: int) -> Scenario:
        cur = self._items[index]
        d = self.template.defaults
        base = d.model_copy(update={"client_spend": acquisition_ceiling(d.avg_lifetime_value)})
        sc = self._compute(cur.name, base)
        self._items[index] = sc
        log.info("Reset %s to %s defaults", sc.name, self.template.name)
        return sc

    def rename(self, index: int, name: str) -> Scenario:
        sc = self._items[index].model_copy(update={"name": name})
        self._items[index] = sc
        return sc

    def remove(self, index: int) -> Scenario:
        sc = self._items.pop(index)
        log.info("Removed %s (%d left)", sc.name, len(self._items))
        return sc

    def to_frame(self) -> pd.DataFrame:
        """One row per scenario (by name) with every Metrics field, for side-by-side comparison."""
        rows = []
        for sc in self._items:
            row = {"scenario": sc.name, "valid": sc.errors.ok}
            if sc.metrics is not None:
                row.update(sc.metrics.model_dump())
            rows.append(row)
        df = pd.DataFrame(rows)
        if df.empty:
            return df
        return df.set_index("scenario")
