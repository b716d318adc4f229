"""Scripted sessions: a YAML list of operations run against one context."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, model_validator

from .config import WaypointConfig, load_config
from .constants import DEFAULT_CHAIN_NAME
from .facade import WorkflowFacade
from .results import OperationResult

logger = logging.getLogger(__name__)

StepOp = Literal["advance", "revert", "checkpoint", "undo", "status", "set"]


class ScriptStep(BaseModel):
    """One scripted action.

    Written in YAML either as a bare operation name (``advance``) or as a
    payload write (``{set: {name: A}}``).
    """

    op: StepOp
    values: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"op": data}
        if isinstance(data, dict) and "op" not in data and len(data) == 1:
            op, values = next(iter(data.items()))
            return {"op": op, "values": values or {}}
        return data


class SessionScript(BaseModel):
    chain: str = DEFAULT_CHAIN_NAME
    payload: Dict[str, Any] = Field(default_factory=dict)
    steps: List[ScriptStep] = Field(default_factory=list)


class StepOutcome(BaseModel):
    index: int
    op: StepOp
    result: Optional[OperationResult] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.result is None or self.result.ok


class SessionReport(BaseModel):
    context_id: str
    chain: str
    outcomes: List[StepOutcome] = Field(default_factory=list)
    final_state: str
    final_payload: Dict[str, Any] = Field(default_factory=dict)
    description: str = ""

    @property
    def failures(self) -> List[StepOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


def load_script(path: Union[str, Path]) -> SessionScript:
    """Read and validate a session script from ``path``."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return SessionScript.model_validate(data)


def run_script(
    script: SessionScript, config: Optional[WaypointConfig] = None
) -> SessionReport:
    """Execute every step of ``script`` on a fresh context.

    Failed operations are recorded in the report and do not stop the run.
    """
    config = config or load_config()
    chain = config.build_chain(script.chain)
    facade = WorkflowFacade.start(
        chain, payload=script.payload, history_depth=config.history.max_depth
    )
    logger.debug(
        f"Running {len(script.steps)} steps on chain {script.chain} for context_id={facade.context.context_id}"
    )

    outcomes: List[StepOutcome] = []
    for index, step in enumerate(script.steps, start=1):
        result: Optional[OperationResult] = None
        if step.op == "set":
            facade.update(**step.values)
        else:
            result = getattr(facade, step.op)()
        outcomes.append(
            StepOutcome(index=index, op=step.op, result=result, payload=dict(facade.payload))
        )

    return SessionReport(
        context_id=facade.context.context_id,
        chain=script.chain,
        outcomes=outcomes,
        final_state=facade.context.label,
        final_payload=dict(facade.payload),
        description=facade.describe(),
    )
