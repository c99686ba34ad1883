"""
Pydantic data models for PITCHROOM.
Runs, agent outputs, revision proposals, scorecards and benchmark reports.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class PipelineMode(str, Enum):
    """Which phase list the sequencer runs."""
    GENERATION = "generation"  # Seed idea -> full pitch deck
    ASSESSMENT = "assessment"  # Existing script -> critique and optimisation


class RunState(str, Enum):
    """Pipeline run lifecycle state."""
    RUNNING = "running"
    COMPLETED = "completed"
    GATED_REJECTED = "gated_rejected"
    FAILED = "failed"


class GateSignal(str, Enum):
    """Hard-stop signal parsed from an agent output."""
    NONE = "none"
    PREMISE_IMPOSSIBILITY = "premise_impossibility"
    ETHICS_OF_METHOD = "ethics_of_method"
    GENERAL_HALT = "general_halt"


class PatchStrategy(str, Enum):
    """Patch tier that produced the new document, best first."""
    EXACT = "exact"
    SECTION_ANCHOR = "section_anchor"
    APPEND = "append"


class TurnKind(str, Enum):
    """Conversational turn families."""
    ANSWER = "answer"
    REWRITE = "rewrite"
    RERUN = "rerun"


class CalibrationStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


# Fixed rubric, in report order.
DIMENSION_NAMES: Tuple[str, ...] = (
    "Narrative Structure",
    "Scientific Rigor",
    "Market Viability",
    "Production Feasibility",
    "Originality",
    "Presentation Quality",
    "Platform Compliance",
    "Narrative Mandate Compliance",
)


# ============================================================================
# Pipeline Models
# ============================================================================

class RunOptions(BaseModel):
    """Optional per-run notes appended to every agent context."""
    platform: Optional[str] = Field(
        default=None,
        description="Target broadcaster or streamer, e.g. 'Netflix'",
    )
    delivery_year: Optional[int] = Field(
        default=None,
        ge=2000,
        le=2100,
        description="Target delivery year for market positioning",
    )
    genre: Optional[str] = Field(
        default=None,
        description="Genre key or free-text genre every role must hold to",
    )
    max_revisions: int = Field(
        default=0,
        ge=0,
        le=5,
        description="Extra re-draft rounds while the Commissioning Editor scores below greenlight",
    )


class AgentOutput(BaseModel):
    """Raw text produced by one agent slot."""
    role_id: str
    role_name: str
    phase_ordinal: int
    text: str
    gate: GateSignal = GateSignal.NONE
    duration_ms: int = 0


class PhaseResult(BaseModel):
    """Outputs produced within one phase, in slot order."""
    ordinal: int
    name: str
    outputs: List[AgentOutput] = Field(default_factory=list)


class PipelineRun(BaseModel):
    """One submission through the phase sequencer."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    input: str
    mode: PipelineMode = PipelineMode.GENERATION
    directive: Optional[str] = None
    options: RunOptions = Field(default_factory=RunOptions)
    phases: List[PhaseResult] = Field(default_factory=list)
    state: RunState = RunState.RUNNING
    final_document: str = ""
    rejected_by: Optional[str] = Field(default=None, description="Role id that issued a gate rejection")
    gate: GateSignal = GateSignal.NONE
    error: Optional[str] = None
    started_at: datetime = Field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None

    @property
    def outputs(self) -> List[AgentOutput]:
        """All agent outputs in execution order."""
        return [output for phase in self.phases for output in phase.outputs]

    @property
    def is_rejected(self) -> bool:
        return self.state == RunState.GATED_REJECTED


# ============================================================================
# Revision Models
# ============================================================================

class RewriteProposal(BaseModel):
    """A localised edit suggested by the refinement consultant."""
    section: str = ""
    original: str
    revised: str
    rationale: str = ""


class RerunDirective(BaseModel):
    """Free-text creative override for a full pipeline re-run."""
    directive: str


class TurnClassification(BaseModel):
    """Result of scanning a consultant reply for structural tags."""
    kind: TurnKind
    commentary: str = ""
    proposals: List[RewriteProposal] = Field(default_factory=list)
    directive: Optional[RerunDirective] = None


class PatchResult(BaseModel):
    """Document produced by a patch and the tier that produced it."""
    document: str
    strategy: PatchStrategy

    @property
    def degraded(self) -> bool:
        return self.strategy != PatchStrategy.EXACT


# ============================================================================
# Scoring Models
# ============================================================================

class DimensionScore(BaseModel):
    name: str
    score: Optional[int] = Field(default=None, ge=1, le=100)
    rationale: str = ""


class Scorecard(BaseModel):
    """Eight-dimension rubric result for one document."""
    dimensions: List[DimensionScore]
    overall: Optional[int] = Field(default=None, ge=1, le=100)
    summary: str = ""
    recommendations: List[str] = Field(default_factory=list)
    rejected: bool = False
    rejection_type: Optional[str] = None

    @model_validator(mode="after")
    def _check_rubric(self) -> "Scorecard":
        names = tuple(d.name for d in self.dimensions)
        if names != DIMENSION_NAMES:
            raise ValueError(
                f"Scorecard must contain exactly the dimensions {list(DIMENSION_NAMES)}, got {list(names)}"
            )
        values = [d.score for d in self.dimensions] + [self.overall]
        nulls = sum(1 for v in values if v is None)
        if nulls not in (0, len(values)):
            raise ValueError("Scorecard scores must be all set or all null")
        return self

    @property
    def is_null(self) -> bool:
        return self.overall is None

    def dimension(self, name: str) -> Optional[DimensionScore]:
        for dim in self.dimensions:
            if dim.name == name:
                return dim
        return None


# ============================================================================
# Benchmark Models
# ============================================================================

class BenchmarkSeed(BaseModel):
    """A seed idea run through the pipeline during a dryrun."""
    id: str
    name: str
    seed: str
    platform: Optional[str] = None
    is_calibration: bool = False
    expected_range: Optional[Tuple[int, int]] = None
    markers: Dict[str, bool] = Field(
        default_factory=dict,
        description="Ground-truth gold standard marker values for calibration seeds",
    )
    year: Optional[int] = None


class MarkerVerdict(BaseModel):
    """Gold standard marker check result; passed is None when unchecked."""
    id: str
    label: str
    passed: Optional[bool] = None
    note: str = ""
    expected: Optional[bool] = None
    agrees: Optional[bool] = None


class RedFlagVerdict(BaseModel):
    """Red flag check result; triggered is None when unchecked."""
    id: str
    label: str
    triggered: Optional[bool] = None
    note: str = ""


class SeedResult(BaseModel):
    """Outcome of one benchmark seed."""
    seed: BenchmarkSeed
    status: str  # done | rejected | failed
    final_document: str = ""
    scorecard: Optional[Scorecard] = None
    gate: GateSignal = GateSignal.NONE
    error: Optional[str] = None
    markers: List[MarkerVerdict] = Field(default_factory=list)
    red_flags: List[RedFlagVerdict] = Field(default_factory=list)
    duration_ms: int = 0


class DimensionAggregate(BaseModel):
    name: str
    avg: Optional[float] = None
    min: Optional[int] = None
    max: Optional[int] = None


class BenchmarkAggregate(BaseModel):
    """Statistics across non-calibration seeds."""
    overall: Optional[float] = None
    dimensions: List[DimensionAggregate] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    total: int = 0
    scored: int = 0
    rejected: int = 0
    failed: int = 0


class CalibrationReport(BaseModel):
    """Drift check of the calibration seed against its expected range."""
    seed_id: str
    seed_name: str
    observed: Optional[int] = None
    expected_range: Tuple[int, int]
    status: CalibrationStatus
    delta: Optional[int] = None
    markers: List[MarkerVerdict] = Field(default_factory=list)
    red_flags: List[RedFlagVerdict] = Field(default_factory=list)
    agreements: int = 0
    disagreements: int = 0
    red_flags_triggered: int = 0
    red_flags_total: int = 0


class DryrunReport(BaseModel):
    results: List[SeedResult] = Field(default_factory=list)
    aggregate: BenchmarkAggregate = Field(default_factory=BenchmarkAggregate)
    calibration: Optional[CalibrationReport] = None


# ============================================================================
# Persistence Models
# ============================================================================

class RunRecord(BaseModel):
    """Persisted result of a successful run."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    seed_input: str
    final_document: str
    mode: PipelineMode = PipelineMode.GENERATION
    timestamp: datetime = Field(default_factory=datetime.utcnow)
