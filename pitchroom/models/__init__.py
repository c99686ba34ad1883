"""
PITCHROOM Data Models Module
Pydantic schemas for runs, revisions and scoring.
"""

from .schemas import (
    DIMENSION_NAMES,
    AgentOutput,
    BenchmarkAggregate,
    # Benchmark Models
    BenchmarkSeed,
    CalibrationReport,
    CalibrationStatus,
    DimensionAggregate,
    # Scoring Models
    DimensionScore,
    DryrunReport,
    # Enums
    GateSignal,
    MarkerVerdict,
    PatchResult,
    PatchStrategy,
    PhaseResult,
    PipelineMode,
    # Pipeline Models
    PipelineRun,
    RedFlagVerdict,
    RerunDirective,
    # Revision Models
    RewriteProposal,
    RunOptions,
    RunRecord,
    RunState,
    Scorecard,
    SeedResult,
    TurnClassification,
    TurnKind,
)

__all__ = [
    "DIMENSION_NAMES",
    "PipelineMode",
    "RunState",
    "GateSignal",
    "PatchStrategy",
    "TurnKind",
    "CalibrationStatus",
    "RunOptions",
    "AgentOutput",
    "PhaseResult",
    "PipelineRun",
    "RewriteProposal",
    "RerunDirective",
    "TurnClassification",
    "PatchResult",
    "DimensionScore",
    "Scorecard",
    "BenchmarkSeed",
    "MarkerVerdict",
    "RedFlagVerdict",
    "SeedResult",
    "DimensionAggregate",
    "BenchmarkAggregate",
    "CalibrationReport",
    "DryrunReport",
    "RunRecord",
]
