"""k1s0 flag_engine library."""

from .client import FeatureFlagClientProtocol
from .config import EngineConfig, LogSection, load_config
from .evaluator import Evaluator
from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .factory import create_evaluator
from .hashing import bucket_for, stable_hash, string_hash
from .loader import load_flags
from .logger import new_logger
from .merger import deep_merge
from .models import (
    Environment,
    EvaluationContext,
    EvaluationReason,
    EvaluationResult,
    FlagConditions,
    FlagDefinition,
)
from .presets import beta_flags, development_flags, flags_for_environment, production_flags
from .registry import FlagRegistry
from .schema import FlagDefinitionModel, parse_flags
from .version import compare_versions, parse_version

__all__ = [
    "Environment",
    "EvaluationContext",
    "EvaluationReason",
    "EvaluationResult",
    "FlagConditions",
    "FlagDefinition",
    "FlagRegistry",
    "Evaluator",
    "FeatureFlagClientProtocol",
    "FeatureFlagError",
    "FeatureFlagErrorCodes",
    "FlagDefinitionModel",
    "parse_flags",
    "load_flags",
    "EngineConfig",
    "LogSection",
    "load_config",
    "create_evaluator",
    "new_logger",
    "deep_merge",
    "string_hash",
    "stable_hash",
    "bucket_for",
    "parse_version",
    "compare_versions",
    "beta_flags",
    "development_flags",
    "production_flags",
    "flags_for_environment",
]
