"""
Engine configuration.

Settings come from an optional YAML file and are then overridden by
environment variables. Invalid values raise at load time: a misconfigured
deployment should fail fast rather than assess data with the wrong rules.
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from ingest_engine.core.dedup import DEFAULT_FUZZY_THRESHOLD, DuplicateDetector, SimilarityWeights
from ingest_engine.core.models import ValidationRule
from ingest_engine.core.rules import RuleConfigLoader, default_rules
from ingest_engine.core.scoring import QualityPenalties, QualityScorer
from ingest_engine.core.standardization import StandardizationTables, Standardizer
from ingest_engine.quality.assessment import DEFAULT_TOP_ISSUES, QualityAssessor
from ingest_engine.sync import DEFAULT_SYNC_TIMEOUT_SECONDS, SyncCoordinator
from ingest_engine.sync.metrics_store import DEFAULT_CAPACITY

CONFIG_PATH_ENV = "INGEST_ENGINE_CONFIG"

# environment variable -> settings field
ENV_OVERRIDES = {
    "INGEST_FUZZY_THRESHOLD": "fuzzy_threshold",
    "INGEST_SYNC_TIMEOUT": "sync_timeout_seconds",
    "INGEST_METRICS_CAPACITY": "metrics_capacity",
    "INGEST_TOP_ISSUES_LIMIT": "top_issues_limit",
    "INGEST_RULES_PATH": "rules_path",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
}


class EngineSettings(BaseModel):
    """
    Tunables of the quality engine and sync coordinator.

    Attributes:
        fuzzy_threshold: Fuzzy duplicate threshold (strictly exceeded to match)
        similarity_weights: Per-field duplicate similarity weights
        penalties: Quality score penalty constants
        top_issues_limit: Number of common issues reported per batch
        sync_timeout_seconds: Limit on one fetch; None disables it
        metrics_capacity: Number of sources whose sync metrics are retained
        standardization: Country and category alias tables
        rules_path: YAML rule file; the default rule set is used when unset
        log_level: Logging level name
        log_format: "json" or "text"
    """

    fuzzy_threshold: float = Field(DEFAULT_FUZZY_THRESHOLD, ge=0.0, le=1.0)
    similarity_weights: SimilarityWeights = Field(default_factory=SimilarityWeights)
    penalties: QualityPenalties = Field(default_factory=QualityPenalties)
    top_issues_limit: int = Field(DEFAULT_TOP_ISSUES, ge=1, le=1000)
    sync_timeout_seconds: float | None = Field(DEFAULT_SYNC_TIMEOUT_SECONDS, gt=0)
    metrics_capacity: int = Field(DEFAULT_CAPACITY, ge=1)
    standardization: StandardizationTables = Field(default_factory=StandardizationTables)
    rules_path: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    def load_rules(self) -> list[ValidationRule]:
        if self.rules_path:
            return RuleConfigLoader(self.rules_path).load_rules()
        return default_rules()


def load_settings(path: str | Path | None = None, environ: dict[str, str] | None = None) -> EngineSettings:
    """
    Load settings from YAML (if any) and apply environment overrides.

    Args:
        path: YAML file; falls back to $INGEST_ENGINE_CONFIG when omitted
        environ: Environment mapping (os.environ when omitted)

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If the file or an override holds an invalid value
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get(CONFIG_PATH_ENV)

    raw: dict[str, Any] = {}
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Engine configuration file not found: {path}")
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError("Engine configuration must be a mapping")
        raw.update(loaded)

    tables = raw.get("standardization")
    if isinstance(tables, dict):
        raw["standardization"] = StandardizationTables().merged(
            countries=tables.get("countries"),
            categories=tables.get("categories"),
        )

    for env_name, field in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        if field == "sync_timeout_seconds" and value.lower() in ("none", "off", "0"):
            raw[field] = None
        elif field in ("log_level",):
            raw[field] = value.upper()
        else:
            raw[field] = value

    return EngineSettings(**raw)


def build_assessor(settings: EngineSettings, rules: list[ValidationRule] | None = None) -> QualityAssessor:
    """Quality assessor wired from settings."""
    rules = rules if rules is not None else settings.load_rules()
    return QualityAssessor(
        rules=rules,
        detector=DuplicateDetector(settings.fuzzy_threshold, settings.similarity_weights),
        scorer=QualityScorer(rules, settings.penalties),
        top_issues_limit=settings.top_issues_limit,
    )


def build_standardizer(settings: EngineSettings) -> Standardizer:
    return Standardizer(settings.standardization)


def build_coordinator(settings: EngineSettings, strategies=None, assessor: QualityAssessor | None = None) -> SyncCoordinator:
    """Sync coordinator wired from settings."""
    return SyncCoordinator(
        strategies=strategies,
        timeout_seconds=settings.sync_timeout_seconds,
        metrics_capacity=settings.metrics_capacity,
        assessor=assessor,
        standardizer=build_standardizer(settings),
    )
