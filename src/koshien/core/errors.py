from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, Sequence
from uuid import uuid4

from koshien.contracts import ForensicArtifact
from koshien.core.ids import now_utc

logger = logging.getLogger(__name__)


class EngineIntegrityError(RuntimeError):
    """Fatal, non-recoverable simulation failure; the match result is discarded."""

    def __init__(self, artifact: ForensicArtifact) -> None:
        super().__init__(f"[{artifact.error_code}] {artifact.message}")
        self.artifact = artifact

    @property
    def error_code(self) -> str:
        return self.artifact.error_code


def build_forensic_artifact(
    *,
    engine_scope: str,
    error_code: str,
    message: str,
    state_snapshot: Mapping[str, Any],
    context: Mapping[str, Any],
    identifiers: Mapping[str, str],
    causal_fragment: Sequence[str] = (),
) -> ForensicArtifact:
    # Copies keep the artifact stable once the live match state moves on.
    return ForensicArtifact(
        artifact_id=str(uuid4()),
        timestamp=now_utc(),
        engine_scope=engine_scope,
        error_code=error_code,
        message=message,
        state_snapshot=dict(state_snapshot),
        context=dict(context),
        identifiers=dict(identifiers),
        causal_fragment=list(causal_fragment),
    )


def persist_forensic_artifact(artifact: ForensicArtifact, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"forensic_{artifact.error_code.lower()}_{artifact.artifact_id}.json"
    payload = json.dumps(asdict(artifact), default=str, indent=2, sort_keys=True)
    path.write_text(payload, encoding="utf-8")
    logger.warning("%s failure in %s recorded at %s", artifact.error_code, artifact.engine_scope, path)
    return path
