"""
Shared fixtures: deterministic clock, scripted reasoner, analysis builders
"""

import os
import sys
import asyncio
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep test log files out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix = "contract_engine_logs_"))

from services.data_models import RiskLevel
from services.data_models import ClauseAnalysis
from services.data_models import DocumentAnalysis
from services.data_models import RiskDistribution
from model_manager.request_scheduler import RequestScheduler


class FakeClock:
    """Virtual monotonic clock; sleeping advances time instantly"""

    def __init__(self):
        self.now    = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += max(0.0, seconds)
        await asyncio.sleep(0)


class FakeReasoner:
    """Scripted stand-in for the external reasoner"""

    def __init__(self, responses=None, error=None, handler=None):
        self.responses = responses or {}
        self.error     = error
        self.handler   = handler
        self.calls     = []

    async def reason(self, prompt_kind, payload):
        self.calls.append((prompt_kind, dict(payload)))

        if self.handler is not None:
            return self.handler(prompt_kind, payload)

        if self.error is not None:
            raise self.error

        return self.responses.get(prompt_kind, "")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_scheduler(clock):
    """Build schedulers driven by the fake clock"""

    def _make(max_requests=12, window_seconds=60.0, min_interval_seconds=1.0, max_retries=2, retry_base_delay=0.5):
        return RequestScheduler(max_requests=max_requests,
                                window_seconds=window_seconds,
                                min_interval_seconds=min_interval_seconds,
                                max_retries=max_retries,
                                retry_base_delay=retry_base_delay,
                                clock=clock,
                                sleep=clock.sleep)

    return _make


def make_clause(text, risk=RiskLevel.LOW, explanation="explanation", keywords=None, important_terms=None, page=1):
    """Build a fused clause analysis with both signals at the same level"""
    return ClauseAnalysis(page=page,
                          clause_text=text,
                          explanation=explanation,
                          risk_from_rules=risk,
                          risk_from_external=risk,
                          final_risk=risk,
                          reason="reason",
                          keywords=list(keywords or []),
                          important_terms=list(important_terms or []))


def make_document(clauses, document_type="rental_agreement"):
    """Build a DocumentAnalysis around ready-made clauses"""
    distribution = RiskDistribution.from_clauses(clauses)

    return DocumentAnalysis(clauses=list(clauses),
                            glossary=[],
                            risk_distribution=distribution,
                            overall_risk=distribution.overall_risk(),
                            key_findings=[],
                            recommendations=[],
                            document_type=document_type)
