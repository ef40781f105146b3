# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-10-19
# Description: IQHealthService.py
# -----------------------------------------------------------------------------
import logging

from api.schemas.health import DeepHealthResponse, SmokeTestSummary
from health.TestRunner import TestRunner
from utility.logging_utils import get_class_logger


class IQHealthService:
    """
    Deep health for the matcher: can we read the corpus, embed a query and,
    when asked, reach the canonicalisation chat model?

    Any failing dependency turns the status to "error"; `failing` names them
    so an operator knows whether searches or batch runs are the ones at risk.
    """

    def __init__(self, *, test_runner: TestRunner, logger: logging.Logger | None = None) -> None:
        self.test_runner = test_runner
        self.logger = logger or get_class_logger(self.__class__)

    def deep_health(self, run_chat: bool = True) -> DeepHealthResponse:
        results = self.test_runner.run_all(run_chat=run_chat)
        failing = sorted(name for name, ok in results.items() if not ok)
        passed = len(results) - len(failing)

        if failing:
            self.logger.warning("Matcher dependencies failing: %s", failing)

        return DeepHealthResponse(
            status="error" if failing else "ok",
            results=results,
            failing=failing,
            chat_checked="chat" in results,
            summary=SmokeTestSummary(total=len(results), passed=passed, failed=len(failing)),
        )
