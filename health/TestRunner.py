# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from utility.logging_utils import get_class_logger


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Tests included:
      - corpus_store (store.test_connection)
      - embedding    (embedder.test_connection)
      - chat         (chat_client.healthcheck, optional)
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        *,
        store: Any,
        embedder: Any,
        chat_client: Any = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.embedder = embedder
        self.chat_client = chat_client
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def run_all(self, run_chat: bool = True) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_chat: If False, skips the (billable) chat completion check.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_chat=%s)", run_chat)

        checks: Dict[str, Callable[[], bool]] = {
            "corpus_store": self.store.test_connection,
            "embedding": self.embedder.test_connection,
        }
        if run_chat and self.chat_client is not None:
            checks["chat"] = self.chat_client.healthcheck

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                self.logger.info("Running %s check", name)
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s check raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)
