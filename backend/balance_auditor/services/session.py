"""Presentation-layer query state: busy indicator, latest outcome, generations."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from balance_auditor.models import QueryOutcome, QueryStatus, SessionState
from balance_auditor.services.normalizer import ProviderSource, run_query
from balance_auditor.utils.addresses import AddressValidationError, validate_wallet_address

LOGGER = logging.getLogger(__name__)


class QuerySession:
    """Runs balance queries and keeps the state a front end renders.

    Each query that passes validation takes a new generation number. Only the
    query holding the latest generation may publish its outcome or clear the
    busy flag; results of superseded queries are returned to their caller and
    otherwise dropped.
    """

    def __init__(self, provider: ProviderSource, max_workers: Optional[int] = None) -> None:
        self._provider = provider
        self._max_workers = max_workers
        self._lock = threading.Lock()
        self._generation = 0
        self._busy = False
        self._outcome: Optional[QueryOutcome] = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._busy

    def snapshot(self) -> SessionState:
        with self._lock:
            return SessionState(
                busy=self._busy,
                generation=self._generation,
                outcome=self._outcome,
            )

    def run(self, address: str) -> QueryOutcome:
        """Validate, fetch and publish the outcome for ``address``."""
        try:
            validate_wallet_address(address)
        except AddressValidationError as exc:
            outcome = QueryOutcome(status=QueryStatus.VALIDATION_ERROR, message=str(exc))
            with self._lock:
                self._outcome = outcome
            return outcome

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._busy = True
            self._outcome = None

        LOGGER.info("Starting balance query %d for %s", generation, address.strip())
        outcome: Optional[QueryOutcome] = None
        try:
            outcome = run_query(address, self._provider, max_workers=self._max_workers)
        finally:
            with self._lock:
                if generation == self._generation:
                    self._busy = False
                    self._outcome = outcome
                else:
                    LOGGER.info(
                        "Discarding result of superseded query %d (current is %d)",
                        generation,
                        self._generation,
                    )

        return outcome


__all__ = ["QuerySession"]
