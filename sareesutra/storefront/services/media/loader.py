"""
Background loading of display plans keyed by product context.

A page (or a long-lived client session) may ask for a new plan while an older
request for the same context is still running, e.g. when the shopper switches
product. Every request is tagged with a generation number; a completion is
applied only if its generation is still the latest one for its context.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional

from .resolver import DisplayPlan, Lookup, ProductMedia, resolve_display

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionTicket:
    context: Hashable
    generation: int


class GenerationTracker:
    """Hands out increasing generation numbers per context."""

    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Dict[Hashable, int] = {}

    def issue(self, context: Hashable) -> ResolutionTicket:
        with self._lock:
            generation = self._latest.get(context, 0) + 1
            self._latest[context] = generation
        return ResolutionTicket(context=context, generation=generation)

    def is_current(self, ticket: ResolutionTicket) -> bool:
        with self._lock:
            return self._latest.get(ticket.context) == ticket.generation

    def invalidate(self, context: Hashable) -> None:
        with self._lock:
            self._latest[context] = self._latest.get(context, 0) + 1


class MediaPlanLoader:
    """
    Issues `resolve_display` calls on a worker pool and keeps the newest plan
    for each context.

    Stale completions (superseded by a later `request` or by `discard`) are
    dropped and never overwrite a newer plan.
    """

    def __init__(self, lookup: Lookup, executor: Optional[ThreadPoolExecutor] = None, **resolve_options: Any):
        self.lookup = lookup
        self.resolve_options = resolve_options
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="media-plan")
        self._owns_executor = executor is None
        self._tracker = GenerationTracker()
        self._plans: Dict[Hashable, DisplayPlan] = {}
        self._plans_lock = threading.Lock()

    def request(self, context: Hashable, product: ProductMedia, **options: Any) -> "Future[DisplayPlan]":
        ticket = self._tracker.issue(context)
        kwargs = {**self.resolve_options, **options}
        return self._executor.submit(self._run, ticket, product, kwargs)

    def _run(self, ticket: ResolutionTicket, product: ProductMedia, kwargs: Dict[str, Any]) -> DisplayPlan:
        try:
            plan = resolve_display(product, lookup=self.lookup, **kwargs)
        except Exception as exc:
            logger.warning("Media plan for %r failed: %s", ticket.context, exc)
            raise
        self._apply(ticket, plan)
        return plan

    def _apply(self, ticket: ResolutionTicket, plan: DisplayPlan) -> None:
        with self._plans_lock:
            if not self._tracker.is_current(ticket):
                logger.debug(
                    "Discarding stale media plan for %r (generation %s).",
                    ticket.context,
                    ticket.generation,
                )
                return
            self._plans[ticket.context] = plan

    def current_plan(self, context: Hashable) -> Optional[DisplayPlan]:
        with self._plans_lock:
            return self._plans.get(context)

    def discard(self, context: Hashable) -> None:
        """Forget ``context`` and ignore any request still in flight for it."""
        with self._plans_lock:
            self._tracker.invalidate(context)
            self._plans.pop(context, None)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
