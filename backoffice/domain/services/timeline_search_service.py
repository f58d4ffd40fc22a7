"""
Timeline Search Service - Free-text search across the four document types.

Runs one query per document type concurrently, each on its own session, and
joins all four before answering. A failure in any query fails the search.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from backoffice.config import get_config
from backoffice.domain.entities import EntityType, SearchResults, SearchRow
from backoffice.domain.exceptions import InvalidSearchLimitError
from backoffice.infrastructure.repositories import (
    QuoteRepository,
    OrderRepository,
    WorkOrderRepository,
    ExpenseOrderRepository,
)

logger = logging.getLogger(__name__)


class TimelineSearchService:
    """
    Service for the lineage search dialog.

    Sessions are not shared between threads: every per-type query opens its
    own session from the factory.
    """

    def __init__(self, session_factory: Callable[[], Session], max_workers: Optional[int] = None):
        self.session_factory = session_factory
        self.max_workers = max_workers or get_config().search_max_workers

    def search(self, term: str, limit: Optional[int] = None) -> SearchResults:
        """
        Search quotes, orders, work orders and expense orders.

        Args:
            term: Case-insensitive text matched against document number and client name
            limit: Maximum rows per document type

        Returns:
            SearchResults grouped by document type, newest first

        Raises:
            InvalidSearchLimitError: If limit is below 1
        """
        if limit is None:
            limit = get_config().search_default_limit
        if limit < 1:
            raise InvalidSearchLimitError(limit)
        term = term or ""

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                'quotes': pool.submit(self._run, self._search_quotes, term, limit),
                'orders': pool.submit(self._run, self._search_orders, term, limit),
                'work_orders': pool.submit(self._run, self._search_work_orders, term, limit),
                'expense_orders': pool.submit(self._run, self._search_expense_orders, term, limit),
            }
            groups = {}
            for group, future in futures.items():
                try:
                    groups[group] = future.result()
                except Exception:
                    logger.error(f"Search for '{term}' failed on {group}", exc_info=True)
                    raise

        results = SearchResults(**groups)
        logger.debug(
            f"Search '{term}' (limit {limit}): {len(results.quotes)} quotes, "
            f"{len(results.orders)} orders, {len(results.work_orders)} work orders, "
            f"{len(results.expense_orders)} expense orders"
        )
        return results

    def _run(self, query: Callable[[Session, str, int], List[SearchRow]], term: str, limit: int) -> List[SearchRow]:
        with self.session_factory() as session:
            return query(session, term, limit)

    # =========================================================================
    # Per-type queries
    # =========================================================================

    @staticmethod
    def _search_quotes(session: Session, term: str, limit: int) -> List[SearchRow]:
        return [
            SearchRow(
                id=q.id,
                type=EntityType.QUOTE.node_type,
                number=q.quote_number,
                status=q.status,
                client_name=q.client.name,
                entity_type=EntityType.QUOTE,
            )
            for q in QuoteRepository(session).search(term, limit)
        ]

    @staticmethod
    def _search_orders(session: Session, term: str, limit: int) -> List[SearchRow]:
        return [
            SearchRow(
                id=o.id,
                type=EntityType.ORDER.node_type,
                number=o.order_number,
                status=o.status,
                client_name=o.client.name,
                entity_type=EntityType.ORDER,
            )
            for o in OrderRepository(session).search(term, limit)
        ]

    @staticmethod
    def _search_work_orders(session: Session, term: str, limit: int) -> List[SearchRow]:
        return [
            SearchRow(
                id=wo.id,
                type=EntityType.WORK_ORDER.node_type,
                number=wo.work_order_number,
                status=wo.status,
                client_name=wo.order.client.name,
                entity_type=EntityType.WORK_ORDER,
            )
            for wo in WorkOrderRepository(session).search(term, limit)
        ]

    @staticmethod
    def _search_expense_orders(session: Session, term: str, limit: int) -> List[SearchRow]:
        placeholder = get_config().orphan_client_label
        rows = []
        for eo in ExpenseOrderRepository(session).search(term, limit):
            work_order = eo.work_order
            client = work_order.order.client if work_order is not None else None
            rows.append(SearchRow(
                id=eo.id,
                type=EntityType.EXPENSE_ORDER.node_type,
                number=eo.og_number,
                status=eo.status,
                client_name=client.name if client is not None else placeholder,
                entity_type=EntityType.EXPENSE_ORDER,
            ))
        return rows
