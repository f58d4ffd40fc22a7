"""
Quote Repository - Data access layer for quotes (COT).
"""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, contains_eager

from backoffice.models import Quote, Client
from .base_repository import BaseRepository, contains_pattern, LIKE_ESCAPE


class QuoteRepository(BaseRepository[Quote]):
    """Repository for quotes, the optional root of a lineage."""

    def __init__(self, session: Session):
        super().__init__(session, Quote)

    def get_with_details(self, quote_id: str) -> Optional[Quote]:
        """
        Get a quote with client, creator and commercial channel loaded.

        Args:
            quote_id: Quote identifier

        Returns:
            Quote if found, None otherwise
        """
        return self.session.query(Quote).options(
            joinedload(Quote.client),
            joinedload(Quote.created_by),
            joinedload(Quote.commercial_channel),
        ).filter(Quote.id == quote_id).first()

    def search(self, term: str, limit: int) -> List[Quote]:
        pattern = contains_pattern(term)
        return self.session.query(Quote).join(Quote.client).options(
            contains_eager(Quote.client)
        ).filter(
            or_(
                Quote.quote_number.ilike(pattern, escape=LIKE_ESCAPE),
                Client.name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        ).order_by(Quote.created_at.desc()).limit(limit).all()
