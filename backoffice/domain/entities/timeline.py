"""
Timeline Entities - Graph and search result value objects.

Models the rendered lineage tree:
- TimelineNode: one document, tagged COT / OP / OT / OG
- TimelineEdge: parent -> child link
- OrderTree: nodes + edges + root and focused node ids
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from .lineage import EntityType, NodeType


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    # stored timestamps are naive UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _number(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


@dataclass
class TimelineNode:
    """
    A document in the lineage tree.

    Attributes:
        id: Document id
        type: Node type tag
        number: Human-readable document number
        status: Current status value
        client_name: Client the lineage belongs to
        total: Monetary total, None when unpriced (always None for work orders)
        detail_path: Link to the document's detail page
        created_at: Creation timestamp
        ended_at: Closing timestamp, only set on terminal work orders
    """

    id: str
    type: NodeType
    number: str
    status: str
    client_name: str
    total: Optional[Decimal]
    detail_path: str
    created_at: datetime
    ended_at: Optional[datetime] = None
    created_by_name: Optional[str] = None
    commercial_channel_name: Optional[str] = None
    pending_balance: Optional[Decimal] = None
    advisor_name: Optional[str] = None
    designer_name: Optional[str] = None
    authorized_to_name: Optional[str] = None
    responsible_name: Optional[str] = None

    # Optional fields each node type exposes
    TYPE_FIELDS = {
        NodeType.QUOTE: ('created_by_name', 'commercial_channel_name'),
        NodeType.ORDER: ('created_by_name', 'pending_balance'),
        NodeType.WORK_ORDER: ('advisor_name', 'designer_name'),
        NodeType.EXPENSE_ORDER: ('authorized_to_name', 'responsible_name'),
    }

    def to_dict(self) -> Dict:
        """Serialize with only the optional fields that apply to this node type."""
        data = {
            'id': self.id,
            'type': self.type.value,
            'number': self.number,
            'status': self.status,
            'client_name': self.client_name,
            'total': _number(self.total),
            'detail_path': self.detail_path,
            'created_at': _iso(self.created_at),
            'ended_at': _iso(self.ended_at),
        }
        for name in self.TYPE_FIELDS[self.type]:
            value = getattr(self, name)
            data[name] = _number(value) if isinstance(value, Decimal) else value
        return data


@dataclass(frozen=True)
class TimelineEdge:
    """Directed parent -> child link."""
    source: str
    target: str

    def to_dict(self) -> Dict:
        return {'source': self.source, 'target': self.target}


@dataclass
class OrderTree:
    """Lineage tree with the root document and the node the caller asked about."""
    nodes: List[TimelineNode]
    edges: List[TimelineEdge]
    root_id: str
    focused_id: str

    def node(self, node_id: str) -> Optional[TimelineNode]:
        """Get a node by document id."""
        return next((n for n in self.nodes if n.id == node_id), None)

    def nodes_of_type(self, node_type: NodeType) -> List[TimelineNode]:
        return [n for n in self.nodes if n.type == node_type]

    def to_dict(self) -> Dict:
        return {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
            'root_id': self.root_id,
            'focused_id': self.focused_id,
        }


@dataclass
class SearchRow:
    """A search hit, tagged so the caller can request its lineage."""
    id: str
    type: NodeType
    number: str
    status: str
    client_name: str
    entity_type: EntityType

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'type': self.type.value,
            'number': self.number,
            'status': self.status,
            'client_name': self.client_name,
            'entity_type': self.entity_type.value,
        }


@dataclass
class SearchResults:
    """Search hits grouped by document type."""
    quotes: List[SearchRow] = field(default_factory=list)
    orders: List[SearchRow] = field(default_factory=list)
    work_orders: List[SearchRow] = field(default_factory=list)
    expense_orders: List[SearchRow] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'quotes': [r.to_dict() for r in self.quotes],
            'orders': [r.to_dict() for r in self.orders],
            'work_orders': [r.to_dict() for r in self.work_orders],
            'expense_orders': [r.to_dict() for r in self.expense_orders],
        }
