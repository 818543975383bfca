"""
Donation and supporter tables, kept in step with the server.

Every refresh refetches the whole collection and rebuilds the view. Refreshes
of the same table may overlap; each one takes a generation number and only
the newest is allowed to write its result into the view.
"""
import datetime
import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .api_client import ResourceClient, ResourceKind
from .consistency import ConsistencyManager
from .errors import FetchError, is_connectivity_failure
from .schemas import Donation, SupporterView

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading…"
LOAD_ERROR_TEXT = "Failed to load data ❌"
CONNECTION_ERROR_TEXT = "Error connecting to backend ❌"
UNAVAILABLE_TEXT = "data unavailable"
EMPTY_TEXT = {
    ResourceKind.DONATIONS: "No donations yet",
    ResourceKind.SUPPORTERS: "No supporters yet",
}


class TableState(enum.Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    # no response from the backend at all
    OFFLINE = "offline"
    READY = "ready"


@dataclass
class Row:
    record_id: int
    cells: Tuple[str, ...]
    resolved: bool = True


@dataclass
class TableView:
    kind: ResourceKind
    state: TableState = TableState.LOADING
    placeholder: Optional[str] = LOADING_TEXT
    rows: List[Row] = field(default_factory=list)

    def show_placeholder(self, state: TableState, text: str) -> None:
        self.state = state
        self.placeholder = text
        self.rows = []

    def show_rows(self, rows: List[Row]) -> None:
        self.state = TableState.READY
        self.placeholder = None
        self.rows = list(rows)

    def find_row(self, record_id: int) -> Optional[Row]:
        for row in self.rows:
            if row.record_id == record_id:
                return row
        return None


def pretty_date(value: datetime.datetime) -> str:
    """05 Mar 2025"""
    return value.strftime("%d %b %Y")


def format_income(value: float) -> str:
    return f"{value:.2f}"


def donation_row(donation: Donation) -> Row:
    return Row(
        record_id=donation.id,
        cells=(
            str(donation.coins),
            pretty_date(donation.donated_at),
            format_income(donation.income_eur),
            donation.co_op,
        ),
    )


def supporter_row(view: SupporterView) -> Row:
    if not view.resolved:
        return Row(
            record_id=view.id,
            cells=(view.name, UNAVAILABLE_TEXT, UNAVAILABLE_TEXT, UNAVAILABLE_TEXT),
            resolved=False,
        )
    return Row(
        record_id=view.id,
        cells=(view.name, pretty_date(view.donated_at), format_income(view.income_eur), view.co_op),
    )


class TableSync:
    def __init__(self, client: ResourceClient, consistency: Optional[ConsistencyManager] = None):
        self.client = client
        self.consistency = consistency or ConsistencyManager(client)
        self.views: Dict[ResourceKind, TableView] = {kind: TableView(kind) for kind in ResourceKind}
        self._generation: Dict[ResourceKind, int] = {kind: 0 for kind in ResourceKind}

    async def _load_rows(self, kind: ResourceKind) -> List[Row]:
        if kind is ResourceKind.SUPPORTERS:
            views = await self.consistency.load_supporter_views()
            return [supporter_row(v) for v in views]
        donations = await self.client.list(ResourceKind.DONATIONS)
        return [donation_row(d) for d in donations]

    async def refresh(self, kind: ResourceKind) -> TableView:
        self._generation[kind] += 1
        generation = self._generation[kind]
        view = self.views[kind]
        view.show_placeholder(TableState.LOADING, LOADING_TEXT)

        try:
            rows = await self._load_rows(kind)
        except FetchError as e:
            if generation != self._generation[kind]:
                logger.debug("Dropping failed %s refresh %d, superseded", kind.path, generation)
                return view
            logger.warning("Could not refresh %s: %s", kind.path, e)
            if is_connectivity_failure(e):
                view.show_placeholder(TableState.OFFLINE, CONNECTION_ERROR_TEXT)
            else:
                view.show_placeholder(TableState.ERROR, LOAD_ERROR_TEXT)
            return view

        if generation != self._generation[kind]:
            logger.debug("Dropping %s refresh %d, superseded", kind.path, generation)
            return view
        if rows:
            view.show_rows(rows)
        else:
            view.show_placeholder(TableState.EMPTY, EMPTY_TEXT[kind])
        logger.info("Rendered %d %s", len(rows), kind.path)
        return view

    async def refresh_all(self) -> None:
        await self.refresh(ResourceKind.DONATIONS)
        await self.refresh(ResourceKind.SUPPORTERS)
