"""
Donations / supporters page: wires the API client, tables, forms, session
and health probe together.

Run ``python -m frontend.app.dashboard`` to print both tables once.
"""
import asyncio
import logging
from typing import Callable, Optional

from .api_client import ResourceClient, ResourceKind
from .consistency import ConsistencyManager
from .forms import DonationForm, SupporterForm
from .health import HealthMonitor
from .session import SessionClient
from .tables import TableSync

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


class Dashboard:
    def __init__(self, client: Optional[ResourceClient] = None,
                 confirm: Optional[Callable[[str], bool]] = None,
                 alert: Optional[Callable[[str], None]] = None):
        self.client = client or ResourceClient()
        self.consistency = ConsistencyManager(self.client)
        self.tables = TableSync(self.client, self.consistency)
        self.donation_form = DonationForm(self.client, self.tables, confirm=confirm, alert=alert)
        self.supporter_form = SupporterForm(self.client, self.tables, self.consistency,
                                            confirm=confirm, alert=alert)
        self.session = SessionClient(self.client, alert=alert)
        self.health = HealthMonitor(self.client)

    async def open(self, path: str = "/") -> Optional[str]:
        """Load the page; returns a login redirect instead when signed out"""
        self.health.start()
        redirect = await self.session.redirect_if_logged_out(path)
        if redirect:
            logger.info("Not signed in, redirecting to %s", redirect)
            return redirect
        await self.session.update_auth_ui()
        await self.tables.refresh_all()
        return None

    async def close(self) -> None:
        await self.health.stop()
        await self.client.aclose()


def render_text(tables: TableSync) -> str:
    lines = []
    for kind in ResourceKind:
        view = tables.views[kind]
        lines.append(f"== {kind.path}")
        if view.placeholder is not None:
            lines.append(view.placeholder)
            continue
        for row in view.rows:
            lines.append(f"{row.record_id}\t" + "\t".join(row.cells))
    return "\n".join(lines)


async def _snapshot() -> None:
    dashboard = Dashboard()
    try:
        await dashboard.health.check()
        print(dashboard.health.status)
        await dashboard.tables.refresh_all()
        print(render_text(dashboard.tables))
    finally:
        await dashboard.close()


if __name__ == '__main__':
    configure_logging()
    asyncio.run(_snapshot())
