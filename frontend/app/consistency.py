"""
Keeps the supporter -> donation link intact across separate API calls.

The backend has no cross-resource transaction, so creating a supporter is a
two step sequence (donation first, then the supporter that points at it).
Each step fails with its own error type. A failed second step leaves the
donation behind; it is reported, not rolled back.
"""
import logging
from typing import Dict, Iterable, List

from . import config
from .api_client import ResourceClient, ResourceKind
from .errors import (
    ClientError,
    DonationCreateFailed,
    SupporterCreateFailed,
    SupporterFetchFailed,
)
from .schemas import Donation, DonationPayload, Supporter, SupporterPayload, SupporterView

logger = logging.getLogger(__name__)


class ConsistencyManager:
    def __init__(self, client: ResourceClient, co_op: str = config.CO_OP):
        self.client = client
        self.co_op = co_op

    async def create_supporter_with_donation(self, name: str, income_eur: float) -> Supporter:
        donation_payload = DonationPayload(coins=0, income_eur=income_eur, co_op=self.co_op)
        try:
            donation = await self.client.create(ResourceKind.DONATIONS, donation_payload)
        except ClientError as e:
            raise DonationCreateFailed(e) from e
        logger.debug("Created backing donation %s for %r", donation.id, name)

        try:
            supporter = await self.client.create(
                ResourceKind.SUPPORTERS, SupporterPayload(name=name, donation_id=donation.id)
            )
        except ClientError as e:
            logger.warning("Donation %s is orphaned: supporter %r was not created (%s)", donation.id, name, e)
            raise SupporterCreateFailed(donation, e) from e

        logger.info("Created supporter %s with donation %s", supporter.id, donation.id)
        return supporter

    async def update_supporter(self, supporter_id: int, name: str) -> Supporter:
        """Rename a supporter, resending the donation_id the server has now"""
        try:
            current = await self.client.get(ResourceKind.SUPPORTERS, supporter_id)
        except ClientError as e:
            raise SupporterFetchFailed(e) from e

        supporter = await self.client.update(
            ResourceKind.SUPPORTERS,
            supporter_id,
            SupporterPayload(name=name, donation_id=current.donation_id),
        )
        logger.info("Updated supporter %s", supporter_id)
        return supporter

    async def load_supporter_views(self) -> List[SupporterView]:
        donations = await self.client.list(ResourceKind.DONATIONS)
        supporters = await self.client.list(ResourceKind.SUPPORTERS)
        return join_supporters_with_donations(donations, supporters)


def join_supporters_with_donations(donations: Iterable[Donation],
                                   supporters: Iterable[Supporter]) -> List[SupporterView]:
    by_id: Dict[int, Donation] = {d.id: d for d in donations}
    views = []
    for supporter in supporters:
        donation = by_id.get(supporter.donation_id)
        if donation is None:
            logger.warning("Supporter %s references missing donation %s", supporter.id, supporter.donation_id)
            views.append(SupporterView(
                id=supporter.id,
                name=supporter.name,
                donation_id=supporter.donation_id,
                resolved=False,
            ))
            continue
        views.append(SupporterView(
            id=supporter.id,
            name=supporter.name,
            donation_id=supporter.donation_id,
            donated_at=donation.donated_at,
            income_eur=donation.income_eur,
            co_op=donation.co_op,
        ))
    return views
