"""
Create/edit forms for donations and supporters.

A form is either in Create mode or in Edit(record_id) mode and only moves
between them through edit(), cancel() and a successful submit(). Input is
coerced before any request goes out; server failures keep the current mode
and show the server's text.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from . import config
from .api_client import ResourceClient, ResourceKind
from .consistency import ConsistencyManager
from .errors import (
    CONNECTION_TEXT,
    ClientError,
    SupporterCreateFailed,
    ValidationError,
    is_connectivity_failure,
)
from .schemas import DonationPayload
from .tables import TableSync

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Create:
    pass


@dataclass(frozen=True)
class Edit:
    record_id: int


FormMode = Union[Create, Edit]
CREATE = Create()


@dataclass
class FormField:
    value: str = ""
    hidden: bool = False
    disabled: bool = False
    required: bool = True


def describe_failure(error: ClientError) -> str:
    """User facing text for a failed write"""
    if isinstance(error, SupporterCreateFailed):
        return f"Donation {error.donation.id} was created but the supporter was not ❌: {error.text}"
    if is_connectivity_failure(error):
        return f"{CONNECTION_TEXT} ❌"
    return f"Failed ❌: {error.text}"


def coerce_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationError(name, "must be a whole number") from None
    if value < 0:
        raise ValidationError(name, "must not be negative")
    return value


def coerce_amount(name: str, raw: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError:
        raise ValidationError(name, "must be a number") from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError(name, "must be a non-negative amount")
    return value


def _always_confirm(message: str) -> bool:
    return True


class ResourceForm:
    kind: ResourceKind
    field_names = ()
    headings = {"create": "", "edit": ""}
    submit_labels = {"create": "", "edit": ""}

    def __init__(self, client: ResourceClient, tables: TableSync,
                 confirm: Optional[Callable[[str], bool]] = None,
                 alert: Optional[Callable[[str], None]] = None):
        self.client = client
        self.tables = tables
        self._confirm = confirm or _always_confirm
        self._alert = alert or logger.info
        self.mode: FormMode = CREATE
        self.status = ""
        self.fields: Dict[str, FormField] = {}
        self._clear_fields()

    @property
    def _mode_key(self) -> str:
        return "edit" if isinstance(self.mode, Edit) else "create"

    @property
    def heading(self) -> str:
        return self.headings[self._mode_key]

    @property
    def submit_label(self) -> str:
        return self.submit_labels[self._mode_key]

    @property
    def cancel_visible(self) -> bool:
        return isinstance(self.mode, Edit)

    def set_field(self, name: str, value) -> None:
        self.fields[name].value = str(value)

    def _clear_fields(self) -> None:
        self.fields = {name: FormField() for name in self.field_names}
        self.mode = CREATE

    def cancel(self) -> None:
        self._clear_fields()
        self.status = ""

    def edit(self, record_id: int) -> None:
        """Switch to Edit mode, filling fields from the displayed row"""
        row = self.tables.views[self.kind].find_row(record_id)
        if row is None:
            raise KeyError(f"no {self.kind.singular} row with id {record_id}")
        self._clear_fields()
        self.mode = Edit(record_id)
        self._populate(row.cells)
        self.status = ""

    def _populate(self, cells) -> None:
        raise NotImplementedError

    def validate(self) -> dict:
        raise NotImplementedError

    async def _dispatch(self, values: dict) -> None:
        raise NotImplementedError

    async def submit(self) -> bool:
        try:
            values = self.validate()
        except ValidationError as e:
            self.status = f"Invalid input ❌: {e}"
            return False

        updating = isinstance(self.mode, Edit)
        try:
            await self._dispatch(values)
        except ClientError as e:
            logger.warning("%s %s failed: %s", self.kind.singular, "update" if updating else "create", e)
            self.status = describe_failure(e)
            return False

        self._clear_fields()
        noun = self.kind.singular.capitalize()
        self.status = f"{noun} updated ✅" if updating else f"{noun} added ✅"
        await self.tables.refresh_all()
        return True

    async def delete(self, record_id: int) -> bool:
        if not self._confirm(f"Are you sure you want to delete this {self.kind.singular}?"):
            return False
        try:
            await self.client.delete(self.kind, record_id)
        except ClientError as e:
            logger.warning("Deleting %s %s failed: %s", self.kind.singular, record_id, e)
            self._alert(f"{CONNECTION_TEXT} ❌" if is_connectivity_failure(e) else e.text)
            return False
        self._alert(f"{self.kind.singular.capitalize()} deleted ✅")
        await self.tables.refresh_all()
        return True


class DonationForm(ResourceForm):
    kind = ResourceKind.DONATIONS
    field_names = ("coins", "income_eur")
    headings = {"create": "Add a new donation", "edit": "Update a donation"}
    submit_labels = {"create": "Add Donation", "edit": "Update Donation"}

    def _populate(self, cells) -> None:
        self.fields["coins"].value = cells[0]
        self.fields["income_eur"].value = cells[2]

    def validate(self) -> dict:
        return {
            "coins": coerce_int("coins", self.fields["coins"].value),
            "income_eur": coerce_amount("income_eur", self.fields["income_eur"].value),
        }

    async def _dispatch(self, values: dict) -> None:
        payload = DonationPayload(co_op=config.CO_OP, **values)
        if isinstance(self.mode, Edit):
            await self.client.update(self.kind, self.mode.record_id, payload)
        else:
            await self.client.create(self.kind, payload)


class SupporterForm(ResourceForm):
    kind = ResourceKind.SUPPORTERS
    field_names = ("name", "income_eur")
    headings = {"create": "Add a new supporter", "edit": "Update a supporter"}
    submit_labels = {"create": "Add Supporter", "edit": "Update Supporter"}

    def __init__(self, client: ResourceClient, tables: TableSync,
                 consistency: Optional[ConsistencyManager] = None, **kwargs):
        self.consistency = consistency or tables.consistency
        super().__init__(client, tables, **kwargs)

    def _populate(self, cells) -> None:
        self.fields["name"].value = cells[0]
        # income belongs to the donation and is not edited from here
        income = self.fields["income_eur"]
        income.hidden = True
        income.disabled = True
        income.required = False

    def validate(self) -> dict:
        name = self.fields["name"].value.strip()
        if not name:
            raise ValidationError("name", "must not be empty")
        values = {"name": name}
        if isinstance(self.mode, Create):
            values["income_eur"] = coerce_amount("income_eur", self.fields["income_eur"].value)
        return values

    async def _dispatch(self, values: dict) -> None:
        if isinstance(self.mode, Edit):
            await self.consistency.update_supporter(self.mode.record_id, values["name"])
        else:
            await self.consistency.create_supporter_with_donation(values["name"], values["income_eur"])
