"""
Entry Models for Personal Finance Tracker

An Entry is the only persisted entity: one recorded income or
expense. Everything else the tracker shows is derived from the
list of entries.

The persisted layout is fixed:
    {"id", "type": "gasto"|"ingreso", "category", "amount",
     "date": "yyyy-MM-dd", "description"?}

DESIGN DECISION: Entries are immutable once created.
There is no edit operation, only add and delete.
"""

import datetime
import math
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """
    Whether an entry is money going out or coming in.

    The values are the wire values of the persisted blob.
    """
    EXPENSE = "gasto"
    INCOME = "ingreso"

    @property
    def label(self) -> str:
        """Human readable name."""
        return "Gasto" if self is EntryKind.EXPENSE else "Ingreso"


# Offered by the add-entry form. Stored categories are NOT checked
# against these lists.
SUGGESTED_CATEGORIES: dict[EntryKind, tuple[str, ...]] = {
    EntryKind.EXPENSE: (
        "Carne",
        "Agua",
        "Gas",
        "Salarios",
        "Insumos",
        "Transporte",
        "Servicios",
        "Refresco",
        "Otros",
    ),
    EntryKind.INCOME: (
        "Efectivo",
        "Transferencia",
        "Ventas",
        "Servicios",
        "Otros",
    ),
}


# =============================================================================
# CORE ENTRY MODEL
# =============================================================================

class Entry(BaseModel):
    """
    A single recorded financial transaction.

    `kind` is exposed under the wire name `type` when dumped with
    `by_alias=True`, which is how the entry store and the exporter
    serialize it.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Timestamp based identifier, unique within a session"
    )
    kind: EntryKind = Field(
        ...,
        alias="type",
        description="Expense or income"
    )
    category: str = Field(
        ...,
        description="Free text category label"
    )
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Unit-less amount (sign is not enforced)"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar day of the entry"
    )
    description: Optional[str] = Field(
        default=None,
        description="Optional free text note"
    )

    @property
    def date_key(self) -> str:
        """The yyyy-MM-dd string entries are grouped by."""
        return self.date.isoformat()

    @property
    def is_income(self) -> bool:
        return self.kind is EntryKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind is EntryKind.EXPENSE

    def to_record(self) -> dict:
        """Convert to the persisted JSON-compatible layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Validates a whole persisted blob in one go
ENTRY_LIST_ADAPTER = TypeAdapter(list[Entry])


# =============================================================================
# FORM INPUT
# =============================================================================

class EntryDraft(BaseModel):
    """
    Raw values of the add-entry form.

    Amount is kept as text so that an empty field can be told apart
    from a zero.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    kind: EntryKind = EntryKind.EXPENSE
    category: str = ""
    amount: str = ""
    date: datetime.date = Field(default_factory=datetime.date.today)
    description: str = ""

    def parse_amount(self) -> Optional[float]:
        """
        Parse the amount text as a float.

        Returns None when the text is not a number or is not finite.
        Negative amounts are accepted as typed.
        """
        try:
            value = float(self.amount)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return value

    def is_complete(self) -> bool:
        """The form only submits when category and amount are filled in."""
        return bool(self.category) and bool(self.amount)

    def to_entry(self, entry_id: str) -> Optional[Entry]:
        """
        Build the Entry this draft describes.

        Returns None (nothing to add) when category or amount is
        empty, or when the amount cannot be parsed.
        """
        if not self.is_complete():
            return None

        amount = self.parse_amount()
        if amount is None:
            return None

        return Entry(
            id=entry_id,
            kind=self.kind,
            category=self.category,
            amount=amount,
            date=self.date,
            description=self.description or None,
        )
