"""
Request parameters and form encoding

Every params model appends its fields to a form body, an ordered list of
(key, value) pairs. The same body is sent as the query string on GET and as
the url-encoded request body on POST.
"""

from typing import Optional, Dict, List, Tuple, Iterator
from pydantic import BaseModel, ConfigDict, Field, field_validator

QueryBody = List[Tuple[str, str]]


def _encode_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append_metadata(body: QueryBody, metadata: Optional[Dict[str, str]]) -> None:
    for key, value in (metadata or {}).items():
        body.append((f"metadata[{key}]", _encode_value(value)))


class Filter:
    """A single (key, op, value) query filter"""

    __slots__ = ("key", "op", "value")

    def __init__(self, key: str, op: str, value: str):
        self.key = key
        self.op = op
        self.value = value

    @property
    def param(self) -> str:
        return f"{self.key}[{self.op}]" if self.op else self.key

    def __eq__(self, other) -> bool:
        if not isinstance(other, Filter):
            return NotImplemented
        return (self.key, self.op, self.value) == (other.key, other.op, other.value)

    def __repr__(self) -> str:
        return f"Filter({self.key!r}, {self.op!r}, {self.value!r})"


class Filters:
    """
    Ordered collection of query filters

    Insertion order is kept and the same key may appear more than once,
    so cumulative filters such as ``include[]`` render as repeated params.

    Example:
        >>> filters = Filters()
        >>> filters.add_filter("include[]", "", "total_count")
        >>> filters.add_filter("created", "gte", "1400000000")
        >>> body = []
        >>> filters.append_to(body)
        >>> body
        [('include[]', 'total_count'), ('created[gte]', '1400000000')]
    """

    def __init__(self, filters: Optional[List[Filter]] = None):
        self.f: List[Filter] = list(filters or [])

    def add_filter(self, key: str, op: str, value) -> None:
        self.f.append(Filter(key, op, _encode_value(value)))

    def set_filter(self, key: str, op: str, value) -> None:
        """Replace every filter matching key/op with a single one, appending if absent"""
        value = _encode_value(value)
        kept: List[Filter] = []
        replaced = False
        for flt in self.f:
            if flt.key == key and flt.op == op:
                if not replaced:
                    kept.append(Filter(key, op, value))
                    replaced = True
                continue
            kept.append(flt)
        if not replaced:
            kept.append(Filter(key, op, value))
        self.f = kept

    def get(self, key: str, op: str = "") -> Optional[str]:
        """Return the last value set for key/op"""
        for flt in reversed(self.f):
            if flt.key == key and flt.op == op:
                return flt.value
        return None

    def append_to(self, body: QueryBody) -> None:
        for flt in self.f:
            body.append((flt.param, flt.value))

    def copy(self) -> "Filters":
        return Filters([Filter(f.key, f.op, f.value) for f in self.f])

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.f)

    def __len__(self) -> int:
        return len(self.f)


class ListParams(BaseModel):
    """Shared parameters for list endpoints"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    filters: Filters = Field(default_factory=Filters, description="Ordered query filters")
    single: bool = Field(False, description="Fetch only the first page")

    def append_to(self, body: QueryBody) -> None:
        self.filters.append_to(body)


class ChargeListParams(ListParams):
    """List charges request"""

    customer: Optional[str] = Field(None, description="Only return charges for this customer")

    def append_to(self, body: QueryBody) -> None:
        if self.customer:
            body.append(("customer", self.customer))
        super().append_to(body)


class RefundListParams(ListParams):
    """List refunds request"""

    charge: str = Field(..., description="Charge whose refunds are listed")


class CardParams(BaseModel):
    """Card details or a card token"""

    token: Optional[str] = None
    number: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None
    cvc: Optional[str] = None
    name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None

    def append_to(self, body: QueryBody) -> None:
        if self.token:
            body.append(("card", self.token))
            return

        fields = (
            ("number", self.number),
            ("exp_month", self.month),
            ("exp_year", self.year),
            ("cvc", self.cvc),
            ("name", self.name),
            ("address_line1", self.address1),
            ("address_line2", self.address2),
            ("address_city", self.city),
            ("address_state", self.state),
            ("address_zip", self.zip),
            ("address_country", self.country),
        )
        for key, value in fields:
            if value:
                body.append((f"card[{key}]", value))


class ChargeParams(BaseModel):
    """Create or update charge request"""

    amount: Optional[int] = Field(None, description="Amount in the smallest currency unit")
    currency: Optional[str] = Field(None, description="ISO currency code (e.g., usd)")
    customer: Optional[str] = Field(None, description="Customer ID")
    token: Optional[str] = Field(None, description="Card token")
    card: Optional[CardParams] = Field(None, description="Card details")
    description: Optional[str] = Field(None, description="Charge description")
    statement: Optional[str] = Field(None, description="Statement descriptor")
    email: Optional[str] = Field(None, description="Receipt email")
    no_capture: bool = Field(False, description="Authorize only, capture later")
    fee: Optional[int] = Field(None, description="Application fee")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Custom metadata")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Amount must be positive")
        return v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        if v is not None and len(v) != 3:
            raise ValueError("Currency must be 3-letter ISO code")
        return v.lower() if v else v

    def append_to(self, body: QueryBody) -> None:
        if self.amount is not None:
            body.append(("amount", _encode_value(self.amount)))
        if self.currency:
            body.append(("currency", self.currency))
        if self.customer:
            body.append(("customer", self.customer))
        if self.token:
            body.append(("card", self.token))
        elif self.card is not None:
            self.card.append_to(body)
        if self.description:
            body.append(("description", self.description))
        if self.statement:
            body.append(("statement_description", self.statement))
        if self.email:
            body.append(("receipt_email", self.email))
        if self.no_capture:
            body.append(("capture", _encode_value(False)))
        if self.fee is not None:
            body.append(("application_fee", _encode_value(self.fee)))
        _append_metadata(body, self.metadata)


class CaptureParams(BaseModel):
    """Capture charge request"""

    amount: Optional[int] = Field(None, description="Amount to capture (partial capture)")
    fee: Optional[int] = Field(None, description="Application fee")
    email: Optional[str] = Field(None, description="Receipt email")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Amount must be positive")
        return v

    def append_to(self, body: QueryBody) -> None:
        if self.amount is not None:
            body.append(("amount", _encode_value(self.amount)))
        if self.fee is not None:
            body.append(("application_fee", _encode_value(self.fee)))
        if self.email:
            body.append(("receipt_email", self.email))


class RefundParams(BaseModel):
    """Create, retrieve or update refund request"""

    charge: str = Field(..., description="Charge ID the refund belongs to")
    amount: Optional[int] = Field(None, description="Refund amount (partial refund if specified)")
    refund_fee: bool = Field(False, description="Also refund the application fee")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Custom metadata")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Amount must be positive")
        return v

    def append_to(self, body: QueryBody) -> None:
        # charge is a path component
        if self.amount is not None:
            body.append(("amount", _encode_value(self.amount)))
        if self.refund_fee:
            body.append(("refund_application_fee", _encode_value(True)))
        _append_metadata(body, self.metadata)
