"""
Extraction Models - Data classes for candidates, passengers and ticket records
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Candidate:
    """Result of one extraction strategy, consumed by the cascade."""
    value: Any
    tier: int
    line_index: int = -1
    strategy: str = ''


@dataclass
class Passenger:
    """One row of the passenger table."""
    seq: str
    name: str
    age: str = ''
    gender: str = ''
    status: str = ''
    seat: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {
            'seq': self.seq,
            'name': self.name,
            'age': self.age,
            'gender': self.gender,
            'status': self.status,
            'seat': self.seat,
        }


# Scalar record fields in output order
SCALAR_FIELDS = (
    'pnr', 'train_no', 'train_name', 'from_station', 'to_station', 'from_code', 'to_code',
    'travel_class', 'quota', 'date_of_journey', 'departure_time', 'arrival', 'distance',
    'fare', 'booking_date', 'transaction_id', 'status',
)


@dataclass
class TicketRecord:
    """Structured ticket assembled from every field extractor."""
    pnr: Optional[str] = None
    train_no: Optional[str] = None
    train_name: Optional[str] = None
    from_station: Optional[str] = None
    to_station: Optional[str] = None
    from_code: Optional[str] = None
    to_code: Optional[str] = None
    travel_class: Optional[str] = None
    quota: Optional[str] = None
    date_of_journey: Optional[str] = None
    departure_time: Optional[str] = None
    arrival: Optional[str] = None
    distance: Optional[str] = None
    fare: Optional[str] = None
    booking_date: Optional[str] = None
    transaction_id: Optional[str] = None
    status: Optional[str] = None
    passengers: List[Passenger] = field(default_factory=list)
    record_id: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def train(self) -> Optional[str]:
        """Combined ``NNNNN/NAME`` form, as printed on the ticket."""
        if self.train_no and self.train_name:
            return f"{self.train_no}/{self.train_name}"
        return self.train_no

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict, omitting absent fields."""
        data = {}
        if self.record_id:
            data['_id'] = self.record_id
        for name in SCALAR_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        data['passengers'] = [passenger.to_dict() for passenger in self.passengers]
        data['_meta'] = dict(self.meta)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TicketRecord':
        kwargs = {name: data.get(name) for name in SCALAR_FIELDS}
        return cls(
            passengers=[Passenger(**p) for p in data.get('passengers', [])],
            record_id=data.get('_id'),
            meta=dict(data.get('_meta', {})),
            **kwargs
        )
