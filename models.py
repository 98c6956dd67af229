from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Submission:
    name: str
    email: str
    message: str
    phone: Optional[str] = None


@dataclass(frozen=True)
class EscapedSubmission:
    """HTML-safe rendition of a Submission, used only for the HTML email body."""

    name: str
    email: str
    phone: str
    message: str


@dataclass(frozen=True)
class SheetRow:
    """One lead register row.

    StoreName and Revenue are filled in by the studio by hand, so they are
    always written empty here.
    """

    serial: int
    name: str
    phone: str
    email: str
    status: str
    reason: str
    store_name: str = ""
    revenue: str = ""

    def to_values(self) -> List[object]:
        return [
            self.serial,
            self.name,
            self.phone,
            self.email,
            self.store_name,
            self.status,
            self.reason,
            self.revenue,
        ]
