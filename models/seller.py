"""
models/seller.py
----------------
Domain model for sellers.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.department import Department


@dataclass
class Seller:
    """
    A seller and the department it works in.

    Attributes:
        name: Full name.
        email: Contact e-mail.
        birth_date: Date of birth.
        base_salary: Monthly base salary.
        department: Snapshot of the owning department as read from the store.
        id: Database primary key (None until inserted).
    """
    name: str
    email: str
    birth_date: date
    base_salary: float
    department: Optional[Department] = None
    id: Optional[int] = None

    def is_persisted(self) -> bool:
        """Returns True once the store has assigned an id."""
        return self.id is not None

    def __str__(self) -> str:
        return (
            f"Seller [id={self.id}, name={self.name}, email={self.email}, "
            f"birth_date={self.birth_date}, base_salary={self.base_salary:.2f}, "
            f"department={self.department}]"
        )
