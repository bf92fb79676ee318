"""
models/department.py
--------------------
Domain model for departments.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Department:
    """
    A department sellers belong to.

    Attributes:
        name: Department name. Left as None only when the object is a
            lookup key by id, e.g. for SellerRepository.find_by_department;
            such a department cannot be inserted or updated.
        id: Database primary key (None until inserted).
    """
    name: Optional[str] = None
    id: Optional[int] = None

    def is_persisted(self) -> bool:
        """Returns True once the store has assigned an id."""
        return self.id is not None

    def __str__(self) -> str:
        return f"Department [id={self.id}, name={self.name}]"
