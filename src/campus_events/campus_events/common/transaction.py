from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable

# Factory of a unit of work: ``with transaction(): ...`` commits on success and
# rolls back when the block raises. DatabaseConnection.transaction in production.
Transaction = Callable[[], AbstractContextManager]
