"""
Database utilities and transaction management.
"""

import contextlib
from typing import Iterator, Optional

from django.db import transaction
from django.db.models import QuerySet


@contextlib.contextmanager
def atomic_operation(using: Optional[str] = None) -> Iterator[None]:
    """
    Run a registry operation as one database unit of work.

    Nested calls become savepoints, so an inner failure rolls back
    only the inner block.

    Usage:
        with atomic_operation():
            # Database operations
            pass
    """
    with transaction.atomic(using=using):
        yield


def lock_rows(queryset: QuerySet) -> QuerySet:
    """
    Lock the rows of a queryset for the rest of the current transaction.

    Outside a transaction the queryset is returned unchanged.
    """
    if transaction.get_connection(queryset.db).in_atomic_block:
        return queryset.select_for_update()
    return queryset
