"""
BatchGrantLicensesCommand.

Command to issue several licenses in one call.
"""
from dataclasses import dataclass
from typing import List


@dataclass
class BatchGrantLicensesCommand:
    """
    Command to issue one license per metadata entry.

    Issuance is best-effort: entries that fail once issuance has started
    are skipped rather than aborting the batch.
    """

    caller: str
    metadatas: List[str]
