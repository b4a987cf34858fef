"""
TransferLicenseCommand.

Command to move a license to the calling recipient.
"""
from dataclasses import dataclass


@dataclass
class TransferLicenseCommand:
    """Command to transfer a license; caller must be the recipient."""

    caller: str
    license_id: int
    from_holder: str
    to_holder: str
